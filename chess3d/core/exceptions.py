"""
Errors raised at the edges of the application.

NOTE: The reducer and the movement rules never raise. A rejected intent simply returns the unchanged state.
Faults only exist where untrusted data enters: decoding state text, validating requests and looking up sessions.
"""


class GameError(Exception):
    """Base class for everything this package raises on purpose."""


class StateDecodeError(GameError):
    """Text could not be turned into a GameState (not JSON, or not the expected shape)."""


class InvalidRequestError(GameError):
    """A boundary request failed validation."""


class SessionNotFoundError(GameError):
    """No session is registered under the requested id."""
