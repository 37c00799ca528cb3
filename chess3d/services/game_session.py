"""
A GameSession holds the current GameState of one game and tells observers (renderer, UI overlay, broadcaster) when it changes.

It owns no chess logic: every change goes through the reducer.
"""

import logging
from typing import Callable, Optional

from chess3d.chess.game_state import GameState
from chess3d.chess.intents import Intent
from chess3d.chess.reducer import apply_intent

logger = logging.getLogger(__name__)

StateObserver = Callable[[GameState], None]
Unsubscribe = Callable[[], None]


class GameSession:
    """One game, one current state."""

    def __init__(self, initial_state: Optional[GameState] = None) -> None:
        self._state = initial_state if initial_state is not None else GameState.initial()
        self._observers: list[StateObserver] = []

    @property
    def state(self) -> GameState:
        return self._state

    def get_state(self) -> GameState:
        return self._state

    def dispatch(self, intent: Intent) -> bool:
        """
        Apply the intent through the reducer.
        ----

        Observers are only notified when the state actually changed (by identity or by value).
        Returns True if the intent was accepted.
        """
        new_state = apply_intent(self._state, intent)
        if new_state is self._state or new_state == self._state:
            return False

        self._state = new_state
        self._notify_observers()
        return True

    def subscribe(self, observer: StateObserver) -> Unsubscribe:
        """The observer receives the current state right away, then every accepted change."""
        self._observers.append(observer)
        observer(self._state)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def load_state(self, state: GameState) -> None:
        """Replace the current state unconditionally (ex. a saved game or a state received from elsewhere)."""
        logger.info("Loading external state (turn %d)", state.turn_number)
        self._state = state
        self._notify_observers()

    def reset(self) -> None:
        logger.info("Resetting game")
        self._state = GameState.initial()
        self._notify_observers()

    def update(self, dt: float) -> None:
        """
        Per-frame hook, called by the GameLoop with the time since the previous frame (in seconds).

        The base session has nothing to animate. Subclasses can override for animations, timers, etc.
        """

    # -- Internal helpers --
    def _notify_observers(self) -> None:
        # copy: observers may unsubscribe while being notified
        for observer in list(self._observers):
            observer(self._state)
