"""Runtime settings. Read once from the environment at import time."""

import logging
import os

FRAME_RATE = float(os.getenv("CHESS3D_FRAME_RATE", "60"))
LOG_LEVEL = os.getenv("CHESS3D_LOG_LEVEL", "WARNING")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int = LOG_LEVEL) -> None:
    """
    Install a basic handler on the root logger and set its level.

    Meant for applications embedding the engine. The library itself only creates loggers.
    NOTE: basicConfig is a no-op once the root logger has handlers, so the level is set explicitly as well.
    """
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
