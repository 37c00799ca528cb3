"""
Frame loop: calls `session.update(dt)` once per frame.

Runs as an asyncio task. Intents arrive independently of frames, so any number of state changes
(including none) may happen between two ticks.
"""

import asyncio
import logging
import time
from typing import Callable, Optional

from chess3d.core.config import FRAME_RATE
from chess3d.services.game_session import GameSession

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class GameLoop:
    def __init__(
        self,
        session: GameSession,
        frame_rate: float = FRAME_RATE,
        clock: Clock = time.perf_counter,
    ) -> None:
        if frame_rate <= 0:
            raise ValueError(f"frame_rate must be positive, got {frame_rate}")
        self.session = session
        self.frame_interval = 1.0 / frame_rate
        self._clock = clock
        self._last_time: Optional[float] = None
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task[None]:
        """Schedule the loop on the running event loop. Calling it again while running returns the same task."""
        if self._task is not None and not self._task.done():
            return self._task
        self._last_time = self._clock()
        self._task = asyncio.get_running_loop().create_task(self._run())
        self._task.add_done_callback(self._on_task_done)
        logger.debug("Game loop started at %.1f fps", 1.0 / self.frame_interval)
        return self._task

    def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        self._task = None
        logger.debug("Game loop stopped")

    def tick(self) -> float:
        """Run a single frame. Returns the delta time (in seconds) handed to the session."""
        now = self._clock()
        dt = 0.0 if self._last_time is None else now - self._last_time
        self._last_time = now
        self.session.update(dt)
        return dt

    def _on_task_done(self, task: asyncio.Task[None]) -> None:
        """Report a loop that died on an error. A cancelled loop was stopped on purpose."""
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Game loop stopped by an error in session.update", exc_info=error)

    async def _run(self) -> None:
        while True:
            self.tick()
            await asyncio.sleep(self.frame_interval)
