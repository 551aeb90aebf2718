"""Synthetic progress estimate for long-running analysis requests.

The analysis backend gives no progress signal, so the UI shows a
clock-driven estimate instead: a fixed total duration split into equal
phases, advanced once per tick. The estimate has no causal link to the
real request. The orchestrator stops it as soon as the request settles,
and the request may still be running after the estimate has run out.
"""

import asyncio
import contextlib
import logging
import time
from collections.abc import Callable, Iterator, Sequence

from advisory.config import settings
from advisory.models import AnalysisProgress

logger = logging.getLogger(__name__)

PHASES: tuple[str, ...] = (
    "Analyzing company data...",
    "Processing market insights...",
    "Evaluating competitive landscape...",
    "Generating strategic recommendations...",
    "Finalizing comprehensive report...",
)

ProgressCallback = Callable[[AnalysisProgress | None], None]


def compute_progress(
    elapsed: float,
    total_seconds: float,
    phases: Sequence[str] = PHASES,
) -> AnalysisProgress:
    """Progress snapshot after ``elapsed`` seconds.

    percentage = min(elapsed / total * 100, 100)
    phase      = phases[min(floor(elapsed / (total / N)), N - 1)]
    remaining  = max(total - elapsed, 0)
    """
    if total_seconds <= 0:
        raise ValueError("total_seconds must be positive")
    if not phases:
        raise ValueError("phases must not be empty")

    elapsed = max(elapsed, 0.0)
    phase_length = total_seconds / len(phases)
    phase_index = min(int(elapsed // phase_length), len(phases) - 1)

    return AnalysisProgress(
        phase=phases[phase_index],
        percentage=min(elapsed / total_seconds * 100, 100.0),
        time_remaining=max(total_seconds - elapsed, 0.0),
    )


class ProgressTicker:
    """Handle for one running simulation.

    ``stop()`` is idempotent and safe to call after the ticker finished on
    its own.
    """

    def __init__(self) -> None:
        self.current: AnalysisProgress | None = None
        self.ticks = 0
        self._task: asyncio.Task[None] | None = None

    @property
    def done(self) -> bool:
        return self._task is None or self._task.done()

    def stop(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
            logger.debug("Progress ticker stopped after %d ticks", self.ticks)

    async def wait(self) -> None:
        """Wait until the ticker finishes or is stopped."""
        if self._task is None:
            return
        with contextlib.suppress(asyncio.CancelledError):
            await self._task


class ProgressSimulator:
    """Produces :class:`AnalysisProgress` snapshots on a fixed schedule.

    Args:
        total_seconds: Simulated duration. Defaults to settings (7 minutes).
        tick_seconds: Interval between snapshots. Defaults to settings (1 second).
        phases: Ordered phase labels, each covering an equal share of the duration.
        clock: Monotonic clock returning seconds.
    """

    def __init__(
        self,
        total_seconds: float | None = None,
        tick_seconds: float | None = None,
        phases: Sequence[str] = PHASES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.total_seconds = (
            total_seconds if total_seconds is not None else settings.progress_total_seconds
        )
        self.tick_seconds = (
            tick_seconds if tick_seconds is not None else settings.progress_tick_seconds
        )
        self.phases = tuple(phases)
        self._clock = clock

        if not self.phases:
            raise ValueError("phases must not be empty")
        if self.total_seconds <= 0 or self.tick_seconds <= 0:
            raise ValueError("total_seconds and tick_seconds must be positive")

    def start(self, on_update: ProgressCallback | None = None) -> ProgressTicker:
        """Start ticking on the running event loop.

        Publishes the first snapshot synchronously, then one per tick.
        When the duration elapses, publishes ``None`` and finishes.
        """
        ticker = ProgressTicker()
        started = self._clock()

        def publish(progress: AnalysisProgress | None) -> None:
            ticker.current = progress
            if on_update is not None:
                on_update(progress)

        publish(compute_progress(0.0, self.total_seconds, self.phases))
        ticker._task = asyncio.get_running_loop().create_task(
            self._run(ticker, started, publish)
        )
        logger.debug(
            "Progress ticker started: %.0fs over %d phases",
            self.total_seconds,
            len(self.phases),
        )
        return ticker

    def stop(self, ticker: ProgressTicker) -> None:
        ticker.stop()

    @contextlib.contextmanager
    def run(self, on_update: ProgressCallback | None = None) -> Iterator[ProgressTicker]:
        """Scoped ticker: stopped on every exit path."""
        ticker = self.start(on_update)
        try:
            yield ticker
        finally:
            ticker.stop()

    async def _run(
        self,
        ticker: ProgressTicker,
        started: float,
        publish: ProgressCallback,
    ) -> None:
        while True:
            await asyncio.sleep(self.tick_seconds)
            ticker.ticks += 1
            elapsed = self._clock() - started

            if elapsed >= self.total_seconds:
                publish(None)
                logger.info(
                    "Simulated analysis duration elapsed (%.0fs)", self.total_seconds
                )
                return

            publish(compute_progress(elapsed, self.total_seconds, self.phases))
