"""Retention sweeping of old files in the upload directory."""

import asyncio
import logging
import time
from pathlib import Path
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class SweepResult:
    """Result of one retention sweep."""

    def __init__(self, scanned: int = 0, removed: int = 0, errors: int = 0):
        self.scanned = scanned
        self.removed = removed
        self.errors = errors

    def __repr__(self) -> str:
        return f"SweepResult(scanned={self.scanned}, removed={self.removed}, errors={self.errors})"


def sweep_uploads(upload_dir: Path, max_age_seconds: float, now: Optional[float] = None) -> SweepResult:
    """Delete files in ``upload_dir`` last modified more than ``max_age_seconds`` ago.

    Never raises: a missing directory is a no-op and per-file stat or
    delete failures are counted and skipped.

    Args:
        upload_dir: Directory to sweep
        max_age_seconds: Age beyond which a file is removed
        now: Reference time as a POSIX timestamp, defaults to the current time

    Returns:
        SweepResult with counts
    """
    result = SweepResult()
    now = time.time() if now is None else now

    try:
        entries = list(upload_dir.iterdir())
    except OSError as e:
        logger.debug(f"Upload directory not readable, skipping sweep: {e}")
        return result

    for entry in entries:
        try:
            if not entry.is_file():
                continue
            result.scanned += 1
            if now - entry.stat().st_mtime > max_age_seconds:
                entry.unlink()
                result.removed += 1
        except OSError as e:
            result.errors += 1
            logger.debug(f"Sweep skipped {entry.name}: {e}")

    return result


class RetentionSweeper:
    """Runs ``sweep_uploads`` at startup and then on a fixed interval.

    The directory and age are read through callables on every run so
    configuration changes apply to the next sweep.
    """

    def __init__(
        self,
        get_upload_dir: Callable[[], Path],
        get_max_age_seconds: Callable[[], float],
        interval_seconds: float,
    ):
        self.get_upload_dir = get_upload_dir
        self.get_max_age_seconds = get_max_age_seconds
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> SweepResult:
        result = await asyncio.to_thread(
            sweep_uploads, self.get_upload_dir(), self.get_max_age_seconds()
        )
        if result.removed or result.errors:
            logger.info(f"Retention sweep finished: {result}")
        return result

    async def _loop(self) -> None:
        while True:
            try:
                await self.run_once()
            except Exception:
                logger.exception("Retention sweep failed")
            await asyncio.sleep(self.interval_seconds)

    def start(self) -> None:
        """Schedule the sweep loop on the running event loop."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._loop())
        logger.info(f"Retention sweeper started (every {self.interval_seconds:.0f}s)")

    async def stop(self) -> None:
        """Cancel the sweep loop and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Retention sweeper stopped")
