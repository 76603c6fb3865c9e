from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

from ..core.ports.ticker_port import TickerPort

logger = logging.getLogger(__name__)


class ThreadTicker(TickerPort):
    """Fixed-rate background timer running on one daemon thread.

    The first tick fires one interval after ``start``. Deadlines are computed
    on the monotonic clock from the start time, so a slow callback does not
    shift the schedule.

    Example:
        ticker = ThreadTicker()
        ticker.start(1.0, pool.replenish)
        ...
        ticker.stop()
    """

    def __init__(self, name: str = "crpt-permit-ticker") -> None:
        self._name = name
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self, interval: float, callback: Callable[[], None]) -> None:
        if self._thread is not None:
            raise RuntimeError("ThreadTicker already started")
        self._thread = threading.Thread(
            target=self._run,
            args=(interval, callback),
            name=self._name,
            daemon=True,
        )
        self._thread.start()
        logger.debug(f"Started ticker {self._name} with interval={interval}s")

    def _run(self, interval: float, callback: Callable[[], None]) -> None:
        next_at = time.monotonic() + interval
        while not self._stop.wait(max(0.0, next_at - time.monotonic())):
            try:
                callback()
            except Exception:
                logger.exception(f"Ticker {self._name} callback failed")
            next_at += interval
            # Missed deadlines are skipped, not replayed
            now = time.monotonic()
            if next_at < now:
                missed = int((now - next_at) // interval) + 1
                next_at += missed * interval

    def stop(self, timeout: float = 1.0) -> None:
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        logger.debug(f"Stopped ticker {self._name}")

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stop.is_set()
