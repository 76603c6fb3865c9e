from __future__ import annotations

import itertools
import logging
import math
import threading
from collections import deque
from contextlib import contextmanager
from typing import Iterator, Optional

from ..core.domain.errors import ConfigError, PermitTimeoutError, PoolClosedError
from ..core.domain.models import Permit
from ..core.ports.permit_pool_port import PermitPoolPort
from ..core.ports.ticker_port import TickerPort
from .ticker import ThreadTicker

logger = logging.getLogger(__name__)


class _Waiter:
    __slots__ = ("event", "permit")

    def __init__(self) -> None:
        self.event = threading.Event()
        self.permit: Optional[Permit] = None


class PermitPool(PermitPoolPort):
    """Fair counting pool of permits, reset to full capacity every window.

    At most ``capacity`` permits are outstanding at once. Released permits go
    straight to the longest-waiting caller. On every tick of the ticker a new
    window starts: all outstanding permits are reclaimed and availability is
    reset to ``capacity`` (reset, not refill), so the pool bounds calls per
    window rather than concurrent calls.

    Example:
        # 5 requests per second
        pool = PermitPool(capacity=5, window_seconds=1.0)
        with pool.permit():
            send()
        pool.shutdown()

        # Custom timer: any TickerPort; each tick calls pool.replenish()
        pool = PermitPool(capacity=1, window_seconds=1.0, ticker=my_ticker)
    """

    def __init__(
        self,
        capacity: int,
        window_seconds: float,
        *,
        ticker: TickerPort | None = None,
    ) -> None:
        """Create the pool and start its ticker.

        Args:
            capacity: Maximum permits per window (must be >= 1)
            window_seconds: Window length in seconds (finite, > 0)
            ticker: Timer driving replenishment. Defaults to a ThreadTicker.

        Raises:
            ConfigError: If capacity or window_seconds is out of range.
        """
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
            raise ConfigError(f"capacity must be a positive integer, got {capacity!r}")
        if (
            isinstance(window_seconds, bool)
            or not isinstance(window_seconds, (int, float))
            or not math.isfinite(window_seconds)
            or window_seconds <= 0
        ):
            raise ConfigError(f"window_seconds must be a positive finite number, got {window_seconds!r}")

        self._capacity = capacity
        self._window_seconds = float(window_seconds)
        self._lock = threading.Lock()
        self._available = capacity
        self._outstanding: set[Permit] = set()
        self._waiters: deque[_Waiter] = deque()
        self._window = 0
        self._serials = itertools.count(1)
        self._closed = False

        self._ticker = ticker if ticker is not None else ThreadTicker()
        self._ticker.start(self._window_seconds, self.replenish)
        logger.debug(f"PermitPool created: capacity={capacity}, window={self._window_seconds}s")

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def window_seconds(self) -> float:
        return self._window_seconds

    @property
    def available(self) -> int:
        with self._lock:
            return self._available

    @property
    def outstanding(self) -> int:
        with self._lock:
            return len(self._outstanding)

    @property
    def waiting(self) -> int:
        with self._lock:
            return len(self._waiters)

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def _issue(self) -> Permit:
        # caller holds self._lock
        self._available -= 1
        permit = Permit(serial=next(self._serials), window=self._window)
        self._outstanding.add(permit)
        return permit

    def _dispatch(self) -> None:
        # caller holds self._lock
        while self._available > 0 and self._waiters:
            waiter = self._waiters.popleft()
            waiter.permit = self._issue()
            waiter.event.set()

    def acquire(self, timeout: float | None = None) -> Permit:
        """Block until a permit is granted, serving waiters in arrival order.

        Args:
            timeout: Seconds to wait at most. None waits indefinitely.

        Raises:
            PoolClosedError: If the pool is (or gets) shut down.
            PermitTimeoutError: If no permit was granted within timeout.
        """
        with self._lock:
            if self._closed:
                raise PoolClosedError("PermitPool is shut down")
            if self._available > 0 and not self._waiters:
                return self._issue()
            waiter = _Waiter()
            self._waiters.append(waiter)
            logger.debug(f"Pool exhausted, queued waiter (waiting={len(self._waiters)})")

        waiter.event.wait(timeout)

        with self._lock:
            if waiter.permit is not None:
                # Granted, possibly racing with the timeout; the permit is kept.
                return waiter.permit
            if waiter in self._waiters:
                self._waiters.remove(waiter)
            if self._closed:
                raise PoolClosedError("PermitPool was shut down while waiting for a permit")
            raise PermitTimeoutError(f"No permit available within {timeout}s")

    def release(self, permit: Permit) -> None:
        """Return a permit; the next waiter (if any) gets it immediately.

        Releasing a permit that is not outstanding (already released, reclaimed
        by a window reset, or issued by another pool) has no effect.
        """
        with self._lock:
            if permit not in self._outstanding:
                logger.debug(f"Ignoring release of permit #{permit.serial} from window {permit.window}")
                return
            self._outstanding.discard(permit)
            self._available += 1
            self._dispatch()

    @contextmanager
    def permit(self, timeout: float | None = None) -> Iterator[Permit]:
        """Scoped acquisition: the permit is released when the block exits."""
        p = self.acquire(timeout)
        try:
            yield p
        finally:
            self.release(p)

    def replenish(self) -> None:
        """Start a new window: reclaim every outstanding permit and reset to capacity."""
        with self._lock:
            if self._closed:
                return
            reclaimed = len(self._outstanding)
            self._window += 1
            self._outstanding.clear()
            self._available = self._capacity
            self._dispatch()
            logger.debug(
                f"Window {self._window}: reclaimed {reclaimed} permits, "
                f"available={self._available}, waiting={len(self._waiters)}"
            )

    def shutdown(self) -> None:
        """Stop the ticker and reject pending and future acquisitions. Idempotent."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            waiters = list(self._waiters)
            self._waiters.clear()
        for waiter in waiters:
            waiter.event.set()
        self._ticker.stop()
        logger.debug(f"PermitPool shut down, rejected {len(waiters)} pending acquisitions")

    def __enter__(self) -> "PermitPool":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown()
