from __future__ import annotations

from typing import Callable, Protocol


class TickerPort(Protocol):
    def start(self, interval: float, callback: Callable[[], None]) -> None:
        """Invoke callback once per interval (seconds) until stopped."""

    def stop(self) -> None:
        """Cancel further ticks. Must be idempotent."""
