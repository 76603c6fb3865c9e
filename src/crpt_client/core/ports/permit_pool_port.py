from __future__ import annotations

from typing import Protocol

from ..domain.models import Permit


class PermitPoolPort(Protocol):
    def acquire(self, timeout: float | None = None) -> Permit:
        """Block until a permit is granted (FCFS) and return it."""
        ...

    def release(self, permit: Permit) -> None:
        """Return a permit so the next waiter can proceed immediately."""

    def shutdown(self) -> None:
        """Stop replenishment and reject further acquisitions."""
