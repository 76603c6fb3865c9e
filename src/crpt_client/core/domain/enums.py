from __future__ import annotations

from enum import Enum


class TimeUnit(Enum):
    MILLISECONDS = "MILLISECONDS"
    SECONDS = "SECONDS"
    MINUTES = "MINUTES"
    HOURS = "HOURS"
    DAYS = "DAYS"

    @property
    def seconds(self) -> float:
        """Length of one unit in seconds (the throttle window)."""
        return _UNIT_SECONDS[self]

    @classmethod
    def from_str(cls, value: str) -> "TimeUnit":
        """Parse a unit name case-insensitively, accepting singular forms.

        - "second", "SECONDS", "Seconds" -> SECONDS
        - "ms" -> MILLISECONDS
        """
        s = value.strip().upper()
        if s == "MS":
            return cls.MILLISECONDS
        if not s.endswith("S"):
            s = s + "S"
        try:
            return cls(s)
        except ValueError:
            raise ValueError(f"Unknown time unit: {value!r}") from None


_UNIT_SECONDS = {
    TimeUnit.MILLISECONDS: 0.001,
    TimeUnit.SECONDS: 1.0,
    TimeUnit.MINUTES: 60.0,
    TimeUnit.HOURS: 3600.0,
    TimeUnit.DAYS: 86400.0,
}
