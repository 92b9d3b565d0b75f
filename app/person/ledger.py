"""Daily activity ledger — per-person DayKey → DayStats accumulation.

Stored as a two-level JSON mapping (the `person.stats` JSONB column):

    {
        "2022-11-13": {"steps": 8000, "calories": 2200}
    }

Recording only ever adds to a day; there is no subtraction or removal.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterator, Mapping

from app.person.errors import EmptyLedgerError, InvalidInputError


def parse_day_key(value: date | str) -> str:
    """Normalize a date or ISO date string to the `YYYY-MM-DD` ledger key."""
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()).isoformat()
        except ValueError:
            pass
    raise InvalidInputError(f"Invalid day key: {value!r}")


def _truncating_div(total: int, count: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(total) // count
    return q if total >= 0 else -q


@dataclass(frozen=True, slots=True)
class DayStats:
    steps: int = 0
    calories: int = 0

    def __add__(self, other: DayStats) -> DayStats:
        return DayStats(steps=self.steps + other.steps, calories=self.calories + other.calories)

    def to_dict(self) -> dict[str, int]:
        return {"steps": self.steps, "calories": self.calories}


class ActivityLedger:
    """Mapping of day key to accumulated steps/calories.

    Every access to the underlying dict goes through `_lock`, so concurrent
    `record_activity` calls on one instance never lose an increment.
    """

    def __init__(self, days: Mapping[str, DayStats] | None = None) -> None:
        self._days: dict[str, DayStats] = dict(days or {})
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def record_activity(self, day: str, steps: int, calories: int) -> None:
        """Add steps/calories to `day`, creating the entry on first use."""
        added = DayStats(steps=steps, calories=calories)
        with self._lock:
            existing = self._days.get(day)
            self._days[day] = added if existing is None else existing + added

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def get(self, day: str) -> DayStats | None:
        with self._lock:
            return self._days.get(day)

    def __contains__(self, day: object) -> bool:
        with self._lock:
            return day in self._days

    def __len__(self) -> int:
        return self.active_day_count()

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(sorted(self._days))

    # ------------------------------------------------------------------
    # Derived statistics
    # ------------------------------------------------------------------

    def active_day_count(self) -> int:
        with self._lock:
            return len(self._days)

    def total_steps(self) -> int:
        with self._lock:
            return sum(s.steps for s in self._days.values())

    def total_calories(self) -> int:
        with self._lock:
            return sum(s.calories for s in self._days.values())

    def average_steps(self) -> int:
        """Total steps divided by active days, truncated toward zero.

        Raises EmptyLedgerError when no day has been recorded.
        """
        with self._lock:
            count = len(self._days)
            if count == 0:
                raise EmptyLedgerError("No recorded days to average")
            total = sum(s.steps for s in self._days.values())
        return _truncating_div(total, count)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, dict[str, int]]:
        with self._lock:
            return {day: self._days[day].to_dict() for day in sorted(self._days)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> ActivityLedger:
        """Build a ledger from the stored two-level mapping.

        A missing inner field counts as 0; non-integer values raise
        InvalidInputError.
        """
        days: dict[str, DayStats] = {}
        for day, raw in (data or {}).items():
            if not isinstance(raw, Mapping):
                raise InvalidInputError(f"Stats for {day!r} must be an object")
            days[day] = DayStats(
                steps=_stored_int(raw, "steps", day),
                calories=_stored_int(raw, "calories", day),
            )
        return cls(days)


def _stored_int(raw: Mapping[str, Any], field: str, day: str) -> int:
    value = raw.get(field, 0)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"Stats field {field!r} for {day!r} must be an integer")
    return value
