"""Response builders — storage rows plus ledger/metrics → response models.

Degenerate inputs (empty ledger, zero height, missing dob) become explicit
nulls here rather than errors.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from app.person import metrics
from app.person.errors import DegenerateMeasurementError, EmptyLedgerError
from app.person.ledger import ActivityLedger
from app.person.models import DayStatsOut, LedgerSummary, PersonOut


def _average_or_none(ledger: ActivityLedger) -> int | None:
    try:
        return ledger.average_steps()
    except EmptyLedgerError:
        return None


def _bmi_or_none(height: int, weight: int) -> float | None:
    try:
        return metrics.bmi(height, weight)
    except DegenerateMeasurementError:
        return None


def _summary_fields(ledger: ActivityLedger) -> dict[str, Any]:
    return {
        "stats": {day: DayStatsOut(**s) for day, s in ledger.to_dict().items()},
        "active_days": ledger.active_day_count(),
        "average_steps": _average_or_none(ledger),
        "total_steps": ledger.total_steps(),
        "total_calories": ledger.total_calories(),
    }


def build_ledger_summary(ledger: ActivityLedger) -> LedgerSummary:
    return LedgerSummary(**_summary_fields(ledger))


def build_person(row: dict[str, Any], on: date) -> PersonOut:
    """Build the profile response from a `person` row (see storage)."""
    ledger = ActivityLedger.from_dict(row.get("stats"))
    height = row.get("height") or 0
    weight = row.get("weight") or 0
    return PersonOut(
        id=row["id"],
        email=row["email"],
        name=row["name"],
        dob=row.get("dob"),
        height=height,
        weight=weight,
        age=metrics.age(row.get("dob"), on),
        bmi=_bmi_or_none(height, weight),
        **_summary_fields(ledger),
    )
