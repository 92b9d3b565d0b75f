"""Body metrics — age, BMI and its JSON payload, plus the tz-aware "today"."""

from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

from app.config import settings
from app.person.errors import DegenerateMeasurementError
from app.person.models import BmiResponse

# Imperial BMI: weight in pounds, height in inches.
BMI_IMPERIAL_FACTOR = 703


def today(tz_name: str | None = None) -> date:
    return datetime.now(ZoneInfo(tz_name or settings.default_tz)).date()


def age(birth_date: date | None, on: date) -> int | None:
    """Whole calendar years between `birth_date` and `on`.

    A year only counts once the birthday has been reached in `on`'s year,
    so a Feb 29 birthday turns over on Mar 1 in non-leap years.
    Returns None if no birth date is on record.
    """
    if birth_date is None:
        return None
    years = on.year - birth_date.year
    if (on.month, on.day) < (birth_date.month, birth_date.day):
        years -= 1
    return years


def bmi(height: float, weight: float) -> float:
    """703 * weight / height². Raises DegenerateMeasurementError for height <= 0."""
    if height <= 0:
        raise DegenerateMeasurementError(f"Height must be positive for BMI, got {height}")
    return BMI_IMPERIAL_FACTOR * weight / height**2


def bmi_to_string(height: float, weight: float) -> str:
    return BmiResponse(bmi=bmi(height, weight)).model_dump_json()
