"""Person profile contract — Pydantic v2 models."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, EmailStr, Field


class PersonCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
    name: str = Field(..., min_length=2, max_length=30, description="Name (2 to 30 chars)")
    dob: date | None = None
    height: int = Field(0, ge=0, description="inches")
    weight: int = Field(0, ge=0, description="pounds")


class ActivityIn(BaseModel):
    day: date = Field(..., description="YYYY-MM-DD")
    steps: int = Field(0, ge=0)
    calories: int = Field(0, ge=0)


class DayStatsOut(BaseModel):
    steps: int
    calories: int


class LedgerSummary(BaseModel):
    stats: dict[str, DayStatsOut] = Field(default_factory=dict)
    active_days: int = 0
    average_steps: int | None = None  # None when no day recorded
    total_steps: int = 0
    total_calories: int = 0


class PersonOut(LedgerSummary):
    id: int
    email: str
    name: str
    dob: date | None = None
    height: int = 0
    weight: int = 0
    age: int | None = None
    bmi: float | None = None  # None when height is 0


class BmiResponse(BaseModel):
    bmi: float
