"""Person HTTP router — profiles, activity ledger, BMI."""

from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_session
from app.person import builders, metrics, storage
from app.person.errors import DegenerateMeasurementError, InvalidInputError
from app.person.ledger import ActivityLedger, parse_day_key
from app.person.models import ActivityIn, BmiResponse, LedgerSummary, PersonCreate, PersonOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/person", tags=["person"])


async def _get_or_404(session: AsyncSession, person_id: int) -> dict:
    row = await storage.fetch_person(session, person_id)
    if row is None:
        raise HTTPException(status_code=404, detail=f"Unknown person: {person_id}")
    return row


def _unreadable_stats(person_id: int, exc: InvalidInputError) -> HTTPException:
    logger.error("Stored stats for person id=%s are unreadable: %s", person_id, exc)
    return HTTPException(status_code=500, detail=f"Stored stats for person {person_id} are unreadable")


def _build_person(row: dict, on: date) -> PersonOut:
    try:
        return builders.build_person(row, on)
    except InvalidInputError as exc:
        raise _unreadable_stats(row["id"], exc)


# ---------------------------------------------------------------------------
# /person
# ---------------------------------------------------------------------------


@router.get("", response_model=list[PersonOut])
async def person_list(
    session: AsyncSession = Depends(get_session),
) -> list[PersonOut]:
    on = metrics.today()
    return [_build_person(row, on) for row in await storage.list_persons(session)]


@router.post("", response_model=PersonOut, status_code=201)
async def person_create(
    person: PersonCreate,
    session: AsyncSession = Depends(get_session),
) -> PersonOut:
    if await storage.email_exists(session, person.email):
        raise HTTPException(status_code=409, detail=f"Email already registered: {person.email}")
    try:
        row = await storage.insert_person(session, person)
    except IntegrityError:
        await session.rollback()
        raise HTTPException(status_code=409, detail=f"Email already registered: {person.email}")
    return _build_person(row, metrics.today())


@router.get("/{person_id}", response_model=PersonOut)
async def person_detail(
    person_id: int,
    session: AsyncSession = Depends(get_session),
) -> PersonOut:
    row = await _get_or_404(session, person_id)
    return _build_person(row, metrics.today())


@router.delete("/{person_id}", status_code=204)
async def person_delete(
    person_id: int,
    session: AsyncSession = Depends(get_session),
) -> Response:
    if not await storage.delete_person(session, person_id):
        raise HTTPException(status_code=404, detail=f"Unknown person: {person_id}")
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# /person/{id}/stats
# ---------------------------------------------------------------------------


@router.post("/{person_id}/stats", response_model=LedgerSummary)
async def stats_record(
    person_id: int,
    activity: ActivityIn,
    session: AsyncSession = Depends(get_session),
) -> LedgerSummary:
    try:
        ledger = await storage.record_activity(
            session, person_id, parse_day_key(activity.day), activity.steps, activity.calories
        )
    except InvalidInputError as exc:
        await session.rollback()
        raise _unreadable_stats(person_id, exc)
    if ledger is None:
        raise HTTPException(status_code=404, detail=f"Unknown person: {person_id}")
    return builders.build_ledger_summary(ledger)


@router.get("/{person_id}/stats", response_model=LedgerSummary)
async def stats_summary(
    person_id: int,
    session: AsyncSession = Depends(get_session),
) -> LedgerSummary:
    row = await _get_or_404(session, person_id)
    try:
        ledger = ActivityLedger.from_dict(row["stats"])
    except InvalidInputError as exc:
        raise _unreadable_stats(person_id, exc)
    return builders.build_ledger_summary(ledger)


# ---------------------------------------------------------------------------
# /person/{id}/bmi
# ---------------------------------------------------------------------------


@router.get("/{person_id}/bmi", response_model=BmiResponse)
async def person_bmi(
    person_id: int,
    session: AsyncSession = Depends(get_session),
) -> BmiResponse:
    row = await _get_or_404(session, person_id)
    try:
        return BmiResponse(bmi=metrics.bmi(row["height"] or 0, row["weight"] or 0))
    except DegenerateMeasurementError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
