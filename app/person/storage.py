"""Person storage — async raw-SQL access to the `person` table.

Table (owned by the hosting application):
  id (serial), email (text, unique), password_hash (text), name (text),
  dob (date, nullable), height (integer, inches), weight (integer, pounds),
  stats (JSONB, two-level day → {steps, calories} mapping, default '{}')
"""

from __future__ import annotations

import json
import logging
from typing import Any, Sequence

from sqlalchemy import bindparam, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import AsyncSession

from app.person.ledger import ActivityLedger
from app.person.models import PersonCreate
from app.person.passwords import hash_password

logger = logging.getLogger(__name__)

_COLUMNS = "id, email, name, dob, height, weight, stats"


def _row_dict(columns: Sequence[str], row: Sequence[Any]) -> dict[str, Any]:
    data = dict(zip(columns, row))
    stats = data.get("stats")
    # Drivers without a jsonb codec hand back the raw text
    if isinstance(stats, str):
        data["stats"] = json.loads(stats)
    elif stats is None:
        data["stats"] = {}
    return data


async def list_persons(session: AsyncSession) -> list[dict[str, Any]]:
    result = await session.execute(text(f"SELECT {_COLUMNS} FROM person ORDER BY id"))
    columns = list(result.keys())
    return [_row_dict(columns, r) for r in result.fetchall()]


async def fetch_person(
    session: AsyncSession,
    person_id: int,
    for_update: bool = False,
) -> dict[str, Any] | None:
    """Fetch one person row, or None when the id is unknown."""
    query = f"SELECT {_COLUMNS} FROM person WHERE id = :person_id"
    if for_update:
        query += " FOR UPDATE"
    result = await session.execute(text(query), {"person_id": person_id})
    row = result.fetchone()
    if row is None:
        return None
    return _row_dict(list(result.keys()), row)


async def email_exists(session: AsyncSession, email: str) -> bool:
    result = await session.execute(
        text("SELECT 1 FROM person WHERE email = :email"), {"email": email}
    )
    return result.fetchone() is not None


async def insert_person(session: AsyncSession, person: PersonCreate) -> dict[str, Any]:
    """Insert a profile with an empty ledger and return the stored row."""
    stmt = text(
        "INSERT INTO person (email, password_hash, name, dob, height, weight, stats) "
        "VALUES (:email, :password_hash, :name, :dob, :height, :weight, :stats) "
        f"RETURNING {_COLUMNS}"
    ).bindparams(bindparam("stats", type_=JSONB))
    result = await session.execute(
        stmt,
        {
            "email": person.email,
            "password_hash": hash_password(person.password),
            "name": person.name,
            "dob": person.dob,
            "height": person.height,
            "weight": person.weight,
            "stats": ActivityLedger().to_dict(),
        },
    )
    row = result.fetchone()
    columns = list(result.keys())
    await session.commit()
    data = _row_dict(columns, row)
    logger.info("Created person id=%s", data["id"])
    return data


async def delete_person(session: AsyncSession, person_id: int) -> bool:
    result = await session.execute(
        text("DELETE FROM person WHERE id = :person_id RETURNING id"),
        {"person_id": person_id},
    )
    deleted = result.fetchone() is not None
    await session.commit()
    if deleted:
        logger.info("Deleted person id=%s", person_id)
    return deleted


async def record_activity(
    session: AsyncSession,
    person_id: int,
    day: str,
    steps: int,
    calories: int,
) -> ActivityLedger | None:
    """Accumulate activity into a person's stored ledger.

    The row is locked (SELECT ... FOR UPDATE) for the read-modify-write so
    concurrent recordings for one person serialize. Returns the updated
    ledger, or None when the person does not exist.
    """
    row = await fetch_person(session, person_id, for_update=True)
    if row is None:
        await session.rollback()
        return None

    ledger = ActivityLedger.from_dict(row["stats"])
    ledger.record_activity(day, steps, calories)

    stmt = text("UPDATE person SET stats = :stats WHERE id = :person_id").bindparams(
        bindparam("stats", type_=JSONB)
    )
    await session.execute(stmt, {"stats": ledger.to_dict(), "person_id": person_id})
    await session.commit()
    logger.debug("Recorded %s steps, %s kcal for person id=%s on %s", steps, calories, person_id, day)
    return ledger
