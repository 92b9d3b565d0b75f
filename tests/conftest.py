"""Shared fixtures for the test suite."""

from __future__ import annotations

from datetime import date
from typing import Any
import pytest
from httpx import ASGITransport, AsyncClient

from app.db import get_session
from app.main import app


# ---------------------------------------------------------------------------
# Fake DB session (no real Postgres needed)
# ---------------------------------------------------------------------------

class FakeSession:
    """Minimal stand-in for AsyncSession.

    Each execute() pops the next queued row list (empty once exhausted) and
    records the SQL text and params for assertions.
    """

    def __init__(self, results: list[list[dict[str, Any]]] | None = None):
        self._results = list(results or [])
        self.executed: list[tuple[str, dict[str, Any] | None]] = []
        self.commits = 0
        self.rollbacks = 0

    async def execute(self, stmt, params=None):
        self.executed.append((str(stmt), params))
        rows = self._results.pop(0) if self._results else []
        return FakeResult(rows)

    async def commit(self):
        self.commits += 1

    async def rollback(self):
        self.rollbacks += 1

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass


class FakeResult:
    def __init__(self, rows: list[dict[str, Any]]):
        self._rows = rows
        self._keys = list(rows[0].keys()) if rows else []

    def keys(self):
        return self._keys

    def fetchall(self):
        return [tuple(r[k] for k in self._keys) for r in self._rows]

    def fetchone(self):
        rows = self.fetchall()
        return rows[0] if rows else None


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def fake_session():
    """Return a FakeSession with no rows (override _results in tests if needed)."""
    return FakeSession()


@pytest.fixture()
def override_session(fake_session):
    """Override the FastAPI dependency so no real DB is needed."""
    async def _override():
        yield fake_session

    app.dependency_overrides[get_session] = _override
    yield fake_session
    app.dependency_overrides.clear()


@pytest.fixture()
async def client(override_session):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def make_person_row(
    person_id: int = 1,
    stats: dict[str, Any] | None = None,
    dob: date | None = date(1990, 6, 15),
    height: int = 70,
    weight: int = 154,
) -> dict[str, Any]:
    """Helper to build a fake person row dict (columns as storage selects them)."""
    return {
        "id": person_id,
        "email": f"person{person_id}@example.com",
        "name": "Test Person",
        "dob": dob,
        "height": height,
        "weight": weight,
        "stats": stats if stats is not None else {},
    }
