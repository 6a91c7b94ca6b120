"""Shared fixtures for the test suite."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from app.config import settings
from app.energy.models import UserProfile
from app.energy.router import get_store
from app.energy.store import MemoryLogStore
from app.main import app

BIRTH = "1990-05-15"
TARGET = "2024-06-01"


# ---------------------------------------------------------------------------
# Fake DB session (no real Postgres needed)
# ---------------------------------------------------------------------------

class FakeSession:
    """Minimal stand-in for AsyncSession. Records every statement it sees."""

    def __init__(self, rows: list[dict[str, Any]] | None = None):
        self._rows = rows or []
        self.executed: list[tuple[str, dict[str, Any]]] = []
        self.commits = 0

    async def execute(self, stmt, params=None):
        self.executed.append((str(stmt), dict(params or {})))
        return FakeResult(self._rows)

    async def commit(self):
        self.commits += 1

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


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def profile() -> UserProfile:
    return UserProfile(name="Test", date_of_birth=BIRTH)


@pytest.fixture()
def memory_store() -> MemoryLogStore:
    return MemoryLogStore()


@pytest.fixture()
def default_user(monkeypatch):
    """Configure a default birth date so endpoints can build a profile."""
    monkeypatch.setattr(settings, "user_date_of_birth", BIRTH)
    monkeypatch.setattr(settings, "energy_api_key", None)


@pytest.fixture()
def override_store(memory_store):
    """Override the FastAPI store dependency so no real DB is needed."""
    app.dependency_overrides[get_store] = lambda: memory_store
    yield memory_store
    app.dependency_overrides.clear()


@pytest.fixture()
async def client(override_store, default_user):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
