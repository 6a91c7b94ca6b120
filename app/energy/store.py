"""Persistence for lifestyle log entries and cached correlations.

Two implementations share the LogStore protocol:
  MemoryLogStore  per-user, in process; used by tests and local runs
  SqlLogStore     async SQLAlchemy over Postgres

Tables:
  lifestyle_logs (id, user_id, category, date, payload JSONB, created_at)
  energy_correlations (user_id, factor, strength, impact, sample_size,
                       confidence, updated_at)

Sleep, weather and biometric entries are one-per-day: saving replaces any
entry already stored for that date. Other categories append.
"""

from __future__ import annotations

import json
import logging
from collections import defaultdict
from datetime import date
from typing import Any, Protocol

from pydantic import TypeAdapter
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.energy.dates import coerce_date
from app.energy.models import (
    UPSERT_CATEGORIES,
    Correlation,
    LifestyleLogEntry,
    LogCategory,
    LogEntry,
    LogsByCategory,
)

log = logging.getLogger(__name__)

DEFAULT_USER = "default"

_entry_adapter: TypeAdapter[LogEntry] = TypeAdapter(LifestyleLogEntry)


def parse_entry(payload: dict[str, Any] | str) -> LogEntry:
    """Validate a stored or posted payload into its typed entry."""
    if isinstance(payload, str):
        payload = json.loads(payload)
    return _entry_adapter.validate_python(payload)


def _in_range(key: str, start: date | None, end_exclusive: date | None) -> bool:
    day = date.fromisoformat(key)
    if start is not None and day < start:
        return False
    if end_exclusive is not None and day >= end_exclusive:
        return False
    return True


class LogStore(Protocol):
    async def get_entries(
        self,
        category: LogCategory,
        start: date | None = None,
        end_exclusive: date | None = None,
    ) -> list[LogEntry]: ...

    async def save_entry(self, entry: LogEntry) -> LogEntry: ...

    async def get_correlations(self) -> list[Correlation]: ...

    async def save_correlations(self, correlations: list[Correlation]) -> None: ...


# ---------------------------------------------------------------------------
# In-memory
# ---------------------------------------------------------------------------


class MemoryLogStore:
    def __init__(self) -> None:
        self._entries: dict[LogCategory, list[LogEntry]] = defaultdict(list)
        self._correlations: list[Correlation] = []

    async def get_entries(
        self,
        category: LogCategory,
        start: date | None = None,
        end_exclusive: date | None = None,
    ) -> list[LogEntry]:
        entries = self._entries.get(LogCategory(category), [])
        return sorted(
            (e for e in entries if _in_range(e.date, start, end_exclusive)),
            key=lambda e: e.date,
        )

    async def save_entry(self, entry: LogEntry) -> LogEntry:
        category = LogCategory(entry.category)
        bucket = self._entries[category]
        if category in UPSERT_CATEGORIES:
            bucket[:] = [e for e in bucket if e.date != entry.date]
        bucket.append(entry)
        return entry

    async def get_correlations(self) -> list[Correlation]:
        return list(self._correlations)

    async def save_correlations(self, correlations: list[Correlation]) -> None:
        self._correlations = list(correlations)


# ---------------------------------------------------------------------------
# Postgres
# ---------------------------------------------------------------------------

_SCHEMA = (
    "CREATE TABLE IF NOT EXISTS lifestyle_logs ("
    " id BIGSERIAL PRIMARY KEY,"
    " user_id TEXT NOT NULL,"
    " category TEXT NOT NULL,"
    " date DATE NOT NULL,"
    " payload JSONB NOT NULL,"
    " created_at TIMESTAMPTZ NOT NULL DEFAULT now())",
    "CREATE INDEX IF NOT EXISTS lifestyle_logs_user_category_date "
    "ON lifestyle_logs (user_id, category, date)",
    "CREATE TABLE IF NOT EXISTS energy_correlations ("
    " user_id TEXT NOT NULL,"
    " factor TEXT NOT NULL,"
    " strength DOUBLE PRECISION NOT NULL,"
    " impact DOUBLE PRECISION NOT NULL,"
    " sample_size INTEGER NOT NULL,"
    " confidence TEXT NOT NULL,"
    " updated_at TIMESTAMPTZ NOT NULL DEFAULT now(),"
    " PRIMARY KEY (user_id, factor))",
)


async def ensure_schema(session: AsyncSession) -> None:
    for statement in _SCHEMA:
        await session.execute(text(statement))
    await session.commit()


class SqlLogStore:
    def __init__(self, session: AsyncSession, user_id: str | None = None) -> None:
        self.session = session
        self.user_id = user_id or DEFAULT_USER

    async def get_entries(
        self,
        category: LogCategory,
        start: date | None = None,
        end_exclusive: date | None = None,
    ) -> list[LogEntry]:
        query = (
            "SELECT payload FROM lifestyle_logs "
            "WHERE user_id = :user_id AND category = :category"
        )
        params: dict[str, Any] = {"user_id": self.user_id, "category": LogCategory(category).value}
        if start is not None:
            query += " AND date >= :start"
            params["start"] = start
        if end_exclusive is not None:
            query += " AND date < :end"
            params["end"] = end_exclusive
        query += " ORDER BY date, id"

        result = await self.session.execute(text(query), params)
        return [parse_entry(row[0]) for row in result.fetchall()]

    async def save_entry(self, entry: LogEntry) -> LogEntry:
        category = LogCategory(entry.category)
        day = coerce_date(entry.date)
        params: dict[str, Any] = {"user_id": self.user_id, "category": category.value, "date": day}

        if category in UPSERT_CATEGORIES:
            await self.session.execute(
                text(
                    "DELETE FROM lifestyle_logs "
                    "WHERE user_id = :user_id AND category = :category AND date = :date"
                ),
                params,
            )
        await self.session.execute(
            text(
                "INSERT INTO lifestyle_logs (user_id, category, date, payload) "
                "VALUES (:user_id, :category, :date, CAST(:payload AS JSONB))"
            ),
            {**params, "payload": json.dumps(entry.model_dump(mode="json"))},
        )
        await self.session.commit()
        log.debug("Saved %s entry for %s", category.value, day)
        return entry

    async def get_correlations(self) -> list[Correlation]:
        result = await self.session.execute(
            text(
                "SELECT factor, strength, impact, sample_size, confidence "
                "FROM energy_correlations WHERE user_id = :user_id ORDER BY factor"
            ),
            {"user_id": self.user_id},
        )
        columns = result.keys()
        return [Correlation(**dict(zip(columns, row))) for row in result.fetchall()]

    async def save_correlations(self, correlations: list[Correlation]) -> None:
        await self.session.execute(
            text("DELETE FROM energy_correlations WHERE user_id = :user_id"),
            {"user_id": self.user_id},
        )
        for corr in correlations:
            await self.session.execute(
                text(
                    "INSERT INTO energy_correlations "
                    "(user_id, factor, strength, impact, sample_size, confidence) "
                    "VALUES (:user_id, :factor, :strength, :impact, :sample_size, :confidence)"
                ),
                {"user_id": self.user_id, **corr.model_dump()},
            )
        await self.session.commit()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def gather_logs(
    store: LogStore,
    start: date | None = None,
    end_exclusive: date | None = None,
) -> LogsByCategory:
    """Every category's entries in [start, end_exclusive), keyed by category."""
    return {
        category: await store.get_entries(category, start, end_exclusive)
        for category in LogCategory
    }
