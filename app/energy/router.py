"""Energy HTTP router — readings, forecasts, lifestyle logs, correlations."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import verify_api_key
from app.config import settings
from app.db import get_session
from app.energy import pipeline
from app.energy.biorhythm import biorhythm_compatibility
from app.energy.composite import compute_composite
from app.energy.context import ReadingContext
from app.energy.correlation import top_energy_factors
from app.energy.dates import normalize_date_string
from app.energy.errors import ProfileMissing
from app.energy.models import (
    BirthPlace,
    Compatibility,
    CompositeResult,
    Correlation,
    DailyEnergyReading,
    Forecast,
    LogCategory,
    NumerologyProfile,
    SleepMoonCorrelation,
    TopFactor,
    UserProfile,
)
from app.energy.numerology_profile import numerology_profile
from app.energy.store import LogStore, SqlLogStore, parse_entry

router = APIRouter(prefix="/energy", tags=["energy"])


async def get_store(session: AsyncSession = Depends(get_session)) -> LogStore:
    return SqlLogStore(session)


def _today() -> date:
    return datetime.now(timezone.utc).astimezone(ZoneInfo(settings.default_tz)).date()


def _parse_date(value: str | None, name: str, default: date | None = None) -> date:
    if value is None:
        if default is None:
            raise HTTPException(status_code=422, detail=f"Missing date for '{name}'")
        return default
    try:
        return date.fromisoformat(normalize_date_string(value))
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Invalid date for '{name}': {value}")


def _resolve_profile(date_of_birth: str | None) -> UserProfile:
    """Request birth date wins; otherwise the configured default user."""
    birth = date_of_birth or settings.user_date_of_birth
    if not birth:
        raise HTTPException(status_code=422, detail=str(ProfileMissing()))
    birth_key = _parse_date(birth, "date_of_birth")

    place = None
    if settings.user_birth_latitude is not None and settings.user_birth_longitude is not None:
        place = BirthPlace(
            latitude=settings.user_birth_latitude,
            longitude=settings.user_birth_longitude,
        )
    return UserProfile(
        name=settings.user_name or "",
        date_of_birth=birth_key.isoformat(),
        place_of_birth=place,
    )


def _lookback_window(
    from_date: str | None, to_date: str | None, max_days: int
) -> tuple[date, date]:
    """Inclusive query bounds to a half-open [start, end) range, lookback by default."""
    end_inclusive = _parse_date(to_date, "to", _today())
    start = _parse_date(
        from_date, "from", end_inclusive - timedelta(days=settings.correlation_lookback_days - 1)
    )
    if end_inclusive < start:
        raise HTTPException(status_code=422, detail="'to' must not be before 'from'")
    if (end_inclusive - start).days + 1 > max_days:
        raise HTTPException(status_code=422, detail=f"Date window exceeds {max_days} days")
    return start, end_inclusive + timedelta(days=1)


# ---------------------------------------------------------------------------
# /energy/reading, /energy/composite
# ---------------------------------------------------------------------------


@router.get("/reading", response_model=DailyEnergyReading)
async def get_reading(
    store: LogStore = Depends(get_store),
    _: str = Depends(verify_api_key),
    target_date: str | None = Query(default=None, alias="date", description="Date (default: today)"),
    date_of_birth: str | None = Query(default=None, description="Birth date (default: configured user)"),
) -> DailyEnergyReading:
    target = _parse_date(target_date, "date", _today())
    profile = _resolve_profile(date_of_birth)
    return await pipeline.compute_daily_reading(store, profile, target, ReadingContext())


@router.get("/composite", response_model=CompositeResult)
async def get_composite(
    _: str = Depends(verify_api_key),
    target_date: str | None = Query(default=None, alias="date", description="Date (default: today)"),
    date_of_birth: str | None = Query(default=None, description="Birth date (default: configured user)"),
) -> CompositeResult:
    target = _parse_date(target_date, "date", _today())
    profile = _resolve_profile(date_of_birth)
    return compute_composite(profile, target, ReadingContext())


# ---------------------------------------------------------------------------
# /energy/forecast, /energy/compatibility, /energy/numerology, /energy/lunar
# ---------------------------------------------------------------------------


@router.get("/forecast", response_model=Forecast)
async def get_forecast(
    _: str = Depends(verify_api_key),
    from_date: str | None = Query(default=None, alias="from", description="First day (default: today)"),
    days: int = Query(default=7, ge=1, description="Number of days"),
    date_of_birth: str | None = Query(default=None, description="Birth date (default: configured user)"),
) -> Forecast:
    if days > settings.forecast_max_days:
        raise HTTPException(
            status_code=422, detail=f"Forecast is limited to {settings.forecast_max_days} days"
        )
    start = _parse_date(from_date, "from", _today())
    profile = _resolve_profile(date_of_birth)
    return pipeline.forecast(profile, start, days)


@router.get("/compatibility", response_model=Compatibility)
async def get_compatibility(
    _: str = Depends(verify_api_key),
    partner_date_of_birth: str = Query(..., description="The other person's birth date"),
    target_date: str | None = Query(default=None, alias="date", description="Date (default: today)"),
    date_of_birth: str | None = Query(default=None, description="Birth date (default: configured user)"),
) -> Compatibility:
    target = _parse_date(target_date, "date", _today())
    profile = _resolve_profile(date_of_birth)
    partner = _parse_date(partner_date_of_birth, "partner_date_of_birth")
    return biorhythm_compatibility(profile.date_of_birth, partner, target)


@router.get("/numerology/profile", response_model=NumerologyProfile)
async def get_numerology_profile(
    _: str = Depends(verify_api_key),
    date_of_birth: str | None = Query(default=None, description="Birth date (default: configured user)"),
) -> NumerologyProfile:
    profile = _resolve_profile(date_of_birth)
    return numerology_profile(profile.date_of_birth)


@router.get("/lunar/sleep", response_model=SleepMoonCorrelation)
async def get_sleep_moon_correlation(
    store: LogStore = Depends(get_store),
    _: str = Depends(verify_api_key),
    from_date: str | None = Query(default=None, alias="from", description="Start date (YYYY-MM-DD)"),
    to_date: str | None = Query(default=None, alias="to", description="End date, inclusive (YYYY-MM-DD)"),
) -> SleepMoonCorrelation:
    start, end = _lookback_window(from_date, to_date, settings.correlation_max_days)
    return await pipeline.sleep_moon_report(store, start, end)


# ---------------------------------------------------------------------------
# /energy/logs
# ---------------------------------------------------------------------------


@router.post("/logs", status_code=201)
async def post_log(
    payload: dict = Body(...),
    store: LogStore = Depends(get_store),
    _: str = Depends(verify_api_key),
) -> dict:
    try:
        entry = parse_entry(payload)
    except ValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail=exc.errors(include_url=False, include_context=False),
        )
    saved = await store.save_entry(entry)
    return saved.model_dump(mode="json")


@router.get("/logs/{category}")
async def get_logs(
    category: LogCategory,
    store: LogStore = Depends(get_store),
    _: str = Depends(verify_api_key),
    from_date: str | None = Query(default=None, alias="from", description="Start date (YYYY-MM-DD)"),
    to_date: str | None = Query(default=None, alias="to", description="End date, inclusive (YYYY-MM-DD)"),
) -> list[dict]:
    start = _parse_date(from_date, "from") if from_date is not None else None
    end = _parse_date(to_date, "to") + timedelta(days=1) if to_date is not None else None
    if start is not None and end is not None and end <= start:
        raise HTTPException(status_code=422, detail="'to' must not be before 'from'")
    entries = await store.get_entries(category, start, end)
    return [e.model_dump(mode="json") for e in entries]


# ---------------------------------------------------------------------------
# /energy/correlations, /energy/factors
# ---------------------------------------------------------------------------


@router.post("/correlations/refresh", response_model=list[Correlation])
async def refresh_correlations(
    store: LogStore = Depends(get_store),
    _: str = Depends(verify_api_key),
    from_date: str | None = Query(default=None, alias="from", description="Start date (YYYY-MM-DD)"),
    to_date: str | None = Query(default=None, alias="to", description="End date, inclusive (YYYY-MM-DD)"),
    date_of_birth: str | None = Query(default=None, description="Birth date (default: configured user)"),
) -> list[Correlation]:
    start, end = _lookback_window(from_date, to_date, settings.correlation_max_days)
    profile = _resolve_profile(date_of_birth)
    return await pipeline.refresh_correlations(store, profile, start, end, ReadingContext())


@router.get("/correlations", response_model=list[Correlation])
async def get_correlations(
    store: LogStore = Depends(get_store),
    _: str = Depends(verify_api_key),
) -> list[Correlation]:
    return await store.get_correlations()


@router.get("/factors/top", response_model=list[TopFactor])
async def get_top_factors(
    store: LogStore = Depends(get_store),
    _: str = Depends(verify_api_key),
    limit: int = Query(default=5, ge=1, le=20),
) -> list[TopFactor]:
    return top_energy_factors(await store.get_correlations(), limit)
