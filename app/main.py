import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config import settings
from app.db import async_session
from app.energy.router import router as energy_router
from app.energy.store import ensure_schema

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.create_schema:
        async with async_session() as session:
            await ensure_schema(session)
        log.info("Schema ready")
    yield


app = FastAPI(title="DailyEnergy", version="0.1.0", lifespan=lifespan)
app.include_router(energy_router)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "energy": {
            "reading": "/energy/reading",
            "composite": "/energy/composite",
            "forecast": "/energy/forecast",
            "compatibility": "/energy/compatibility",
            "numerology_profile": "/energy/numerology/profile",
            "lunar_sleep": "/energy/lunar/sleep",
            "logs": "/energy/logs",
            "logs_by_category": "/energy/logs/{category}",
            "correlations": "/energy/correlations",
            "correlations_refresh": "/energy/correlations/refresh",
            "top_factors": "/energy/factors/top",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
