from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql+asyncpg://localhost:5432/dailyenergy"
    default_tz: str = "UTC"
    energy_api_key: str | None = None
    log_level: str = "INFO"
    create_schema: bool = False  # run CREATE TABLE IF NOT EXISTS on startup

    # Default user profile (used when a request does not carry birth data). Override via env.
    user_name: str | None = None
    user_date_of_birth: str | None = None  # "YYYY-MM-DD" or ISO timestamp
    user_birth_latitude: float | None = None
    user_birth_longitude: float | None = None

    # Correlation refresh window when no explicit range is requested
    correlation_lookback_days: int = 90
    # Longest window a single refresh may score, one composite per day
    correlation_max_days: int = 366
    forecast_max_days: int = 90

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
