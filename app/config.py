"""
Runtime settings, read from the environment (and a .env file if present).

    DATABASE_URL    libpq connection string
    ALLOWED_ORIGIN  the one origin allowed to call the API cross-origin
    HOST / PORT     where uvicorn listens
    POOL_MIN_SIZE / POOL_MAX_SIZE / POOL_TIMEOUT   connection pool bounds
"""

import os
from collections.abc import Callable
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    database_url: str
    allowed_origin: str
    host: str
    port: int
    pool_min_size: int
    pool_max_size: int
    pool_timeout: float


def _env_number(name: str, default, cast: Callable = int):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def load_settings() -> Settings:
    return Settings(
        database_url=os.getenv("DATABASE_URL", "postgresql://localhost:5432/postgres"),
        allowed_origin=os.getenv("ALLOWED_ORIGIN", "http://localhost:8501"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_env_number("PORT", 3000),
        pool_min_size=_env_number("POOL_MIN_SIZE", 1),
        pool_max_size=_env_number("POOL_MAX_SIZE", 10),
        pool_timeout=_env_number("POOL_TIMEOUT", 30.0, float),
    )
