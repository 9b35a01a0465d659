"""Environment-driven application settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


def _env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


@dataclass(frozen=True)
class Settings:
    app_name: str = "Bed Scheduler"
    app_version: str = "1.0.0"
    log_level: str = "INFO"

    # Round selector used when a request does not name one.
    scheduler_strategy: str = "graph"
    scheduler_cp_sat_max_time_seconds: int = 10
    scheduler_cp_sat_workers: int = 4
    scheduler_cp_sat_random_seed: int = 42

    guest_file_encoding: str = "utf-8"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings once per process from environment variables."""
    defaults = Settings()
    return Settings(
        app_name=_env_str("APP_NAME", defaults.app_name),
        app_version=_env_str("APP_VERSION", defaults.app_version),
        log_level=_env_str("LOG_LEVEL", defaults.log_level),
        scheduler_strategy=_env_str("SCHEDULER_STRATEGY", defaults.scheduler_strategy),
        scheduler_cp_sat_max_time_seconds=_env_int(
            "SCHEDULER_CP_SAT_MAX_TIME_SECONDS",
            defaults.scheduler_cp_sat_max_time_seconds,
        ),
        scheduler_cp_sat_workers=_env_int(
            "SCHEDULER_CP_SAT_WORKERS",
            defaults.scheduler_cp_sat_workers,
        ),
        scheduler_cp_sat_random_seed=_env_int(
            "SCHEDULER_CP_SAT_RANDOM_SEED",
            defaults.scheduler_cp_sat_random_seed,
        ),
        guest_file_encoding=_env_str("GUEST_FILE_ENCODING", defaults.guest_file_encoding),
    )
