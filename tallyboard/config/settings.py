from __future__ import annotations

import logging
import os
from dataclasses import dataclass

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _get_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    log_level: str
    best_windows_top_n: int
    min_window_minutes: int
    readiness_bucket_count: int
    readiness_threshold_ratio: float
    max_total_slots: int
    presets_config_path: str
    include_archived_options: bool


def load_settings() -> Settings:
    return Settings(
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        best_windows_top_n=int(os.getenv("BEST_WINDOWS_TOP_N", "3")),
        min_window_minutes=int(os.getenv("MIN_WINDOW_MINUTES", "60")),
        readiness_bucket_count=int(os.getenv("READINESS_BUCKET_COUNT", "5")),
        readiness_threshold_ratio=float(os.getenv("READINESS_THRESHOLD_RATIO", "0.6")),
        max_total_slots=int(os.getenv("MAX_TOTAL_SLOTS", "1000")),
        presets_config_path=os.getenv("PRESETS_CONFIG_PATH", "config/presets.yaml"),
        include_archived_options=_get_bool_env("INCLUDE_ARCHIVED_OPTIONS", False),
    )


def validate_settings(settings: Settings) -> list[str]:
    errors: list[str] = []
    if settings.log_level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        errors.append("LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
    if settings.best_windows_top_n <= 0:
        errors.append("BEST_WINDOWS_TOP_N must be > 0")
    if settings.min_window_minutes <= 0:
        errors.append("MIN_WINDOW_MINUTES must be > 0")
    if settings.readiness_bucket_count <= 0:
        errors.append("READINESS_BUCKET_COUNT must be > 0")
    if not 0.0 <= settings.readiness_threshold_ratio <= 1.0:
        errors.append("READINESS_THRESHOLD_RATIO must be between 0 and 1")
    if settings.max_total_slots <= 0:
        errors.append("MAX_TOTAL_SLOTS must be > 0")
    if not settings.presets_config_path.strip():
        errors.append("PRESETS_CONFIG_PATH is required")
    return errors


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
