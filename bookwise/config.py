"""
Centralized configuration with environment variable overrides.

Business hours, slot granularity, the booking cutoff window, model
settings, and the data file location are all configurable here.
Nothing is hardcoded in scheduler or tool logic.
"""

import logging
import os
import re
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


def _minutes_of(value: str) -> int:
    """Convert an ``HH:MM`` string to minutes after midnight."""
    match = _TIME_PATTERN.match(value)
    if not match:
        raise ValueError(f"Invalid HH:MM time: {value!r}")
    return int(match.group(1)) * 60 + int(match.group(2))


@dataclass(frozen=True)
class BusinessConfig:
    """Business hours and booking rules."""

    name: str = os.getenv("BUSINESS_NAME", "BookWise Studio")
    open_time: str = os.getenv("BUSINESS_OPEN_TIME", "09:00")
    close_time: str = os.getenv("BUSINESS_CLOSE_TIME", "17:00")
    slot_interval_minutes: int = _safe_int("SLOT_INTERVAL_MINUTES", "30")
    booking_lead_minutes: int = _safe_int("BOOKING_LEAD_MINUTES", "60")
    booking_horizon_days: int = _safe_int("BOOKING_HORIZON_DAYS", "92")
    week_starts_on: int = _safe_int("WEEK_STARTS_ON", "0")


@dataclass(frozen=True)
class ModelConfig:
    """Text-generation model settings for reminder drafting."""

    llm_model: str = os.getenv("LLM_MODEL", "gpt-4o-mini")
    llm_temperature: float = _safe_float("LLM_TEMPERATURE", "0.3")
    llm_timeout_sec: float = _safe_float("LLM_TIMEOUT_SEC", "30.0")


@dataclass(frozen=True)
class StorageConfig:
    """Where the application state is persisted."""

    data_file: str = os.getenv("BOOKWISE_DATA_FILE", "bookwise_data.json")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    business: BusinessConfig = field(default_factory=BusinessConfig)
    model: ModelConfig = field(default_factory=ModelConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    business = config.business
    open_minutes = _minutes_of(business.open_time)
    close_minutes = _minutes_of(business.close_time)
    if open_minutes >= close_minutes:
        raise ValueError(
            "BUSINESS_OPEN_TIME must be before BUSINESS_CLOSE_TIME, "
            f"got {business.open_time} and {business.close_time}"
        )
    if business.slot_interval_minutes < 1:
        raise ValueError(
            f"SLOT_INTERVAL_MINUTES must be >= 1, got {business.slot_interval_minutes}"
        )
    if business.slot_interval_minutes > close_minutes - open_minutes:
        raise ValueError(
            "SLOT_INTERVAL_MINUTES must fit within business hours, "
            f"got {business.slot_interval_minutes}"
        )
    if business.booking_lead_minutes < 0:
        raise ValueError(
            f"BOOKING_LEAD_MINUTES must be >= 0, got {business.booking_lead_minutes}"
        )
    if business.booking_horizon_days < 1:
        raise ValueError(
            f"BOOKING_HORIZON_DAYS must be >= 1, got {business.booking_horizon_days}"
        )
    if not 0 <= business.week_starts_on <= 6:
        raise ValueError(
            f"WEEK_STARTS_ON must be between 0 and 6, got {business.week_starts_on}"
        )

    if not 0.0 <= config.model.llm_temperature <= 2.0:
        raise ValueError(
            f"LLM_TEMPERATURE must be between 0.0 and 2.0, got {config.model.llm_temperature}"
        )
    if config.model.llm_timeout_sec <= 0:
        raise ValueError(
            f"LLM_TIMEOUT_SEC must be > 0, got {config.model.llm_timeout_sec}"
        )
    if not config.storage.data_file.strip():
        raise ValueError("BOOKWISE_DATA_FILE must not be empty")


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info("Configuration loaded for '%s'", config.business.name)
    return config


# Singleton instance
settings = load_config()
