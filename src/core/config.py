"""Shared configuration helpers for the ROI calculator."""

import logging
import math
import os

from dotenv import load_dotenv

from src.core.models import PricingSettings
from src.shared.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_MONTHLY_VALUE_MULTIPLIER = 0.15
DEFAULT_ONE_TIME_CHARGE_MULTIPLIER = 3.0


def load_environment() -> None:
    """Load environment variables from .env if present."""
    load_dotenv()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"{name}={raw!r} is not a number; using default {default}")
        return default
    if not math.isfinite(value) or value <= 0:
        logger.warning(f"{name}={raw!r} must be a positive finite number; using default {default}")
        return default
    return value


def get_pricing_settings() -> PricingSettings:
    """
    Return fee multipliers from the environment.

    Reads ROI_MONTHLY_VALUE_MULTIPLIER and ROI_ONE_TIME_CHARGE_MULTIPLIER,
    falling back to 0.15 and 3 when unset or invalid.
    """
    return PricingSettings(
        monthly_value_multiplier=_env_float(
            "ROI_MONTHLY_VALUE_MULTIPLIER", DEFAULT_MONTHLY_VALUE_MULTIPLIER
        ),
        one_time_charge_multiplier=_env_float(
            "ROI_ONE_TIME_CHARGE_MULTIPLIER", DEFAULT_ONE_TIME_CHARGE_MULTIPLIER
        ),
    )


def get_flask_secret() -> str:
    """Return the Flask secret key or raise if missing."""
    secret = os.getenv("FLASK_SECRET_KEY")
    if not secret:
        raise ConfigurationError(
            "FLASK_SECRET_KEY environment variable is not set. Set a strong value for production."
        )
    return secret


def get_port(default: int = 8000) -> int:
    """Return the desired port for local hosting."""
    try:
        return int(os.getenv("PORT", default))
    except ValueError:
        return default
