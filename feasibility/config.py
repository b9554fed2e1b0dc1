"""
Runtime configuration for the feasibility estimator.
API keys and financial assumptions are read from the environment.
"""

import os
from dataclasses import dataclass
from typing import Optional

GOOGLE_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
GOOGLE_SOLAR_URL = "https://solar.googleapis.com/v1/buildingInsights:findClosest"
EIA_BASE_URL = "https://api.eia.gov/v2"
PERPLEXITY_URL = "https://api.perplexity.ai/chat/completions"

DEFAULT_DISCOUNT_RATE = 0.05  # 5% annual discount rate for NPV
ANALYSIS_YEARS = 25
REQUEST_TIMEOUT = 15  # seconds


@dataclass(frozen=True)
class Settings:
    """Configuration values consumed by the API clients and the cash-flow engine."""
    google_api_key: Optional[str] = None
    eia_api_key: Optional[str] = None
    perplexity_api_key: Optional[str] = None
    discount_rate: float = DEFAULT_DISCOUNT_RATE
    analysis_years: int = ANALYSIS_YEARS
    request_timeout: float = REQUEST_TIMEOUT


def _env_float(name: str, default: float) -> float:
    value = os.environ.get(name)
    if value is None or value == '':
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}")


def load_settings(**overrides) -> Settings:
    """
    Build Settings from environment variables.

    Args:
        **overrides: Explicit values that take precedence over the environment
            (e.g. keys resolved from Streamlit secrets)

    Returns:
        Settings instance
    """
    values = {
        'google_api_key': os.environ.get("GOOGLE_API_KEY"),
        'eia_api_key': os.environ.get("EIA_API_KEY"),
        'perplexity_api_key': os.environ.get("PERPLEXITY_API_KEY"),
        'discount_rate': _env_float("SOLAR_DISCOUNT_RATE", DEFAULT_DISCOUNT_RATE),
        'request_timeout': _env_float("SOLAR_REQUEST_TIMEOUT", REQUEST_TIMEOUT),
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**values)
