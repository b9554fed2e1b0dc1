"""
EIA v2 API integration for electricity prices, consumption benchmarks
and sun-hour data.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import requests

from .config import EIA_BASE_URL, REQUEST_TIMEOUT

log = logging.getLogger(__name__)

# Per-field defaults when EIA answers but a value is missing
MISSING_PRICE_CENTS = 12.0
MISSING_CONSUMPTION = 12.0  # kWh/sq ft/month
MISSING_SUN_HOURS = 5.0

# Conservative values used when the API cannot be reached at all
FALLBACK_ELECTRICITY_RATE = 0.11  # $/kWh commercial
FALLBACK_CONSUMPTION = 0.8  # kWh/sq ft/month
FALLBACK_SUN_HOURS = 4.5  # hours/day


class EIARequestError(Exception):
    """EIA returned an error status or an unexpected payload."""


@dataclass
class EnergyData:
    """Energy inputs for a state, possibly substituted with defaults."""
    electricity_rate: float  # $/kWh
    consumption_benchmark: float  # kWh/sq ft/month
    sun_hours_per_day: float
    degraded: bool = False
    error: Optional[str] = None


def _resolve_key(api_key: Optional[str]) -> str:
    key = api_key or os.environ.get("EIA_API_KEY")
    if not key:
        raise EIARequestError("No EIA API key configured")
    return key


def latest_query(data_field: str, frequency: str = "monthly", length: int = 1,
                 **facets: str) -> Dict[str, Any]:
    """Build EIA v2 query parameters sorted newest-first."""
    params = {
        'frequency': frequency,
        'data[0]': data_field,
        'sort[0][column]': 'period',
        'sort[0][direction]': 'desc',
        'length': length,
    }
    for facet, value in facets.items():
        params[f'facets[{facet}][]'] = value
    return params


def fetch_eia_rows(
    path: str,
    params: Dict[str, Any],
    api_key: Optional[str] = None,
    timeout: float = REQUEST_TIMEOUT
) -> List[Dict[str, Any]]:
    """
    Call an EIA v2 data endpoint and return its data rows.

    Args:
        path: Endpoint path below /v2, e.g. "electricity/retail-sales/data"
        params: Query parameters (see latest_query)
        api_key: EIA API key, falls back to EIA_API_KEY in the environment
        timeout: Request timeout in seconds

    Returns:
        List of row dicts, newest first

    Raises:
        EIARequestError: On missing key, HTTP error or malformed payload
    """
    url = f"{EIA_BASE_URL}/{path.lstrip('/')}"
    query = dict(params)
    query['api_key'] = _resolve_key(api_key)

    try:
        response = requests.get(url, params=query, timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    except requests.exceptions.RequestException as e:
        raise EIARequestError(f"EIA request failed: {e}") from e
    except ValueError as e:
        raise EIARequestError(f"EIA returned invalid JSON: {e}") from e

    body = payload.get('response', payload) if isinstance(payload, dict) else None
    if not isinstance(body, dict) or not isinstance(body.get('data'), list):
        raise EIARequestError("EIA response has no data rows")
    rows = body['data']
    if not all(isinstance(row, dict) for row in rows):
        raise EIARequestError("EIA data rows are not objects")
    return rows


def _latest_rows(path: str, params: Dict[str, Any], api_key: Optional[str],
                 timeout: float) -> List[Dict[str, Any]]:
    rows = fetch_eia_rows(path, params, api_key, timeout)
    if not rows:
        raise EIARequestError(f"EIA returned no rows for {path}")
    return rows


def _first_value(rows: List[Dict[str, Any]], field: str, default: float) -> Tuple[float, bool]:
    """Newest value of a field and whether the default stood in for it."""
    try:
        value = float(rows[0].get(field))
    except (TypeError, ValueError):
        return default, True
    if not value:
        return default, True
    return value, False


def get_energy_data(
    state: str,
    sector: str = "COM",
    api_key: Optional[str] = None,
    timeout: float = REQUEST_TIMEOUT
) -> EnergyData:
    """
    Get electricity rate, consumption benchmark and sun hours for a state.

    Args:
        state: Two-letter state code
        sector: EIA sector id (COM for commercial, RES for residential)
        api_key: EIA API key
        timeout: Request timeout in seconds

    Returns:
        EnergyData; degraded=True with conservative defaults if any call fails
        or returns no rows, and degraded=True if a single value was defaulted
    """
    try:
        price_rows = _latest_rows(
            "electricity/retail-sales/data",
            latest_query('price', state=state, sectorid=sector),
            api_key, timeout
        )
        consumption_rows = _latest_rows(
            "consumption/commercial/data",
            latest_query('consumption', state=state),
            api_key, timeout
        )
        sun_rows = _latest_rows(
            "solar/data",
            latest_query('value', frequency='annual', state=state),
            api_key, timeout
        )
    except EIARequestError as e:
        log.error("Error fetching EIA data for %s: %s", state, e)
        return EnergyData(
            electricity_rate=FALLBACK_ELECTRICITY_RATE,
            consumption_benchmark=FALLBACK_CONSUMPTION,
            sun_hours_per_day=FALLBACK_SUN_HOURS,
            degraded=True,
            error=str(e)
        )

    # Prices are reported in cents/kWh
    price, price_missing = _first_value(price_rows, 'price', MISSING_PRICE_CENTS)
    consumption, consumption_missing = _first_value(consumption_rows, 'consumption', MISSING_CONSUMPTION)
    sun_hours, sun_missing = _first_value(sun_rows, 'value', MISSING_SUN_HOURS)

    missing = [name for name, flag in (('price', price_missing),
                                       ('consumption', consumption_missing),
                                       ('sun hours', sun_missing)) if flag]
    if missing:
        log.warning("EIA data for %s missing %s, using defaults", state, ", ".join(missing))

    return EnergyData(
        electricity_rate=price / 100,
        consumption_benchmark=consumption,
        sun_hours_per_day=sun_hours,
        degraded=bool(missing),
        error=f"Missing EIA values: {', '.join(missing)}" if missing else None
    )
