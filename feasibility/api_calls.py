"""
Google API integration for building solar data.
Handles Geocoding API and Solar API building insights calls.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from .config import GOOGLE_GEOCODE_URL, GOOGLE_SOLAR_URL
from .state_data import DEFAULT_PANEL_WATTAGE

log = logging.getLogger(__name__)


@dataclass
class GeocodingResult:
    """Result from geocoding an address."""
    latitude: float
    longitude: float
    formatted_address: str
    state_code: str
    success: bool
    county: str = ''
    city: str = ''
    error: Optional[str] = None


@dataclass
class SolarInsightsResult:
    """Result from Google Solar API building insights."""
    max_panel_count: int
    max_capacity_kw: float
    max_sunshine_hours: float
    max_array_area_m2: float
    whole_roof_area_m2: float
    building_area_m2: Optional[float]
    panel_capacity_watts: float
    roof_segments: list
    imagery_date: Optional[str]
    success: bool
    name: str = ''
    postal_code: str = ''
    administrative_area: str = ''
    error: Optional[str] = None
    raw_data: Optional[Dict] = field(default=None, repr=False)


def _geocoding_failure(error: str) -> GeocodingResult:
    log.warning("Geocoding failed: %s", error)
    return GeocodingResult(
        latitude=0, longitude=0, formatted_address='',
        state_code='', success=False, error=error
    )


def _insights_failure(error: str) -> SolarInsightsResult:
    log.warning("Building insights unavailable: %s", error)
    return SolarInsightsResult(
        max_panel_count=0, max_capacity_kw=0, max_sunshine_hours=0,
        max_array_area_m2=0, whole_roof_area_m2=0, building_area_m2=None,
        panel_capacity_watts=DEFAULT_PANEL_WATTAGE, roof_segments=[],
        imagery_date=None, success=False, error=error
    )


def _address_component(components: List[Dict[str, Any]], kind: str, name: str = 'short_name') -> str:
    for component in components:
        if kind in component.get('types', []):
            return component.get(name, '')
    return ''


def geocode_address(address: str, api_key: str, timeout: float = 10) -> GeocodingResult:
    """
    Convert street address to coordinates using Google Geocoding API.

    Args:
        address: Street address to geocode
        api_key: Google Geocoding API key
        timeout: Request timeout in seconds

    Returns:
        GeocodingResult with coordinates and metadata
    """
    params = {
        "address": address,
        "key": api_key
    }

    try:
        response = requests.get(GOOGLE_GEOCODE_URL, params=params, timeout=timeout)
        response.raise_for_status()
        data = response.json()

        if data.get('status') != 'OK' or not data.get('results'):
            return _geocoding_failure(f"Geocoding failed: {data.get('status', 'UNKNOWN')}")

        result = data['results'][0]
        location = result['geometry']['location']
        components = result.get('address_components', [])

        return GeocodingResult(
            latitude=location['lat'],
            longitude=location['lng'],
            formatted_address=result.get('formatted_address', address),
            state_code=_address_component(components, 'administrative_area_level_1'),
            county=_address_component(components, 'administrative_area_level_2', 'long_name'),
            city=_address_component(components, 'locality', 'long_name'),
            success=True
        )

    except requests.exceptions.Timeout:
        return _geocoding_failure("Request timed out. Please try again.")
    except requests.exceptions.RequestException as e:
        return _geocoding_failure(f"Network error: {e}")
    except (KeyError, ValueError) as e:
        return _geocoding_failure(f"Unexpected geocoding response: {e}")


def _format_imagery_date(imagery_date: Dict[str, int]) -> Optional[str]:
    if not imagery_date or 'year' not in imagery_date:
        return None
    return (f"{imagery_date['year']}-{imagery_date.get('month', 1):02d}"
            f"-{imagery_date.get('day', 1):02d}")


def get_building_insights(
    latitude: float,
    longitude: float,
    api_key: str,
    required_quality: str = "LOW",
    timeout: float = 15
) -> SolarInsightsResult:
    """
    Get building solar insights from Google Solar API.

    Args:
        latitude: Latitude of the location
        longitude: Longitude of the location
        api_key: Google Solar API key
        required_quality: Minimum imagery quality (LOW, MEDIUM, HIGH)
        timeout: Request timeout in seconds

    Returns:
        SolarInsightsResult with roof, building and panel data
    """
    params = {
        "location.latitude": latitude,
        "location.longitude": longitude,
        "requiredQuality": required_quality,
        "key": api_key
    }

    try:
        response = requests.get(GOOGLE_SOLAR_URL, params=params, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.Timeout:
        return _insights_failure("Request timed out. Please try again.")
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        if status == 404:
            return _insights_failure("No solar data available for this location")
        if status == 403:
            return _insights_failure("API key invalid or quota exceeded")
        return _insights_failure(f"API error: {status}")
    except requests.exceptions.RequestException as e:
        return _insights_failure(f"Network error: {e}")
    except ValueError as e:
        return _insights_failure(f"Invalid response: {e}")

    if 'solarPotential' not in data:
        return _insights_failure("No solar potential data available for this location")

    solar = data['solarPotential']
    panel_wattage = solar.get('panelCapacityWatts', DEFAULT_PANEL_WATTAGE)
    max_panels = solar.get('maxArrayPanelsCount', 0)

    # Older responses only carry the configs list
    configs = solar.get('solarPanelConfigs', [])
    if not max_panels and configs:
        max_panels = max(c.get('panelsCount', 0) for c in configs)

    building_stats = solar.get('buildingStats') or data.get('buildingStats') or {}

    return SolarInsightsResult(
        max_panel_count=max_panels,
        max_capacity_kw=max_panels * panel_wattage / 1000,
        max_sunshine_hours=solar.get('maxSunshineHoursPerYear', 0),
        max_array_area_m2=solar.get('maxArrayAreaMeters2', 0),
        whole_roof_area_m2=solar.get('wholeRoofStats', {}).get('areaMeters2', 0),
        building_area_m2=building_stats.get('areaMeters2'),
        panel_capacity_watts=panel_wattage,
        roof_segments=solar.get('roofSegmentStats', []),
        imagery_date=_format_imagery_date(data.get('imageryDate', {})),
        success=True,
        name=data.get('name', ''),
        postal_code=data.get('postalCode', ''),
        administrative_area=data.get('administrativeArea', ''),
        raw_data=data
    )


def extract_best_roof_segment(roof_segments: list) -> Dict[str, float]:
    """
    Extract the best roof segment for solar installation.

    Args:
        roof_segments: List of roof segment stats from Solar API

    Returns:
        Dict with tilt (pitch) and azimuth of best segment
    """
    if not roof_segments:
        return {'tilt': 20.0, 'azimuth': 180.0}  # Defaults

    # Find segment with most sunshine hours
    best_segment = max(
        roof_segments,
        key=lambda x: (x.get('stats', {}).get('sunshineQuantiles') or [0])[-1]
    )

    return {
        'tilt': best_segment.get('pitchDegrees', 20.0),
        'azimuth': best_segment.get('azimuthDegrees', 180.0)
    }
