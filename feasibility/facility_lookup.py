"""
Facility energy-cost estimation through the Perplexity chat-completions API.

The model is asked to research the facility and reply with one number: the
estimated annual electricity cost in dollars.
"""

import logging
import os
import re
from dataclasses import dataclass
from typing import Optional

import requests

from .config import PERPLEXITY_URL

log = logging.getLogger(__name__)

PERPLEXITY_MODEL = "sonar-pro"
DEFAULT_PEAK_DEMAND_KW = 200

SYSTEM_PROMPT = (
    "You are an advanced agent with internet access. Your goal is to find and/or "
    "estimate the facility's name, size (ft²), EUI (kWh/ft²/year), local electricity "
    "rate ($/kWh), and demand charge ($/kW) for the location data the user provides. "
    f"If peak demand is unknown, assume {DEFAULT_PEAK_DEMAND_KW} kW. Then calculate "
    "annual cost using:\n"
    "(Facility Size × EUI × Electricity Rate) + (Peak kW × Demand Charge × 12).\n"
    "Output only a single numeric value with no text or explanation."
)

USER_PROMPT_TEMPLATE = """You have internet access and must find data for a facility located at:
Organization: {organization}
City: {city}
County: {county}
State: {state}

Steps:
1) Confirm or determine the facility name from the above details.
2) Find or approximate the facility size (ft²).
3) Find or approximate the EUI (kWh/ft²/year) for that facility/building type.
4) Find or approximate local commercial electricity rate ($/kWh).
5) Find or approximate local demand charges ($/kW).
6) Assume {peak_kw} kW peak demand if no actual data is available.
7) Calculate annual cost:
   (Facility Size × EUI × Electricity Rate)
   + (Peak kW × Demand Charge × 12).
8) Output a single dollar amount on one line, with no explanation or sources."""

_NUMBER = re.compile(r"\d[\d,]*(?:\.\d+)?|\.\d+")


@dataclass(frozen=True)
class LocationInfo:
    organization: str
    city: str
    county: str
    state: str


@dataclass
class FacilityCostEstimate:
    """Estimated annual electricity cost for a facility."""
    annual_cost_usd: float
    degraded: bool = False
    error: Optional[str] = None
    raw_text: Optional[str] = None


def build_user_prompt(location: LocationInfo) -> str:
    return USER_PROMPT_TEMPLATE.format(
        organization=location.organization,
        city=location.city,
        county=location.county,
        state=location.state,
        peak_kw=DEFAULT_PEAK_DEMAND_KW
    )


def parse_cost(text: str) -> Optional[float]:
    """
    Pull the dollar amount out of a model reply.

    "$1,234,567.89" -> 1234567.89. Returns None if the text has no number.
    """
    if not text:
        return None
    match = _NUMBER.search(text)
    if match is None:
        return None
    return float(match.group(0).replace(',', ''))


def get_facility_annual_cost(
    location: LocationInfo,
    api_key: Optional[str] = None,
    timeout: float = 60
) -> FacilityCostEstimate:
    """
    Ask Perplexity for a facility's estimated annual electricity cost.

    Args:
        location: Organization and address details
        api_key: Perplexity API key, falls back to PERPLEXITY_API_KEY
        timeout: Request timeout in seconds

    Returns:
        FacilityCostEstimate; annual_cost_usd is 0 and degraded=True on failure
    """
    api_key = api_key or os.environ.get("PERPLEXITY_API_KEY")
    if not api_key:
        log.error("No Perplexity API key configured")
        return FacilityCostEstimate(0.0, degraded=True, error="No Perplexity API key configured")

    payload = {
        "model": PERPLEXITY_MODEL,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_user_prompt(location)}
        ],
        "temperature": 0.7,
        "max_tokens": 4000
    }
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json"
    }

    try:
        response = requests.post(PERPLEXITY_URL, headers=headers, json=payload, timeout=timeout)
        response.raise_for_status()
        result = response.json()
        content = result['choices'][0]['message']['content']
    except requests.exceptions.RequestException as e:
        log.error("Error fetching facility data: %s", e)
        return FacilityCostEstimate(0.0, degraded=True, error=f"API request failed: {e}")
    except (KeyError, IndexError, TypeError, ValueError) as e:
        log.error("Unexpected Perplexity response: %s", e)
        return FacilityCostEstimate(0.0, degraded=True, error=f"Invalid API response: {e}")

    cost = parse_cost(content)
    if cost is None:
        log.warning("No numeric cost in facility response: %r", content)
        return FacilityCostEstimate(
            0.0, degraded=True, error="Response contained no cost", raw_text=content
        )

    return FacilityCostEstimate(annual_cost_usd=cost, raw_text=content)
