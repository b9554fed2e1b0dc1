"""
Reference data: state names, census divisions, rate escalation defaults
and installation cost assumptions.
"""

import re
from types import MappingProxyType

# State names for display and address parsing
STATE_NAMES = {
    'AL': 'Alabama', 'AK': 'Alaska', 'AZ': 'Arizona', 'AR': 'Arkansas',
    'CA': 'California', 'CO': 'Colorado', 'CT': 'Connecticut', 'DE': 'Delaware',
    'DC': 'District of Columbia', 'FL': 'Florida', 'GA': 'Georgia', 'HI': 'Hawaii',
    'ID': 'Idaho', 'IL': 'Illinois', 'IN': 'Indiana', 'IA': 'Iowa',
    'KS': 'Kansas', 'KY': 'Kentucky', 'LA': 'Louisiana', 'ME': 'Maine',
    'MD': 'Maryland', 'MA': 'Massachusetts', 'MI': 'Michigan', 'MN': 'Minnesota',
    'MS': 'Mississippi', 'MO': 'Missouri', 'MT': 'Montana', 'NE': 'Nebraska',
    'NV': 'Nevada', 'NH': 'New Hampshire', 'NJ': 'New Jersey', 'NM': 'New Mexico',
    'NY': 'New York', 'NC': 'North Carolina', 'ND': 'North Dakota', 'OH': 'Ohio',
    'OK': 'Oklahoma', 'OR': 'Oregon', 'PA': 'Pennsylvania', 'RI': 'Rhode Island',
    'SC': 'South Carolina', 'SD': 'South Dakota', 'TN': 'Tennessee', 'TX': 'Texas',
    'UT': 'Utah', 'VT': 'Vermont', 'VA': 'Virginia', 'WA': 'Washington',
    'WV': 'West Virginia', 'WI': 'Wisconsin', 'WY': 'Wyoming',
}

# EIA census divisions, used for regional price comparison
CENSUS_DIVISIONS = {
    'New England': ['CT', 'ME', 'MA', 'NH', 'RI', 'VT'],
    'Middle Atlantic': ['NJ', 'NY', 'PA'],
    'East North Central': ['IL', 'IN', 'MI', 'OH', 'WI'],
    'West North Central': ['IA', 'KS', 'MN', 'MO', 'NE', 'ND', 'SD'],
    'South Atlantic': ['DE', 'FL', 'GA', 'MD', 'NC', 'SC', 'VA', 'DC', 'WV'],
    'East South Central': ['AL', 'KY', 'MS', 'TN'],
    'West South Central': ['AR', 'LA', 'OK', 'TX'],
    'Mountain': ['AZ', 'CO', 'ID', 'MT', 'NV', 'NM', 'UT', 'WY'],
    'Pacific': ['CA', 'OR', 'WA', 'AK', 'HI'],
}
DEFAULT_CENSUS_DIVISION = 'Pacific'

# Annual electricity rate escalation (%)
NATIONAL_RATE_ESCALATION = 4.23
COUNTY_RATE_ESCALATION = MappingProxyType({
    'Los Angeles County, CA': 5.2,
    'Cook County, IL': 4.8,
    'King County, WA': 3.9,
    'Harris County, TX': 3.7,
    'Maricopa County, AZ': 4.5,
})

# Fallback rates ($/kWh) when EIA is unreachable
DEFAULT_ELECTRICITY_RATE = 0.12

# Bill decomposition shares of the per-kWh rate
BILL_COMPONENT_SHARES = {
    'base_energy_rate': 0.55,
    'delivery_charges': 0.25,
    'regulatory_fees': 0.12,
    'location_surcharges': 0.08,
}
DEFAULT_DEMAND_CHARGE = 10.5  # $/kW, flat

# Federal Investment Tax Credit (ITC)
FEDERAL_ITC_RATE = 0.30  # 30% through 2032

# Installation assumptions
DEFAULT_COST_PER_WATT = 2.85  # $/watt, commercial installed cost
DEFAULT_PANEL_WATTAGE = 400  # Watts per panel
INSTALL_HOURS_PER_KW = 3.0
YIELD_KWH_PER_KW = 1400  # Typical annual yield per installed kW
SQFT_PER_M2 = 10.764


def get_census_division(state_code: str) -> str:
    """Map a two-letter state code to its census division."""
    code = (state_code or '').upper()
    for division, states in CENSUS_DIVISIONS.items():
        if code in states:
            return division
    return DEFAULT_CENSUS_DIVISION


def detect_state_from_address(address: str) -> str:
    """
    Attempt to detect state from address string.

    Args:
        address: Full address string

    Returns:
        Two-letter state code or empty string if not found
    """
    address_upper = address.upper()
    padded = re.sub(r'\s*,\s*', ', ', address_upper) + ' '

    # State codes only count after a comma ("Austin, TX 78701"); bare
    # words like " IN " or " OR " are too common in street addresses
    for code in STATE_NAMES.keys():
        if f', {code} ' in padded:
            return code

    # Longest names first so "West Virginia" wins over "Virginia"
    for code, name in sorted(STATE_NAMES.items(), key=lambda kv: -len(kv[1])):
        if name.upper() in address_upper:
            return code

    return ''
