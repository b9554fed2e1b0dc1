"""
Electricity rate projection, escalation lookup and bill decomposition.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import date
from typing import List, Mapping, Optional, Tuple

import numpy as np

from .config import ANALYSIS_YEARS, REQUEST_TIMEOUT
from .eia import EIARequestError, fetch_eia_rows, latest_query
from .errors import InvalidInputError
from .state_data import (
    BILL_COMPONENT_SHARES,
    COUNTY_RATE_ESCALATION,
    DEFAULT_DEMAND_CHARGE,
    DEFAULT_ELECTRICITY_RATE,
    NATIONAL_RATE_ESCALATION,
    get_census_division,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateEscalationTable:
    """National default escalation (%) with optional county overrides."""
    national: float = NATIONAL_RATE_ESCALATION
    county: Mapping[str, float] = field(default_factory=dict)

    def lookup(self, state: str, county: Optional[str] = None) -> float:
        if county:
            key = f"{county}, {state}"
            if key in self.county:
                return self.county[key]
        return self.national


DEFAULT_RATE_ESCALATION = RateEscalationTable(county=COUNTY_RATE_ESCALATION)


@dataclass(frozen=True)
class BillComponents:
    """Decomposition of a per-kWh electricity rate."""
    base_energy_rate: float  # $/kWh
    delivery_charges: float  # $/kWh
    demand_charges: float  # $/kW, not part of the per-kWh total
    regulatory_fees: float  # $/kWh
    location_surcharges: float  # $/kWh

    @classmethod
    def from_total_rate(cls, total_rate: float,
                        demand_charge: float = DEFAULT_DEMAND_CHARGE) -> "BillComponents":
        """Split a rate using typical commercial bill shares."""
        return cls(
            base_energy_rate=total_rate * BILL_COMPONENT_SHARES['base_energy_rate'],
            delivery_charges=total_rate * BILL_COMPONENT_SHARES['delivery_charges'],
            demand_charges=demand_charge,
            regulatory_fees=total_rate * BILL_COMPONENT_SHARES['regulatory_fees'],
            location_surcharges=total_rate * BILL_COMPONENT_SHARES['location_surcharges'],
        )

    @property
    def energy_rate_total(self) -> float:
        return (self.base_energy_rate + self.delivery_charges
                + self.regulatory_fees + self.location_surcharges)

    def validate_against(self, total_rate: float, rel_tol: float = 1e-6) -> None:
        """Raise InvalidInputError if the per-kWh components do not add up to total_rate."""
        if not math.isclose(self.energy_rate_total, total_rate, rel_tol=rel_tol, abs_tol=1e-9):
            raise InvalidInputError(
                f"bill components sum to {self.energy_rate_total:.6f} $/kWh, "
                f"expected {total_rate:.6f}"
            )


@dataclass
class EnergyRateDetails:
    """Current rate, history and 25-year projection for a location."""
    total_rate: float
    components: BillComponents
    historical_rates: List[Tuple[str, float]]  # (period, $/kWh), newest first
    projected_rates: List[Tuple[int, float]]  # (year, $/kWh)
    regional_average: float
    escalation_rate: float  # %
    degraded: bool = False
    error: Optional[str] = None


def project_rates(
    current_rate: float,
    escalation_percent: float,
    years: int,
    start_year: Optional[int] = None
) -> List[Tuple[int, float]]:
    """
    Project an electricity rate forward with compound escalation.

    Args:
        current_rate: Rate for the first year ($/kWh)
        escalation_percent: Annual escalation (e.g. 4.23 for 4.23%)
        years: Number of years to project
        start_year: Calendar year of offset 0 (defaults to this year)

    Returns:
        List of (year, rate) tuples
    """
    if start_year is None:
        start_year = date.today().year
    offsets = np.arange(max(years, 0))
    rates = current_rate * (1 + escalation_percent / 100) ** offsets
    return [(start_year + int(i), float(rate)) for i, rate in zip(offsets, rates)]


def get_escalation_rate(
    state: str,
    county: Optional[str] = None,
    table: RateEscalationTable = DEFAULT_RATE_ESCALATION
) -> float:
    """Annual escalation (%) for a county, falling back to the national default."""
    return table.lookup(state, county)


def _fallback_rate_details(error: str, start_year: int) -> EnergyRateDetails:
    current_rate = DEFAULT_ELECTRICITY_RATE
    historical = [
        (f"{start_year - 1}-{12 - i:02d}", current_rate * (1 - i * 0.005))
        for i in range(12)
    ]
    return EnergyRateDetails(
        total_rate=current_rate,
        components=BillComponents.from_total_rate(current_rate),
        historical_rates=historical,
        projected_rates=project_rates(
            current_rate, DEFAULT_RATE_ESCALATION.national, ANALYSIS_YEARS, start_year
        ),
        regional_average=current_rate * 0.95,
        escalation_rate=DEFAULT_RATE_ESCALATION.national,
        degraded=True,
        error=error
    )


def get_detailed_energy_rates(
    state: str,
    county: Optional[str] = None,
    sector: str = "COM",
    api_key: Optional[str] = None,
    table: RateEscalationTable = DEFAULT_RATE_ESCALATION,
    timeout: float = REQUEST_TIMEOUT
) -> EnergyRateDetails:
    """
    Fetch rate history from EIA and project it 25 years forward.

    Never raises for upstream failures: a degraded result built on
    $0.12/kWh and the national escalation default is returned instead.

    Args:
        state: Two-letter state code
        county: Optional county name (e.g. "Cook County")
        sector: EIA sector id (COM or RES)
        api_key: EIA API key
        table: Escalation table to look up county overrides in
        timeout: Request timeout in seconds

    Returns:
        EnergyRateDetails
    """
    start_year = date.today().year
    try:
        rows = fetch_eia_rows(
            "electricity/retail-sales/data",
            latest_query('price', length=12, state=state, sectorid=sector),
            api_key, timeout
        )
        regional_rows = fetch_eia_rows(
            "electricity/retail-sales/data",
            latest_query('price', census_division_name=get_census_division(state),
                         sectorid=sector),
            api_key, timeout
        )
        # EIA reports cents/kWh
        current_price = rows[0].get('price') if rows else None
        current_rate = float(current_price or 12) / 100
        historical = [(row.get('period', ''), float(row.get('price') or 0) / 100) for row in rows]
        regional_price = regional_rows[0].get('price') if regional_rows else None
        regional_average = float(regional_price or 0) / 100
    except (EIARequestError, TypeError, ValueError) as e:
        log.error("Error fetching detailed energy rates for %s: %s", state, e)
        return _fallback_rate_details(str(e), start_year)

    escalation = get_escalation_rate(state, county, table)

    return EnergyRateDetails(
        total_rate=current_rate,
        components=BillComponents.from_total_rate(current_rate),
        historical_rates=historical,
        projected_rates=project_rates(current_rate, escalation, ANALYSIS_YEARS, start_year),
        regional_average=regional_average,
        escalation_rate=escalation
    )
