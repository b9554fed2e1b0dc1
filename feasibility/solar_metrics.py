"""
Facility-level solar sizing from building insights and EIA data:
consumption, panel count, generation, offset, savings and months to ROI.
"""

import math
from dataclasses import dataclass

from .errors import InvalidInputError
from .state_data import DEFAULT_COST_PER_WATT, SQFT_PER_M2, YIELD_KWH_PER_KW

CONSUMPTION_REDUCTION = 0.85  # efficiency-adjusted benchmark
DEMAND_CHARGE_UPLIFT = 1.2  # +20% on energy cost for demand charges
SYSTEM_AVAILABILITY = 0.95  # 5% downtime
MONTHLY_DEGRADATION = 0.004
ROI_HORIZON_MONTHS = 240


@dataclass(frozen=True)
class SolarSystemSpecs:
    panel_area_sqft: float = 17.6
    panel_capacity_kw: float = 0.4
    roof_usability_factor: float = 0.7
    system_efficiency: float = 0.75  # includes inverter and wiring losses
    cost_per_watt: float = DEFAULT_COST_PER_WATT


DEFAULT_SOLAR_SPECS = SolarSystemSpecs()


@dataclass
class SolarCalculationResult:
    facility_monthly_consumption_kwh: float
    monthly_electricity_cost: float
    usable_rooftop_area_sqft: float
    number_of_solar_panels: int
    system_capacity_kw: float
    monthly_solar_generation_kwh: float
    energy_offset_percentage: float
    monthly_savings: float
    installation_cost: float
    roi_months: int  # 0 if not reached within 20 years
    building_area_sqft: float
    facility_name: str = ''

    @property
    def annual_solar_generation_kwh(self) -> float:
        return self.monthly_solar_generation_kwh * 12


def estimate_annual_production(
    system_capacity_kw: float,
    sun_hours_per_day: float,
    system_efficiency: float = DEFAULT_SOLAR_SPECS.system_efficiency,
    yield_factor: float = 1.0
) -> float:
    """Annual kWh = kW × sun hours/day × 365 × efficiency × orientation yield factor."""
    return system_capacity_kw * sun_hours_per_day * 365 * system_efficiency * yield_factor


def months_to_roi(
    monthly_savings: float,
    installation_cost: float,
    monthly_degradation: float = MONTHLY_DEGRADATION,
    horizon_months: int = ROI_HORIZON_MONTHS
) -> int:
    """First month in which degraded cumulative savings cover the cost, or 0."""
    if installation_cost <= 0:
        return 0
    total = 0.0
    for month in range(1, horizon_months + 1):
        total += monthly_savings * (1 - monthly_degradation) ** month
        if total >= installation_cost:
            return month
    return 0


def calculate_solar_metrics(
    insights,
    energy_data,
    specs: SolarSystemSpecs = DEFAULT_SOLAR_SPECS
) -> SolarCalculationResult:
    """
    Size a rooftop system for a facility.

    Args:
        insights: SolarInsightsResult from the Google Solar API
        energy_data: EnergyData from EIA
        specs: Panel and installation assumptions

    Returns:
        SolarCalculationResult
    """
    total_roof_area = insights.whole_roof_area_m2 * SQFT_PER_M2
    if total_roof_area <= 0:
        raise InvalidInputError(f"roof area must be > 0, got {total_roof_area}")
    usable_roof_area = total_roof_area * specs.roof_usability_factor

    if insights.building_area_m2:
        building_area = insights.building_area_m2 * SQFT_PER_M2
    else:
        building_area = total_roof_area * 2

    monthly_consumption = building_area * energy_data.consumption_benchmark * CONSUMPTION_REDUCTION
    if monthly_consumption <= 0:
        raise InvalidInputError(f"monthly consumption must be > 0, got {monthly_consumption}")
    monthly_cost = monthly_consumption * energy_data.electricity_rate * DEMAND_CHARGE_UPLIFT

    # Panels limited by roof space and by what the facility can use
    max_panels = int(usable_roof_area // specs.panel_area_sqft)
    needed_panels = math.ceil(monthly_consumption * 12 / (specs.panel_capacity_kw * YIELD_KWH_PER_KW))
    number_of_panels = int(min(max_panels, needed_panels))
    system_capacity = number_of_panels * specs.panel_capacity_kw

    daily_production = system_capacity * energy_data.sun_hours_per_day * specs.system_efficiency
    monthly_generation = daily_production * 30 * SYSTEM_AVAILABILITY

    offset_kwh = min(monthly_generation, monthly_consumption)
    monthly_savings = offset_kwh * energy_data.electricity_rate
    installation_cost = system_capacity * 1000 * specs.cost_per_watt

    return SolarCalculationResult(
        facility_monthly_consumption_kwh=monthly_consumption,
        monthly_electricity_cost=monthly_cost,
        usable_rooftop_area_sqft=usable_roof_area,
        number_of_solar_panels=number_of_panels,
        system_capacity_kw=system_capacity,
        monthly_solar_generation_kwh=monthly_generation,
        energy_offset_percentage=offset_kwh / monthly_consumption * 100,
        monthly_savings=monthly_savings,
        installation_cost=installation_cost,
        roi_months=months_to_roi(monthly_savings, installation_cost),
        building_area_sqft=building_area,
        facility_name=getattr(insights, 'name', '')
    )
