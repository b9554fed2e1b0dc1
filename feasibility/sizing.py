"""
System sizing from a target payback period.
"""

import numpy as np

from .errors import InvalidInputError
from .state_data import NATIONAL_RATE_ESCALATION, YIELD_KWH_PER_KW


def calculate_optimal_system_size(
    target_payback_years: int,
    electricity_rate: float,
    annual_consumption_kwh: float,
    cost_per_watt: float,
    rate_escalation: float = NATIONAL_RATE_ESCALATION
) -> float:
    """
    Back-solve the system size that pays for itself in the target period.

    Assumes 1,400 kWh of production per installed kW per year. The result
    never exceeds the size that offsets 100% of consumption.

    Args:
        target_payback_years: Desired payback period in years
        electricity_rate: Current electricity rate ($/kWh)
        annual_consumption_kwh: Annual consumption (kWh)
        cost_per_watt: Installed cost ($/W)
        rate_escalation: Annual rate escalation (e.g., 4.23 for 4.23%)

    Returns:
        System size in kW
    """
    if target_payback_years < 1:
        raise InvalidInputError(f"target_payback_years must be >= 1, got {target_payback_years}")
    if electricity_rate <= 0:
        raise InvalidInputError(f"electricity_rate must be > 0, got {electricity_rate}")

    years = np.arange(int(target_payback_years))
    avg_escalation_factor = float(np.sum((1 + rate_escalation / 100) ** years)) / target_payback_years
    avg_electricity_rate = electricity_rate * avg_escalation_factor

    annual_savings_needed = (cost_per_watt * 1000) / target_payback_years
    annual_production_needed = annual_savings_needed / avg_electricity_rate
    optimal_size_kw = annual_production_needed / YIELD_KWH_PER_KW

    max_size_kw = annual_consumption_kwh / YIELD_KWH_PER_KW
    return min(optimal_size_kw, max_size_kw)
