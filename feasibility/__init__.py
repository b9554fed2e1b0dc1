"""Calculators and API clients for the Solar Feasibility Estimator."""

from .errors import InvalidInputError

from .config import Settings, load_settings

from .api_calls import (
    geocode_address,
    get_building_insights,
    extract_best_roof_segment,
    GeocodingResult,
    SolarInsightsResult
)

from .eia import get_energy_data, EnergyData

from .facility_lookup import (
    get_facility_annual_cost,
    parse_cost,
    LocationInfo,
    FacilityCostEstimate
)

from .rates import (
    project_rates,
    get_escalation_rate,
    get_detailed_energy_rates,
    BillComponents,
    EnergyRateDetails,
    RateEscalationTable,
    DEFAULT_RATE_ESCALATION
)

from .financial_calcs import (
    calculate_financial_metrics,
    calculate_monthly_loan_payment,
    calculate_npv,
    approximate_irr,
    estimate_usage_from_bill,
    calculate_offset_percentage,
    CashFlowYear,
    FinancialMetrics,
    FinancialParameters,
    FinancingTerms
)

from .roof_layout import (
    calculate_roof_layout,
    calculate_layout_from_insights,
    calculate_orientation_yield_factor,
    ObstructionType,
    RoofObstruction,
    RoofLayoutResult,
    SetbackRules,
    ORIENTATION_EFFICIENCY
)

from .sizing import calculate_optimal_system_size

from .solar_metrics import (
    calculate_solar_metrics,
    estimate_annual_production,
    SolarCalculationResult,
    SolarSystemSpecs
)

from .state_data import (
    STATE_NAMES,
    FEDERAL_ITC_RATE,
    DEFAULT_COST_PER_WATT,
    get_census_division,
    detect_state_from_address
)
