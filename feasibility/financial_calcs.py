"""
Financial calculations for solar feasibility analysis.
Builds a 25-year cash-flow ledger for cash or loan-financed systems and
derives payback, ROI, NPV, IRR and LCOE from it.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from .config import ANALYSIS_YEARS, DEFAULT_DISCOUNT_RATE
from .errors import InvalidInputError
from .rates import BillComponents

IRR_SCAN_START = 0.01
IRR_SCAN_END = 0.25
IRR_SCAN_STEP = 0.0025


@dataclass(frozen=True)
class FinancingTerms:
    """Loan terms for a financed system."""
    loan_amount: float
    down_payment: float
    interest_rate: float  # Annual interest rate (e.g., 6.0 for 6%)
    loan_term_years: int
    incentive_amount: float = 0.0  # Federal/state/local incentives


@dataclass(frozen=True)
class FinancialParameters:
    """Inputs for a single cash-flow calculation."""
    system_cost_usd: float
    system_capacity_kw: float
    annual_production_kwh: float
    electricity_rate: float  # $/kWh
    rate_escalation: float  # Annual escalation (e.g., 4.23 for 4.23%)
    panel_degradation: float  # Annual degradation (e.g., 0.5 for 0.5%)
    financing_terms: Optional[FinancingTerms] = None
    bill_components: Optional[BillComponents] = None
    discount_rate: float = DEFAULT_DISCOUNT_RATE
    analysis_years: int = ANALYSIS_YEARS

    def __post_init__(self):
        if self.system_cost_usd <= 0:
            raise InvalidInputError(f"system_cost_usd must be > 0, got {self.system_cost_usd}")
        if self.system_capacity_kw <= 0:
            raise InvalidInputError(f"system_capacity_kw must be > 0, got {self.system_capacity_kw}")
        if self.annual_production_kwh <= 0:
            raise InvalidInputError(
                f"annual_production_kwh must be > 0, got {self.annual_production_kwh}"
            )
        if self.electricity_rate < 0:
            raise InvalidInputError(f"electricity_rate must be >= 0, got {self.electricity_rate}")
        if self.analysis_years < 1:
            raise InvalidInputError(f"analysis_years must be >= 1, got {self.analysis_years}")
        if self.discount_rate <= -1:
            raise InvalidInputError(f"discount_rate must be > -1, got {self.discount_rate}")
        if self.financing_terms is not None:
            if self.financing_terms.loan_term_years < 1:
                raise InvalidInputError(
                    f"loan_term_years must be >= 1, got {self.financing_terms.loan_term_years}"
                )
            if self.financing_terms.loan_amount < 0:
                raise InvalidInputError(
                    f"loan_amount must be >= 0, got {self.financing_terms.loan_amount}"
                )
            if self.financing_terms.interest_rate < 0:
                raise InvalidInputError(
                    f"interest_rate must be >= 0, got {self.financing_terms.interest_rate}"
                )
        if self.bill_components is not None:
            self.bill_components.validate_against(self.electricity_rate)


@dataclass
class CashFlowYear:
    """One row of the cash-flow ledger."""
    year: int
    energy_production: float  # kWh
    energy_savings: float  # USD
    loan_payment: float  # USD
    net_cash_flow: float  # USD
    cumulative_cash_flow: float  # USD


@dataclass
class FinancialMetrics:
    """Results of a cash-flow calculation."""
    payback_period_years: int
    roi_25_year: float  # %
    npv_25_year: float  # USD
    irr_25_year: float  # %
    lcoe: float  # $/kWh
    first_year_savings: float
    lifetime_savings: float
    monthly_loan_payment: Optional[float] = None
    cash_flow: List[CashFlowYear] = field(default_factory=list)

    def to_dataframe(self) -> pd.DataFrame:
        """Cash-flow ledger as a DataFrame indexed by year."""
        return pd.DataFrame([vars(row) for row in self.cash_flow]).set_index('year')


def calculate_monthly_loan_payment(
    loan_amount: float,
    interest_rate: float,
    loan_term_years: int
) -> float:
    """
    Monthly payment for a fixed-rate amortizing loan.

    Args:
        loan_amount: Principal loan amount
        interest_rate: Annual interest rate (e.g., 6.0 for 6%)
        loan_term_years: Loan term in years

    Returns:
        Monthly payment in dollars
    """
    if loan_term_years < 1:
        raise InvalidInputError(f"loan_term_years must be >= 1, got {loan_term_years}")

    monthly_rate = interest_rate / 100 / 12
    num_payments = loan_term_years * 12

    if monthly_rate > 0:
        return loan_amount * (
            monthly_rate * (1 + monthly_rate) ** num_payments
        ) / ((1 + monthly_rate) ** num_payments - 1)
    return loan_amount / num_payments


def calculate_npv(net_cash_flows: Sequence[float], rate: float, initial_cost: float) -> float:
    """NPV of year 1..N cash flows at `rate` (decimal), less the upfront cost."""
    flows = np.asarray(net_cash_flows, dtype=float)
    years = np.arange(1, len(flows) + 1)
    return float(np.sum(flows / (1 + rate) ** years) - initial_cost)


def approximate_irr(net_cash_flows: Sequence[float], initial_cost: float) -> float:
    """
    Approximate IRR by scanning discount rates from 1% to 25% in 0.25% steps.

    Returns the last rate (in %) before NPV turns non-positive, so the
    result is accurate to within one step. Returns 0 if NPV is still
    positive at 25%.
    """
    steps = int(round((IRR_SCAN_END - IRR_SCAN_START) / IRR_SCAN_STEP))
    for i in range(steps + 1):
        rate = IRR_SCAN_START + i * IRR_SCAN_STEP
        if calculate_npv(net_cash_flows, rate, initial_cost) <= 0:
            return (rate - IRR_SCAN_STEP) * 100
    return 0.0


def calculate_financial_metrics(params: FinancialParameters) -> FinancialMetrics:
    """
    Build the cash-flow ledger and summary metrics for a solar installation.

    Args:
        params: FinancialParameters for the system

    Returns:
        FinancialMetrics with payback, ROI, NPV, IRR, LCOE and the ledger
    """
    cumulative_cash_flow = -params.system_cost_usd
    monthly_loan_payment = 0.0
    annual_loan_payment = 0.0
    terms = params.financing_terms

    if terms is not None:
        monthly_loan_payment = calculate_monthly_loan_payment(
            terms.loan_amount, terms.interest_rate, terms.loan_term_years
        )
        annual_loan_payment = monthly_loan_payment * 12
        cumulative_cash_flow += terms.incentive_amount

    cash_flow = []
    total_savings = 0.0
    payback_period_years = params.analysis_years
    payback_achieved = False

    for year in range(1, params.analysis_years + 1):
        degradation_factor = (1 - params.panel_degradation / 100) ** (year - 1)
        year_production = params.annual_production_kwh * degradation_factor

        escalation_factor = (1 + params.rate_escalation / 100) ** (year - 1)
        year_rate = params.electricity_rate * escalation_factor

        year_savings = year_production * year_rate
        total_savings += year_savings

        if terms is not None and year <= terms.loan_term_years:
            year_loan_payment = annual_loan_payment
        else:
            year_loan_payment = 0.0

        net_cash_flow = year_savings - year_loan_payment
        cumulative_cash_flow += net_cash_flow

        # Payback saturates at the horizon if never reached
        if not payback_achieved and cumulative_cash_flow > 0:
            payback_period_years = year
            payback_achieved = True

        cash_flow.append(CashFlowYear(
            year=year,
            energy_production=year_production,
            energy_savings=year_savings,
            loan_payment=year_loan_payment,
            net_cash_flow=net_cash_flow,
            cumulative_cash_flow=cumulative_cash_flow
        ))

    net_flows = [row.net_cash_flow for row in cash_flow]
    total_production = sum(row.energy_production for row in cash_flow)

    return FinancialMetrics(
        payback_period_years=payback_period_years,
        roi_25_year=total_savings / params.system_cost_usd * 100,
        npv_25_year=calculate_npv(net_flows, params.discount_rate, params.system_cost_usd),
        irr_25_year=approximate_irr(net_flows, params.system_cost_usd),
        lcoe=params.system_cost_usd / total_production,
        first_year_savings=cash_flow[0].energy_savings,
        lifetime_savings=total_savings,
        monthly_loan_payment=monthly_loan_payment if terms is not None else None,
        cash_flow=cash_flow
    )


def estimate_usage_from_bill(monthly_bill: float, electricity_rate: float) -> float:
    """
    Estimate annual electricity usage from monthly bill.

    Args:
        monthly_bill: Average monthly electricity bill ($)
        electricity_rate: Electricity rate ($/kWh)

    Returns:
        Estimated annual usage in kWh
    """
    if electricity_rate <= 0:
        return 0
    monthly_usage = monthly_bill / electricity_rate
    return monthly_usage * 12


def calculate_offset_percentage(
    annual_production_kwh: float,
    annual_usage_kwh: float
) -> float:
    """
    Calculate what percentage of electricity usage is offset by solar.

    Args:
        annual_production_kwh: Annual solar production
        annual_usage_kwh: Annual electricity usage

    Returns:
        Offset percentage (0-100+, can exceed 100 if overproducing)
    """
    if annual_usage_kwh <= 0:
        return 0
    return (annual_production_kwh / annual_usage_kwh) * 100
