import math

import pytest

from feasibility.errors import InvalidInputError
from feasibility.financial_calcs import (
    FinancialParameters,
    FinancingTerms,
    approximate_irr,
    calculate_financial_metrics,
    calculate_monthly_loan_payment,
    calculate_npv,
    calculate_offset_percentage,
    estimate_usage_from_bill,
)
from feasibility.rates import BillComponents

# =============================================================================
# TEST FIXTURES
# =============================================================================

@pytest.fixture
def reference_system():
    """6 kW system at $20k, 8,400 kWh/yr, $0.12/kWh, 4.23% escalation, 0.5% degradation."""
    return FinancialParameters(
        system_cost_usd=20000,
        system_capacity_kw=6,
        annual_production_kwh=8400,
        electricity_rate=0.12,
        rate_escalation=4.23,
        panel_degradation=0.5,
    )


@pytest.fixture
def loan_terms():
    return FinancingTerms(
        loan_amount=20000,
        down_payment=0,
        interest_rate=6,
        loan_term_years=10,
        incentive_amount=6000,
    )


# =============================================================================
# CASH FLOW LEDGER
# =============================================================================

def test_flat_savings_without_degradation_or_escalation():
    params = FinancialParameters(
        system_cost_usd=15000,
        system_capacity_kw=5,
        annual_production_kwh=7000,
        electricity_rate=0.15,
        rate_escalation=0,
        panel_degradation=0,
    )
    result = calculate_financial_metrics(params)

    assert result.lifetime_savings == pytest.approx(7000 * 0.15 * 25, rel=1e-12)
    assert all(row.energy_savings == pytest.approx(1050) for row in result.cash_flow)
    assert result.monthly_loan_payment is None


def test_ledger_has_one_row_per_year(reference_system):
    result = calculate_financial_metrics(reference_system)

    assert [row.year for row in result.cash_flow] == list(range(1, 26))
    assert result.cash_flow[0].energy_production == pytest.approx(8400)
    assert result.cash_flow[1].energy_production == pytest.approx(8400 * 0.995)
    assert result.first_year_savings == pytest.approx(1008)
    # Cumulative is the running total of net flows after the upfront cost
    running = -20000
    for row in result.cash_flow:
        running += row.net_cash_flow
        assert row.cumulative_cash_flow == pytest.approx(running)


def test_reference_scenario_metrics(reference_system):
    """Savings grow ~3.71%/yr from $1,008, crossing $20k during year 16."""
    result = calculate_financial_metrics(reference_system)

    assert result.payback_period_years == 16
    assert result.lifetime_savings > reference_system.system_cost_usd
    assert result.lifetime_savings == pytest.approx(40372, rel=0.005)
    assert 0.09 <= result.lcoe <= 0.11
    assert result.roi_25_year == pytest.approx(result.lifetime_savings / 20000 * 100)
    assert result.npv_25_year > 0
    assert 4.75 <= result.irr_25_year <= 5.5


def test_payback_saturates_at_horizon():
    params = FinancialParameters(
        system_cost_usd=1_000_000,
        system_capacity_kw=5,
        annual_production_kwh=10,
        electricity_rate=0.12,
        rate_escalation=4.23,
        panel_degradation=0.5,
    )
    result = calculate_financial_metrics(params)

    assert result.payback_period_years == 25
    assert result.cash_flow[-1].cumulative_cash_flow < 0


def test_npv_uses_configured_discount_rate(reference_system):
    base = calculate_financial_metrics(reference_system)
    params = FinancialParameters(**{**vars(reference_system), 'discount_rate': 0.08})
    higher = calculate_financial_metrics(params)

    assert higher.npv_25_year < base.npv_25_year
    flows = [row.net_cash_flow for row in base.cash_flow]
    assert higher.npv_25_year == pytest.approx(calculate_npv(flows, 0.08, 20000))


def test_to_dataframe(reference_system):
    df = calculate_financial_metrics(reference_system).to_dataframe()

    assert len(df) == 25
    assert df.index.name == 'year'
    assert 'cumulative_cash_flow' in df.columns


# =============================================================================
# FINANCING
# =============================================================================

def test_monthly_payment_matches_annuity_formula():
    payment = calculate_monthly_loan_payment(20000, 6, 10)

    assert payment == pytest.approx(222.04, abs=0.01)
    # Payments discounted at the loan rate recreate the principal
    present_value = sum(payment / 1.005 ** k for k in range(1, 121))
    assert math.isclose(present_value, 20000, rel_tol=1e-9)


def test_loan_amortizes_to_zero():
    payment = calculate_monthly_loan_payment(20000, 6, 10)
    balance = 20000.0
    total_interest = 0.0
    for _ in range(120):
        interest = balance * 0.005
        total_interest += interest
        balance = balance + interest - payment

    assert abs(balance) < 1e-6
    assert payment * 120 == pytest.approx(20000 + total_interest)


def test_zero_interest_loan():
    assert calculate_monthly_loan_payment(12000, 0, 5) == pytest.approx(200)


def test_financed_cash_flow(reference_system, loan_terms):
    params = FinancialParameters(**{**vars(reference_system), 'financing_terms': loan_terms})
    result = calculate_financial_metrics(params)
    annual_payment = calculate_monthly_loan_payment(20000, 6, 10) * 12

    assert result.monthly_loan_payment == pytest.approx(annual_payment / 12)
    assert result.cash_flow[0].loan_payment == pytest.approx(annual_payment)
    assert result.cash_flow[9].loan_payment == pytest.approx(annual_payment)
    assert result.cash_flow[10].loan_payment == 0
    # Incentive offsets the upfront cost
    year1 = result.cash_flow[0]
    assert year1.cumulative_cash_flow == pytest.approx(-20000 + 6000 + 1008 - annual_payment)


# =============================================================================
# IRR / NPV
# =============================================================================

def test_irr_scan_brackets_true_rate():
    """A 25-year annuity priced just above 8% returns the 8% step."""
    cost = 1000
    payment = cost * 0.08 / (1 - 1.08 ** -25) + 0.02
    irr = approximate_irr([payment] * 25, cost)

    assert irr == pytest.approx(8.0)


def test_irr_zero_when_npv_positive_through_scan():
    assert approximate_irr([1000] * 25, 100) == 0.0


def test_irr_floor_when_npv_negative_at_first_rate():
    """Savings that never cover the cost stop the scan at 1%."""
    assert approximate_irr([10] * 25, 1000) == pytest.approx(0.75)


def test_npv_simple():
    assert calculate_npv([110], 0.10, 100) == pytest.approx(0)


# =============================================================================
# INVALID INPUT
# =============================================================================

@pytest.mark.parametrize("field,value", [
    ('system_cost_usd', 0),
    ('system_cost_usd', -5000),
    ('system_capacity_kw', 0),
    ('annual_production_kwh', 0),
    ('electricity_rate', -0.1),
])
def test_invalid_parameters_raise(reference_system, field, value):
    with pytest.raises(InvalidInputError):
        FinancialParameters(**{**vars(reference_system), field: value})


def test_invalid_loan_term_raises(reference_system):
    terms = FinancingTerms(loan_amount=1000, down_payment=0, interest_rate=5, loan_term_years=0)
    with pytest.raises(InvalidInputError):
        FinancialParameters(**{**vars(reference_system), 'financing_terms': terms})


def test_negative_interest_rate_raises(reference_system):
    terms = FinancingTerms(loan_amount=1000, down_payment=0, interest_rate=-1, loan_term_years=10)
    with pytest.raises(InvalidInputError):
        FinancialParameters(**{**vars(reference_system), 'financing_terms': terms})


def test_bill_components_must_match_rate(reference_system):
    FinancialParameters(**{**vars(reference_system),
                           'bill_components': BillComponents.from_total_rate(0.12)})
    with pytest.raises(InvalidInputError):
        FinancialParameters(**{**vars(reference_system),
                               'bill_components': BillComponents.from_total_rate(0.20)})


def test_invalid_input_is_a_value_error():
    assert issubclass(InvalidInputError, ValueError)


# =============================================================================
# USAGE HELPERS
# =============================================================================

def test_usage_from_bill():
    assert estimate_usage_from_bill(150, 0.15) == pytest.approx(12000)
    assert estimate_usage_from_bill(150, 0) == 0


def test_offset_percentage():
    assert calculate_offset_percentage(6000, 12000) == pytest.approx(50)
    assert calculate_offset_percentage(6000, 0) == 0
