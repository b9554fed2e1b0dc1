import pytest
import requests

from feasibility.errors import InvalidInputError
from feasibility.rates import (
    BillComponents,
    RateEscalationTable,
    get_detailed_energy_rates,
    get_escalation_rate,
    project_rates,
)

# =============================================================================
# PROJECTION
# =============================================================================

def test_projection_compounds_escalation():
    projected = project_rates(0.10, 5, 3, start_year=2025)

    assert [year for year, _ in projected] == [2025, 2026, 2027]
    assert projected[0][1] == pytest.approx(0.10)
    assert projected[1][1] == pytest.approx(0.105)
    assert projected[2][1] == pytest.approx(0.11025)


@pytest.mark.parametrize("escalation", [0.5, 4.23, 12])
def test_projection_non_decreasing_with_positive_escalation(escalation):
    values = [rate for _, rate in project_rates(0.12, escalation, 25, start_year=2025)]
    assert all(b >= a for a, b in zip(values, values[1:]))


def test_projection_constant_with_zero_escalation():
    values = [rate for _, rate in project_rates(0.12, 0, 25, start_year=2025)]
    assert values == [0.12] * 25


def test_projection_returns_plain_python_types():
    year, rate = project_rates(0.12, 4.23, 1, start_year=2030)[0]
    assert type(year) is int
    assert type(rate) is float


def test_projection_defaults_to_current_year():
    from datetime import date
    assert project_rates(0.12, 4.23, 1)[0][0] == date.today().year


# =============================================================================
# ESCALATION LOOKUP
# =============================================================================

def test_county_override():
    assert get_escalation_rate('IL', 'Cook County') == 4.8
    assert get_escalation_rate('CA', 'Los Angeles County') == 5.2


def test_national_default():
    assert get_escalation_rate('IL') == 4.23
    assert get_escalation_rate('IL', 'Lake County') == 4.23
    # County name must match the state
    assert get_escalation_rate('TX', 'Cook County') == 4.23


def test_custom_table():
    table = RateEscalationTable(national=3.0, county={'Travis County, TX': 2.5})
    assert get_escalation_rate('TX', 'Travis County', table) == 2.5
    assert get_escalation_rate('TX', 'Harris County', table) == 3.0


# =============================================================================
# BILL COMPONENTS
# =============================================================================

def test_bill_components_sum_to_rate():
    components = BillComponents.from_total_rate(0.15)

    assert components.energy_rate_total == pytest.approx(0.15)
    assert components.demand_charges == 10.5
    components.validate_against(0.15)


def test_bill_components_mismatch_raises():
    components = BillComponents(0.05, 0.02, 10.5, 0.01, 0.01)
    with pytest.raises(InvalidInputError):
        components.validate_against(0.12)


# =============================================================================
# EIA-BACKED RATE DETAILS
# =============================================================================

def _fake_eia(fake_response, state_rows, regional_rows):
    def fake_get(url, params=None, timeout=None):
        if 'facets[census_division_name][]' in params:
            return fake_response({'response': {'data': regional_rows}})
        return fake_response({'response': {'data': state_rows}})
    return fake_get


def test_detailed_rates_from_eia(monkeypatch, fake_response):
    state_rows = [{'period': f'2024-{m:02d}', 'price': 14.0 - m * 0.1} for m in range(12, 0, -1)]
    regional_rows = [{'period': '2024-12', 'price': '13.5'}]
    monkeypatch.setattr('feasibility.eia.requests.get',
                        _fake_eia(fake_response, state_rows, regional_rows))

    details = get_detailed_energy_rates('IL', 'Cook County', api_key='test-key')

    assert not details.degraded
    assert details.total_rate == pytest.approx(0.128)
    assert len(details.historical_rates) == 12
    assert details.historical_rates[0] == ('2024-12', pytest.approx(0.128))
    assert details.regional_average == pytest.approx(0.135)
    assert details.escalation_rate == 4.8
    assert len(details.projected_rates) == 25
    assert details.projected_rates[1][1] == pytest.approx(0.128 * 1.048)
    assert details.components.energy_rate_total == pytest.approx(0.128)


def test_detailed_rates_fallback_on_network_error(monkeypatch):
    def failing_get(*args, **kwargs):
        raise requests.exceptions.ConnectionError("connection refused")
    monkeypatch.setattr('feasibility.eia.requests.get', failing_get)

    details = get_detailed_energy_rates('IL', 'Cook County', api_key='test-key')

    assert details.degraded
    assert 'connection refused' in details.error
    assert details.total_rate == 0.12
    assert details.escalation_rate == 4.23
    assert details.regional_average == pytest.approx(0.114)
    assert len(details.historical_rates) == 12
    assert details.historical_rates[1][1] == pytest.approx(0.12 * 0.995)
    assert len(details.projected_rates) == 25
    assert details.projected_rates[-1][1] == pytest.approx(0.12 * 1.0423 ** 24)


def test_detailed_rates_fallback_without_key(monkeypatch):
    monkeypatch.delenv('EIA_API_KEY', raising=False)

    details = get_detailed_energy_rates('CA')

    assert details.degraded
    assert details.total_rate == 0.12


def test_detailed_rates_fallback_on_non_object_rows(monkeypatch, fake_response):
    monkeypatch.setattr('feasibility.eia.requests.get',
                        lambda *a, **k: fake_response({'response': {'data': ['15.2']}}))

    details = get_detailed_energy_rates('CA', api_key='test-key')

    assert details.degraded
    assert details.total_rate == 0.12
    assert len(details.projected_rates) == 25
