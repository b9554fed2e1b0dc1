import pytest

from feasibility.api_calls import SolarInsightsResult
from feasibility.eia import EnergyData
from feasibility.errors import InvalidInputError
from feasibility.solar_metrics import (
    calculate_solar_metrics,
    estimate_annual_production,
    months_to_roi,
)


def make_insights(roof_m2=100.0, building_m2=None):
    return SolarInsightsResult(
        max_panel_count=40, max_capacity_kw=16, max_sunshine_hours=1700,
        max_array_area_m2=80, whole_roof_area_m2=roof_m2, building_area_m2=building_m2,
        panel_capacity_watts=400, roof_segments=[], imagery_date=None, success=True,
        name='buildings/test'
    )


@pytest.fixture
def conservative_energy():
    return EnergyData(electricity_rate=0.11, consumption_benchmark=0.8, sun_hours_per_day=4.5)


def test_facility_sizing(conservative_energy):
    """100 m² roof, no footprint: building area falls back to twice the roof."""
    result = calculate_solar_metrics(make_insights(), conservative_energy)

    assert result.usable_rooftop_area_sqft == pytest.approx(1076.4 * 0.7)
    assert result.building_area_sqft == pytest.approx(2152.8)
    assert result.facility_monthly_consumption_kwh == pytest.approx(2152.8 * 0.8 * 0.85)
    assert result.monthly_electricity_cost == pytest.approx(2152.8 * 0.8 * 0.85 * 0.11 * 1.2)
    # Consumption needs 32 panels; the roof fits 42
    assert result.number_of_solar_panels == 32
    assert result.system_capacity_kw == pytest.approx(12.8)
    assert result.monthly_solar_generation_kwh == pytest.approx(12.8 * 4.5 * 0.75 * 30 * 0.95)
    assert result.energy_offset_percentage == pytest.approx(1231.2 / 1463.904 * 100)
    assert result.monthly_savings == pytest.approx(1231.2 * 0.11)
    assert result.installation_cost == pytest.approx(36480)
    # Degraded savings never cover the cost within 20 years
    assert result.roi_months == 0
    assert result.facility_name == 'buildings/test'


def test_roof_limits_panel_count(conservative_energy):
    result = calculate_solar_metrics(make_insights(roof_m2=20, building_m2=5000), conservative_energy)

    assert result.number_of_solar_panels == int(20 * 10.764 * 0.7 // 17.6)
    assert result.energy_offset_percentage < 100


def test_offset_capped_at_consumption():
    energy = EnergyData(electricity_rate=0.2, consumption_benchmark=0.01, sun_hours_per_day=8)
    result = calculate_solar_metrics(make_insights(roof_m2=500), energy)

    assert result.energy_offset_percentage == pytest.approx(100)


def test_missing_roof_raises(conservative_energy):
    with pytest.raises(InvalidInputError):
        calculate_solar_metrics(make_insights(roof_m2=0), conservative_energy)


def test_months_to_roi():
    assert months_to_roi(100, 500, monthly_degradation=0) == 5
    assert months_to_roi(100, 10**9) == 0
    assert months_to_roi(100, 0) == 0


def test_annual_production():
    assert estimate_annual_production(10, 5) == pytest.approx(13687.5)
    assert estimate_annual_production(10, 5, yield_factor=0.8) == pytest.approx(10950)
