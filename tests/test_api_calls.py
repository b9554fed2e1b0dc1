import pytest
import requests

from feasibility.api_calls import (
    extract_best_roof_segment,
    geocode_address,
    get_building_insights,
)

GEOCODE_OK = {
    'status': 'OK',
    'results': [{
        'formatted_address': '1600 Amphitheatre Pkwy, Mountain View, CA 94043, USA',
        'geometry': {'location': {'lat': 37.4220, 'lng': -122.0841}},
        'address_components': [
            {'long_name': 'Mountain View', 'short_name': 'Mountain View', 'types': ['locality', 'political']},
            {'long_name': 'Santa Clara County', 'short_name': 'Santa Clara County',
             'types': ['administrative_area_level_2', 'political']},
            {'long_name': 'California', 'short_name': 'CA',
             'types': ['administrative_area_level_1', 'political']},
        ],
    }],
}

INSIGHTS_OK = {
    'name': 'buildings/ChIJabc',
    'postalCode': '94043',
    'administrativeArea': 'CA',
    'imageryDate': {'year': 2022, 'month': 8, 'day': 4},
    'solarPotential': {
        'maxArrayPanelsCount': 120,
        'panelCapacityWatts': 400,
        'maxArrayAreaMeters2': 230.5,
        'maxSunshineHoursPerYear': 1850.2,
        'wholeRoofStats': {'areaMeters2': 410.0},
        'buildingStats': {'areaMeters2': 520.0},
        'roofSegmentStats': [
            {'pitchDegrees': 18, 'azimuthDegrees': 95, 'stats': {'sunshineQuantiles': [300, 1400]}},
            {'pitchDegrees': 22, 'azimuthDegrees': 185, 'stats': {'sunshineQuantiles': [500, 1800]}},
        ],
    },
}


# =============================================================================
# GEOCODING
# =============================================================================

def test_geocode_success(monkeypatch, fake_response):
    monkeypatch.setattr('feasibility.api_calls.requests.get',
                        lambda url, params=None, timeout=None: fake_response(GEOCODE_OK))

    result = geocode_address('1600 Amphitheatre Pkwy', 'key')

    assert result.success
    assert result.latitude == pytest.approx(37.4220)
    assert result.longitude == pytest.approx(-122.0841)
    assert result.state_code == 'CA'
    assert result.county == 'Santa Clara County'
    assert result.city == 'Mountain View'


def test_geocode_no_results(monkeypatch, fake_response):
    monkeypatch.setattr('feasibility.api_calls.requests.get',
                        lambda *a, **k: fake_response({'status': 'ZERO_RESULTS', 'results': []}))

    result = geocode_address('nowhere', 'key')

    assert not result.success
    assert 'ZERO_RESULTS' in result.error


def test_geocode_timeout(monkeypatch):
    def timeout(*args, **kwargs):
        raise requests.exceptions.Timeout()
    monkeypatch.setattr('feasibility.api_calls.requests.get', timeout)

    result = geocode_address('somewhere', 'key')

    assert not result.success
    assert 'timed out' in result.error


# =============================================================================
# BUILDING INSIGHTS
# =============================================================================

def test_building_insights_success(monkeypatch, fake_response):
    monkeypatch.setattr('feasibility.api_calls.requests.get',
                        lambda *a, **k: fake_response(INSIGHTS_OK))

    result = get_building_insights(37.4220, -122.0841, 'key')

    assert result.success
    assert result.max_panel_count == 120
    assert result.max_capacity_kw == pytest.approx(48.0)
    assert result.whole_roof_area_m2 == 410.0
    assert result.building_area_m2 == 520.0
    assert result.panel_capacity_watts == 400
    assert result.imagery_date == '2022-08-04'
    assert result.name == 'buildings/ChIJabc'
    assert len(result.roof_segments) == 2


def test_building_insights_falls_back_to_panel_configs(monkeypatch, fake_response):
    payload = {'solarPotential': {
        'panelCapacityWatts': 250,
        'solarPanelConfigs': [{'panelsCount': 4}, {'panelsCount': 20}],
        'wholeRoofStats': {'areaMeters2': 100},
    }}
    monkeypatch.setattr('feasibility.api_calls.requests.get',
                        lambda *a, **k: fake_response(payload))

    result = get_building_insights(0, 0, 'key')

    assert result.max_panel_count == 20
    assert result.max_capacity_kw == pytest.approx(5.0)
    assert result.building_area_m2 is None
    assert result.imagery_date is None


@pytest.mark.parametrize("status,message", [
    (404, 'No solar data available'),
    (403, 'API key invalid'),
    (500, 'API error: 500'),
])
def test_building_insights_http_errors(monkeypatch, fake_response, status, message):
    monkeypatch.setattr('feasibility.api_calls.requests.get',
                        lambda *a, **k: fake_response({}, status_code=status))

    result = get_building_insights(0, 0, 'key')

    assert not result.success
    assert message in result.error
    assert result.whole_roof_area_m2 == 0


def test_building_insights_without_solar_potential(monkeypatch, fake_response):
    monkeypatch.setattr('feasibility.api_calls.requests.get',
                        lambda *a, **k: fake_response({'name': 'buildings/x'}))

    result = get_building_insights(0, 0, 'key')

    assert not result.success


# =============================================================================
# ROOF SEGMENTS
# =============================================================================

def test_best_roof_segment_is_sunniest():
    best = extract_best_roof_segment(INSIGHTS_OK['solarPotential']['roofSegmentStats'])
    assert best == {'tilt': 22, 'azimuth': 185}


def test_best_roof_segment_defaults():
    assert extract_best_roof_segment([]) == {'tilt': 20.0, 'azimuth': 180.0}
