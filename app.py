"""
Solar Feasibility Estimator
Streamlit application for estimating rooftop solar layout, production and
financial returns for a building.
"""

import logging
import os

import streamlit as st
import pandas as pd
import plotly.graph_objects as go

from feasibility.api_calls import (
    geocode_address,
    get_building_insights,
    extract_best_roof_segment
)
from feasibility.config import load_settings
from feasibility.eia import get_energy_data
from feasibility.errors import InvalidInputError
from feasibility.explanations import format_explanation
from feasibility.facility_lookup import LocationInfo, get_facility_annual_cost
from feasibility.financial_calcs import (
    FinancialParameters,
    FinancingTerms,
    calculate_financial_metrics,
    calculate_offset_percentage,
    estimate_usage_from_bill
)
from feasibility.rates import get_detailed_energy_rates
from feasibility.roof_layout import (
    ObstructionType,
    RoofObstruction,
    SetbackRules,
    calculate_layout_from_insights,
    calculate_orientation_yield_factor
)
from feasibility.sizing import calculate_optimal_system_size
from feasibility.solar_metrics import calculate_solar_metrics, estimate_annual_production
from feasibility.state_data import (
    DEFAULT_COST_PER_WATT,
    FEDERAL_ITC_RATE,
    NATIONAL_RATE_ESCALATION,
    SQFT_PER_M2,
    STATE_NAMES,
    detect_state_from_address
)

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
log = logging.getLogger(__name__)

# Page configuration
st.set_page_config(
    page_title="Solar Feasibility Estimator",
    page_icon="☀️",
    layout="wide",
    initial_sidebar_state="expanded"
)

STEPS = ["1. Property", "2. Roof Layout", "3. Energy Use", "4. Financing", "5. Results"]
OBSTRUCTION_COLUMNS = ["type", "radius_ft", "width_ft", "height_ft"]


def get_secret(name: str):
    """Get a key from Streamlit secrets or environment variable."""
    # Try Streamlit secrets first (for deployment)
    try:
        return st.secrets[name]
    except (KeyError, FileNotFoundError):
        pass
    return os.environ.get(name)


@st.cache_resource
def get_settings():
    return load_settings(
        google_api_key=get_secret("GOOGLE_API_KEY"),
        eia_api_key=get_secret("EIA_API_KEY"),
        perplexity_api_key=get_secret("PERPLEXITY_API_KEY")
    )


def get_google_key() -> str:
    key = get_settings().google_api_key
    if not key:
        st.error(
            "Google API key not found. Please add it to `.streamlit/secrets.toml` "
            "or set the `GOOGLE_API_KEY` environment variable."
        )
        st.stop()
    return key


def initialize_session_state():
    """Initialize session state variables."""
    defaults = {
        'step': 1,
        'address': '',
        'organization': '',
        'geocoding_result': None,
        'solar_insights': None,
        'roof_layout': None,
        'yield_factor': 1.0,
        'tilt': 20.0,
        'azimuth': 180.0,
        'energy_data': None,
        'rate_details': None,
        'facility_cost': None,
        'electricity_rate': 0.12,
        'rate_escalation': NATIONAL_RATE_ESCALATION,
        'state_code': 'CA',
        'county': '',
        'annual_usage_kwh': 100000.0,
        'system_size_kw': 0.0,
        'annual_production_kwh': 0.0,
        'financing_type': 'Cash Purchase',
        'financing_params': {},
        'obstructions': pd.DataFrame(columns=OBSTRUCTION_COLUMNS),
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def render_step_indicator():
    """Render the step progress indicator."""
    cols = st.columns(len(STEPS))
    for i, (col, step_name) in enumerate(zip(cols, STEPS), 1):
        if i < st.session_state.step:
            col.markdown(f"✅ **{step_name}**")
        elif i == st.session_state.step:
            col.markdown(f"🔵 **{step_name}**")
        else:
            col.markdown(f"⚪ {step_name}")

    st.divider()


def nav_buttons(back_step=None, next_step=None, next_label="Continue →"):
    col1, col2, col3 = st.columns([1, 1, 1])
    with col1:
        if back_step and st.button("← Back", use_container_width=True):
            st.session_state.step = back_step
            st.rerun()
    with col3:
        if next_step and st.button(next_label, type="primary", use_container_width=True):
            st.session_state.step = next_step
            st.rerun()


def warn_if_degraded(result, label: str):
    if result is not None and result.degraded:
        st.warning(f"{label} unavailable, using default estimates. ({result.error})")


def step1_property_input():
    """Step 1: Property address input, geocoding and building insights."""
    st.header("📍 Step 1: Enter the Property")

    col1, col2 = st.columns([2, 1])

    with col1:
        organization = st.text_input(
            "Organization / Facility Name",
            value=st.session_state.organization,
            placeholder="Lincoln High School",
            help="Used to research the facility's energy costs"
        )
        address = st.text_input(
            "Street Address",
            value=st.session_state.address,
            placeholder="1600 Amphitheatre Pkwy, Mountain View, CA",
            help="Enter the full street address including city and state"
        )

        if st.button("🔍 Analyze Property", type="primary", use_container_width=True):
            if not address:
                st.error("Please enter an address.")
                return

            with st.spinner("Geocoding address..."):
                geo_result = geocode_address(address, get_google_key())

                if not geo_result.success:
                    st.error(f"Could not find address: {geo_result.error}")
                    return

                st.session_state.address = address
                st.session_state.organization = organization
                st.session_state.geocoding_result = geo_result
                state_code = (geo_result.state_code
                              or detect_state_from_address(geo_result.formatted_address or '')
                              or detect_state_from_address(address))
                if state_code in STATE_NAMES:
                    st.session_state.state_code = state_code
                else:
                    log.warning("No state found for %r, keeping %s", address, st.session_state.state_code)
                st.session_state.county = geo_result.county

            with st.spinner("Fetching building insights..."):
                solar_result = get_building_insights(
                    geo_result.latitude,
                    geo_result.longitude,
                    get_google_key()
                )

                if not solar_result.success:
                    st.error(f"No roof data for this building: {solar_result.error}")
                    return

                st.session_state.solar_insights = solar_result
                roof_info = extract_best_roof_segment(solar_result.roof_segments)
                st.session_state.tilt = roof_info['tilt']
                st.session_state.azimuth = roof_info['azimuth']

            st.success("✅ Property analyzed successfully!")
            st.session_state.step = 2
            st.rerun()

    with col2:
        if st.session_state.geocoding_result:
            geo = st.session_state.geocoding_result
            st.markdown(f"**Found:** {geo.formatted_address}")

            fig = go.Figure(go.Scattermapbox(
                lat=[geo.latitude],
                lon=[geo.longitude],
                mode='markers',
                marker=dict(size=14, color='red'),
                text=[geo.formatted_address]
            ))
            fig.update_layout(
                mapbox=dict(
                    style="open-street-map",
                    center=dict(lat=geo.latitude, lon=geo.longitude),
                    zoom=17
                ),
                margin=dict(l=0, r=0, t=0, b=0),
                height=300
            )
            st.plotly_chart(fig, use_container_width=True)


def obstructions_from_table(table: pd.DataFrame, geo) -> list:
    """Convert edited obstruction rows into RoofObstruction objects."""
    obstructions = []
    for row in table.dropna(how='all').to_dict('records'):
        radius = row.get('radius_ft')
        kind = row.get('type')
        obstructions.append(RoofObstruction(
            obstruction_type=ObstructionType(kind if isinstance(kind, str) and kind else 'other'),
            latitude=geo.latitude,
            longitude=geo.longitude,
            radius_ft=float(radius) if pd.notna(radius) else None,
            width_ft=float(row['width_ft']) if pd.notna(row.get('width_ft')) else None,
            height_ft=float(row['height_ft']) if pd.notna(row.get('height_ft')) else None
        ))
    return obstructions


def step2_roof_layout():
    """Step 2: Roof layout with setbacks and obstructions."""
    st.header("🏠 Step 2: Roof Layout")

    solar = st.session_state.solar_insights
    geo = st.session_state.geocoding_result
    if not solar:
        st.warning("Please complete Step 1 first.")
        nav_buttons(back_step=1)
        return

    col1, col2 = st.columns(2)

    with col1:
        st.subheader("Google Solar API Data")
        st.metric("Whole Roof Area", f"{solar.whole_roof_area_m2 * SQFT_PER_M2:,.0f} sq ft")
        st.metric("Max Panel Count", f"{solar.max_panel_count} panels")
        st.metric("Max Array Capacity", f"{solar.max_capacity_kw:,.1f} kW")
        st.metric("Annual Sunshine", f"{solar.max_sunshine_hours:,.0f} hours")
        if solar.imagery_date:
            st.caption(f"Imagery date: {solar.imagery_date}")

    with col2:
        st.subheader("Panels and Setbacks")
        panel_width = st.number_input("Panel Width (ft)", min_value=1.0, max_value=10.0,
                                      value=3.25, step=0.05)
        panel_height = st.number_input("Panel Height (ft)", min_value=1.0, max_value=10.0,
                                       value=5.42, step=0.05)
        rules = SetbackRules(
            edge_setback_ft=st.number_input("Edge Setback (ft)", 0.0, 20.0, 4.0, 0.5),
            obstruction_setback_ft=st.number_input("Obstruction Clearance (ft)", 0.0, 20.0, 4.0, 0.5),
            walkway_width_ft=st.number_input("Walkway Width (ft)", 0.0, 10.0, 3.5, 0.5)
        )

    st.subheader("Roof Obstructions")
    st.caption("Give a radius for round obstructions, or width and height for rectangular ones.")
    table = st.data_editor(
        st.session_state.obstructions,
        num_rows="dynamic",
        use_container_width=True,
        column_config={
            "type": st.column_config.SelectboxColumn(
                "Type", options=[t.value for t in ObstructionType], default="vent"
            ),
            "radius_ft": st.column_config.NumberColumn("Radius (ft)", min_value=0.0),
            "width_ft": st.column_config.NumberColumn("Width (ft)", min_value=0.0),
            "height_ft": st.column_config.NumberColumn("Height (ft)", min_value=0.0),
        }
    )
    st.session_state.obstructions = table

    try:
        obstructions = obstructions_from_table(table, geo)
        layout = calculate_layout_from_insights(
            solar, panel_width, panel_height, obstructions=obstructions, setback_rules=rules
        )
    except InvalidInputError as e:
        st.error(f"Cannot compute layout: {e}")
        nav_buttons(back_step=1)
        return

    st.session_state.roof_layout = layout
    st.session_state.yield_factor = calculate_orientation_yield_factor(
        st.session_state.azimuth, st.session_state.tilt
    )

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Usable Area", f"{layout.usable_area_sqft:,.0f} sq ft")
    col2.metric("Max Panels", f"{layout.max_panel_count}",
                help=f"Grid: {layout.panel_rows} rows × {layout.panel_columns} columns")
    col3.metric("Capacity", f"{layout.total_capacity_kw:,.1f} kW")
    col4.metric("Orientation Yield", f"{st.session_state.yield_factor:.0%}",
                help=f"Best segment: {st.session_state.azimuth:.0f}° azimuth, "
                     f"{st.session_state.tilt:.0f}° tilt")

    losses = pd.DataFrame({
        'Area (sq ft)': [layout.setback_area_sqft, layout.obstruction_area_sqft,
                         layout.walkway_area_sqft, layout.usable_area_sqft]
    }, index=['Edge setbacks', 'Obstructions', 'Walkways', 'Usable'])
    st.bar_chart(losses)
    st.caption(
        f"Estimated installation: {layout.installation_time_hours:,.0f} hours, "
        f"${layout.installation_cost_usd:,.0f}"
    )
    with st.expander("How is this calculated?"):
        st.markdown(format_explanation('roof_area'))

    st.divider()
    nav_buttons(back_step=1, next_step=3)


def step3_energy_use():
    """Step 3: Electricity rates and facility consumption."""
    st.header("⚡ Step 3: Energy Rates and Usage")

    col1, col2 = st.columns(2)
    settings = get_settings()

    with col1:
        st.subheader("Electricity Rate")
        codes = list(STATE_NAMES.keys())
        state_code = st.selectbox(
            "State",
            options=codes,
            index=codes.index(st.session_state.state_code)
                if st.session_state.state_code in codes else 0,
            format_func=lambda x: f"{STATE_NAMES[x]} ({x})"
        )
        county = st.text_input("County", value=st.session_state.county)
        sector = st.radio("Sector", ["COM", "RES"], horizontal=True,
                          format_func=lambda x: {"COM": "Commercial", "RES": "Residential"}[x])

        if st.button("📡 Fetch EIA Rates", use_container_width=True):
            with st.spinner("Fetching EIA data..."):
                st.session_state.energy_data = get_energy_data(
                    state_code, sector, api_key=settings.eia_api_key,
                    timeout=settings.request_timeout
                )
                st.session_state.rate_details = get_detailed_energy_rates(
                    state_code, county or None, sector, api_key=settings.eia_api_key,
                    timeout=settings.request_timeout
                )
            details = st.session_state.rate_details
            st.session_state.electricity_rate = details.total_rate
            st.session_state.rate_escalation = details.escalation_rate

        st.session_state.state_code = state_code
        st.session_state.county = county

        warn_if_degraded(st.session_state.energy_data, "EIA energy data")
        warn_if_degraded(st.session_state.rate_details, "EIA rate history")

        st.session_state.electricity_rate = st.number_input(
            "Electricity Rate ($/kWh)",
            min_value=0.01,
            max_value=1.0,
            value=float(st.session_state.electricity_rate),
            step=0.01,
            format="%.3f"
        )
        st.session_state.rate_escalation = st.number_input(
            "Annual Rate Escalation (%)",
            min_value=0.0,
            max_value=15.0,
            value=float(st.session_state.rate_escalation),
            step=0.1
        )

    with col2:
        st.subheader("Facility Usage")

        if st.button("🔎 Research Facility Energy Cost", use_container_width=True):
            geo = st.session_state.geocoding_result
            location = LocationInfo(
                organization=st.session_state.organization,
                city=geo.city if geo else '',
                county=county,
                state=state_code
            )
            with st.spinner("Researching facility..."):
                st.session_state.facility_cost = get_facility_annual_cost(
                    location, api_key=settings.perplexity_api_key
                )
            estimate = st.session_state.facility_cost
            if not estimate.degraded:
                st.session_state.annual_usage_kwh = estimate_usage_from_bill(
                    estimate.annual_cost_usd / 12, st.session_state.electricity_rate
                )

        estimate = st.session_state.facility_cost
        if estimate is not None:
            if estimate.degraded:
                st.warning(f"Facility research failed ({estimate.error}). Enter usage manually.")
            else:
                st.info(f"Estimated annual energy cost: **${estimate.annual_cost_usd:,.0f}**")

        st.session_state.annual_usage_kwh = st.number_input(
            "Annual Electricity Usage (kWh)",
            min_value=0.0,
            max_value=100_000_000.0,
            value=float(st.session_state.annual_usage_kwh),
            step=1000.0
        )

    details = st.session_state.rate_details
    if details is not None:
        st.subheader("📈 Projected Electricity Rates")
        projection = pd.DataFrame(details.projected_rates, columns=['Year', 'Rate ($/kWh)'])
        st.line_chart(projection.set_index('Year'))
        comp = details.components
        st.caption(
            f"Bill breakdown: energy ${comp.base_energy_rate:.3f}, delivery "
            f"${comp.delivery_charges:.3f}, regulatory ${comp.regulatory_fees:.3f}, "
            f"surcharges ${comp.location_surcharges:.3f} per kWh; demand "
            f"${comp.demand_charges:.2f}/kW. Regional average ${details.regional_average:.3f}/kWh."
        )

    st.divider()
    nav_buttons(back_step=2, next_step=4)


def step4_financing():
    """Step 4: System size and financing."""
    st.header("💰 Step 4: System Size and Financing")

    layout = st.session_state.roof_layout
    max_kw = layout.total_capacity_kw if layout else 0.0
    energy = st.session_state.energy_data
    sun_hours = energy.sun_hours_per_day if energy else 4.5

    col1, col2 = st.columns(2)

    with col1:
        st.subheader("System Size")
        target_payback = st.slider("Target Payback (years)", 3, 25, 10)
        cost_per_watt = st.number_input("Installed Cost ($/W)", 0.5, 10.0,
                                        DEFAULT_COST_PER_WATT, 0.05)
        try:
            suggested_kw = calculate_optimal_system_size(
                target_payback,
                st.session_state.electricity_rate,
                st.session_state.annual_usage_kwh,
                cost_per_watt,
                st.session_state.rate_escalation
            )
        except InvalidInputError as e:
            st.error(str(e))
            suggested_kw = 0.0
        st.caption(f"Suggested size for a {target_payback}-year payback: "
                   f"{suggested_kw:,.1f} kW (roof fits {max_kw:,.1f} kW)")

        default_size = min(suggested_kw, max_kw) if max_kw else suggested_kw
        system_size = st.number_input(
            "System Size (kW)",
            min_value=0.0,
            value=float(st.session_state.system_size_kw or round(default_size, 1)),
            step=0.5
        )
        st.session_state.system_size_kw = system_size
        st.session_state.annual_production_kwh = estimate_annual_production(
            system_size, sun_hours, yield_factor=st.session_state.yield_factor
        )
        st.metric("Estimated Annual Production",
                  f"{st.session_state.annual_production_kwh:,.0f} kWh")
        degradation = st.number_input("Panel Degradation (%/yr)", 0.0, 3.0, 0.5, 0.1)

    with col2:
        st.subheader("Financing")
        financing_type = st.radio(
            "Select Financing Type",
            ["Cash Purchase", "Solar Loan"],
            horizontal=True,
            index=["Cash Purchase", "Solar Loan"].index(st.session_state.financing_type)
        )
        st.session_state.financing_type = financing_type

        system_cost = st.number_input(
            "Total System Cost",
            min_value=0.0,
            value=float(system_size * 1000 * cost_per_watt),
            step=500.0,
            format="%.0f"
        )
        params = {
            'system_cost': system_cost,
            'degradation': degradation,
            'financing': None
        }

        if financing_type == "Solar Loan":
            down_payment = st.number_input("Down Payment", 0.0, system_cost, 0.0, 500.0,
                                           format="%.0f")
            interest_rate = st.slider("Interest Rate (%)", 0.0, 15.0, 6.0, 0.25)
            loan_term = st.selectbox("Loan Term (years)", [5, 7, 10, 12, 15, 20, 25], index=2)
            incentive = st.number_input(
                "Incentives ($)", 0.0, max(system_cost, 1.0),
                float(system_cost * FEDERAL_ITC_RATE), 500.0, format="%.0f",
                help="Default is the 30% federal investment tax credit"
            )
            params['financing'] = FinancingTerms(
                loan_amount=max(system_cost - down_payment, 0.0),
                down_payment=down_payment,
                interest_rate=interest_rate,
                loan_term_years=loan_term,
                incentive_amount=incentive
            )

        st.session_state.financing_params = params

    st.divider()
    nav_buttons(back_step=3, next_step=5, next_label="Calculate Results →")


def metric_with_help(col, label, value, key):
    col.metric(label, value)
    with col.expander("ⓘ"):
        st.markdown(format_explanation(key))


def step5_results():
    """Step 5: Results dashboard."""
    st.header("📊 Step 5: Feasibility Results")

    params = st.session_state.financing_params
    if not params:
        st.warning("Please complete all previous steps.")
        nav_buttons(back_step=4)
        return

    try:
        financial_params = FinancialParameters(
            system_cost_usd=params['system_cost'],
            system_capacity_kw=st.session_state.system_size_kw,
            annual_production_kwh=st.session_state.annual_production_kwh,
            electricity_rate=st.session_state.electricity_rate,
            rate_escalation=st.session_state.rate_escalation,
            panel_degradation=params['degradation'],
            financing_terms=params['financing'],
            discount_rate=get_settings().discount_rate
        )
        result = calculate_financial_metrics(financial_params)
    except InvalidInputError as e:
        st.error(f"Cannot calculate results: {e}")
        nav_buttons(back_step=4)
        return

    offset_pct = calculate_offset_percentage(
        st.session_state.annual_production_kwh,
        st.session_state.annual_usage_kwh
    )

    col1, col2, col3, col4 = st.columns(4)
    metric_with_help(col1, "System Size", f"{st.session_state.system_size_kw:,.1f} kW", 'system_size')
    metric_with_help(col2, "Annual Production",
                     f"{st.session_state.annual_production_kwh:,.0f} kWh", 'annual_production')
    metric_with_help(col3, "Usage Offset", f"{min(offset_pct, 100):.0f}%", 'energy_offset')
    metric_with_help(col4, "Payback", f"{result.payback_period_years} years", 'payback_period')

    col1, col2, col3, col4 = st.columns(4)
    metric_with_help(col1, "25-Year ROI", f"{result.roi_25_year:,.0f}%", 'roi')
    metric_with_help(col2, "NPV", f"${result.npv_25_year:,.0f}", 'npv')
    metric_with_help(col3, "IRR", f"{result.irr_25_year:.2f}%", 'irr')
    metric_with_help(col4, "LCOE", f"${result.lcoe:.3f}/kWh", 'lcoe')

    col1, col2, col3 = st.columns(3)
    col1.metric("Year 1 Savings", f"${result.first_year_savings:,.0f}")
    metric_with_help(col2, "Lifetime Savings", f"${result.lifetime_savings:,.0f}", 'lifetime_savings')
    if result.monthly_loan_payment is not None:
        col3.metric("Monthly Loan Payment", f"${result.monthly_loan_payment:,.0f}")

    st.divider()

    ledger = result.to_dataframe()

    st.subheader("📈 Cumulative Cash Flow")
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=ledger.index,
        y=ledger['net_cash_flow'],
        name='Net Cash Flow',
        marker_color='rgba(0, 128, 255, 0.5)'
    ))
    fig.add_trace(go.Scatter(
        x=ledger.index,
        y=ledger['cumulative_cash_flow'],
        mode='lines+markers',
        name='Cumulative Cash Flow',
        line=dict(color='green', width=3)
    ))
    fig.add_hline(y=0, line_dash="dash", line_color="red",
                  annotation_text="Break-even")
    fig.update_layout(
        xaxis_title="Year",
        yaxis_title="Cash Flow ($)",
        hovermode='x unified',
        height=400
    )
    st.plotly_chart(fig, use_container_width=True)

    with st.expander("Year-by-year cash flow"):
        st.dataframe(ledger.style.format("{:,.0f}"), use_container_width=True)

    solar = st.session_state.solar_insights
    energy = st.session_state.energy_data
    if solar is not None and energy is not None:
        try:
            facility = calculate_solar_metrics(solar, energy)
        except InvalidInputError as e:
            log.warning("Skipping facility summary: %s", e)
        else:
            st.subheader("🏢 Facility Sizing Summary")
            col1, col2, col3, col4 = st.columns(4)
            col1.metric("Monthly Consumption", f"{facility.facility_monthly_consumption_kwh:,.0f} kWh")
            col2.metric("Monthly Electricity Cost", f"${facility.monthly_electricity_cost:,.0f}")
            col3.metric("Panels Needed", f"{facility.number_of_solar_panels}")
            col4.metric("Months to ROI",
                        f"{facility.roi_months}" if facility.roi_months else "> 240")

    st.divider()
    col1, col2, col3 = st.columns([1, 1, 1])
    with col1:
        if st.button("← Back to Financing", use_container_width=True):
            st.session_state.step = 4
            st.rerun()
    with col3:
        if st.button("🔄 Start New Analysis", use_container_width=True):
            for key in list(st.session_state.keys()):
                del st.session_state[key]
            st.rerun()


def main():
    """Main application entry point."""

    initialize_session_state()

    with st.sidebar:
        st.title("☀️ Solar Feasibility")
        st.divider()

        st.markdown("### About")
        st.markdown("""
        This tool estimates:
        - Usable roof area and panel layout
        - Solar production for the building
        - Payback, ROI, NPV, IRR and LCOE

        **Powered by:**
        - Google Solar API
        - EIA electricity data
        - Perplexity facility research
        """)

        st.divider()

        st.markdown("### Quick Jump")
        step = st.radio(
            "Go to step:",
            list(range(1, len(STEPS) + 1)),
            index=st.session_state.step - 1,
            format_func=lambda x: STEPS[x - 1],
            label_visibility="collapsed"
        )
        if step != st.session_state.step:
            st.session_state.step = step
            st.rerun()

    st.title("☀️ Solar Feasibility Estimator")

    render_step_indicator()

    if st.session_state.step == 1:
        step1_property_input()
    elif st.session_state.step == 2:
        step2_roof_layout()
    elif st.session_state.step == 3:
        step3_energy_use()
    elif st.session_state.step == 4:
        step4_financing()
    elif st.session_state.step == 5:
        step5_results()


if __name__ == "__main__":
    main()
