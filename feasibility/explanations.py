"""
Plain-language explanations of each result metric, with sources.
"""

SEIA = ('Solar Energy Industries Association (SEIA)', 'https://www.seia.org/')
NREL_PVWATTS = ('National Renewable Energy Laboratory (NREL) - PVWatts Calculator',
                'https://pvwatts.nrel.gov/')
NREL_LCOE = ('National Renewable Energy Laboratory (NREL) - Cost of Energy Estimates',
             'https://www.nrel.gov/analysis/tech-lcoe-re-cost-est.html')
EIA_BROWSER = ('U.S. Energy Information Administration (EIA) - Electricity Data Browser',
               'https://www.eia.gov/electricity/data/browser/')

SOLAR_EXPLANATIONS = {
    'system_size': {
        'title': 'System Size',
        'formula': 'System Size (kW) = Number of Panels × Panel Capacity (kW)',
        'explanation': (
            "A larger system generates more electricity but costs more to install. "
            "The right size depends on consumption, available roof space and budget."
        ),
        'sources': [NREL_PVWATTS, SEIA],
    },
    'roof_area': {
        'title': 'Usable Roof Area',
        'formula': 'Usable Area = Roof Area − Edge Setbacks − Obstruction Clearances − Walkways',
        'explanation': (
            "Fire codes require setbacks from roof edges and clear walkways for "
            "maintenance. Vents, HVAC units, skylights and chimneys need a clearance "
            "ring. A standard panel is about 17.6 sq ft (65\" × 39\")."
        ),
        'sources': [SEIA, ('Department of Energy - Solar Rooftop Potential',
                           'https://www.energy.gov/eere/solar/solar-rooftop-potential')],
    },
    'annual_production': {
        'title': 'Annual Energy Production',
        'formula': 'Annual Production (kWh) = System Size (kW) × Sun Hours/Day × 365 × System Efficiency',
        'explanation': (
            "System efficiency covers orientation, shading, temperature and inverter "
            "losses, typically 70% to 80%. Output falls about 0.5% per year as panels age."
        ),
        'sources': [NREL_PVWATTS, EIA_BROWSER],
    },
    'energy_offset': {
        'title': 'Energy Offset',
        'formula': 'Energy Offset (%) = Annual Solar Production ÷ Annual Consumption × 100',
        'explanation': (
            "A 100% offset means the system generates as much electricity as the "
            "building uses in a year. Grid power is still needed at night."
        ),
        'sources': [SEIA, ('Department of Energy - Homeowner\'s Guide to Going Solar',
                           'https://www.energy.gov/eere/solar/homeowner-s-guide-going-solar')],
    },
    'system_cost': {
        'title': 'System Cost',
        'formula': 'System Cost ($) = System Size (kW) × 1000 × Cost per Watt ($)',
        'explanation': (
            "Cost per watt typically ranges from $2.50 to $3.50 for residential and "
            "$1.80 to $2.80 for commercial systems, including equipment, labor, "
            "permitting and soft costs."
        ),
        'sources': [('NREL - Solar Installed System Cost Benchmarks',
                     'https://www.nrel.gov/solar/solar-installed-system-cost.html')],
    },
    'federal_tax_credit': {
        'title': 'Federal Tax Credit',
        'formula': 'Federal Tax Credit ($) = System Cost ($) × 30%',
        'explanation': (
            "The 30% investment tax credit is available through 2032, then steps "
            "down to 26% in 2033 and 22% in 2034."
        ),
        'sources': [('SEIA - Solar Investment Tax Credit',
                     'https://www.seia.org/initiatives/solar-investment-tax-credit-itc')],
    },
    'payback_period': {
        'title': 'Payback Period',
        'formula': 'Payback = first year in which cumulative cash flow turns positive',
        'explanation': (
            "Cumulative cash flow starts at minus the system cost (plus incentives "
            "when financed) and adds each year's savings less loan payments. Savings "
            "grow with rate escalation and shrink with panel degradation. A payback "
            "of 25 years means the system does not pay back within the horizon."
        ),
        'sources': [NREL_LCOE],
    },
    'lifetime_savings': {
        'title': '25-Year Savings',
        'formula': 'Lifetime Savings = Σ (Production_y × Rate_y) for y = 1..25',
        'explanation': (
            "Production is reduced by annual degradation and the electricity rate "
            "grows by the annual escalation rate."
        ),
        'sources': [('NREL - PV Lifetime Project', 'https://www.nrel.gov/docs/fy19osti/72399.pdf')],
    },
    'roi': {
        'title': 'Return on Investment (ROI)',
        'formula': 'ROI (%) = 25-Year Savings ÷ System Cost × 100',
        'explanation': "Higher is better; the ROI depends on rates, performance and incentives.",
        'sources': [NREL_LCOE, SEIA],
    },
    'npv': {
        'title': 'Net Present Value (NPV)',
        'formula': 'NPV = Σ NetCashFlow_y ÷ (1 + r)^y − System Cost',
        'explanation': "A positive NPV means the system beats the discount rate r (5% by default).",
        'sources': [NREL_LCOE],
    },
    'irr': {
        'title': 'Internal Rate of Return (IRR)',
        'formula': 'IRR = discount rate at which NPV = 0',
        'explanation': (
            "Estimated by scanning rates from 1% to 25% in 0.25% steps, so it is "
            "accurate to ±0.25%. Shown as 0 when the NPV stays positive above 25%."
        ),
        'sources': [NREL_LCOE],
    },
    'lcoe': {
        'title': 'Levelized Cost of Energy (LCOE)',
        'formula': 'LCOE ($/kWh) = System Cost ÷ 25-Year Production',
        'explanation': "Compare against the utility rate: an LCOE below it means solar power is cheaper.",
        'sources': [NREL_LCOE],
    },
}


def get_explanation(metric: str) -> dict:
    """Explanation entry for a metric key, or a minimal placeholder."""
    return SOLAR_EXPLANATIONS.get(metric, {
        'title': metric.replace('_', ' ').title(),
        'formula': '',
        'explanation': '',
        'sources': [],
    })


def format_explanation(metric: str) -> str:
    """Markdown block for display under a metric."""
    entry = get_explanation(metric)
    lines = [f"**{entry['title']}**"]
    if entry['formula']:
        lines.append(f"`{entry['formula']}`")
    if entry['explanation']:
        lines.append(entry['explanation'])
    lines.extend(f"- [{name}]({url})" for name, url in entry['sources'])
    return "\n\n".join(lines)
