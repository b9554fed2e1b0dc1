"""
Roof layout estimation: usable area after setbacks, obstructions and
walkways, panel count and grid, and installation time/cost.

The roof is treated as a square of the given area. Obstruction clearances
are summed without removing overlaps.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Optional

from .errors import InvalidInputError
from .state_data import (
    DEFAULT_COST_PER_WATT,
    DEFAULT_PANEL_WATTAGE,
    INSTALL_HOURS_PER_KW,
    SQFT_PER_M2,
)

WALKWAY_SPACING_FT = 20.0
OPTIMAL_TILT_DEG = 35.0
MIN_YIELD_FACTOR = 0.6

# Relative yield by roof face
ORIENTATION_EFFICIENCY = {
    'south': 1.0,
    'west': 0.85,  # afternoon production
    'east': 0.8,  # morning production
    'north': 0.65,
}


class ObstructionType(str, Enum):
    VENT = "vent"
    HVAC = "hvac"
    SKYLIGHT = "skylight"
    CHIMNEY = "chimney"
    OTHER = "other"


@dataclass(frozen=True)
class RoofObstruction:
    """A circular (radius) or rectangular (width x height) roof obstruction.

    Position is kept for display; it does not enter the area math.
    """
    obstruction_type: ObstructionType
    latitude: float
    longitude: float
    radius_ft: Optional[float] = None
    width_ft: Optional[float] = None
    height_ft: Optional[float] = None

    def __post_init__(self):
        if not self.radius_ft and (self.width_ft is None or self.height_ft is None):
            raise InvalidInputError("obstruction needs radius_ft or both width_ft and height_ft")
        for name in ('radius_ft', 'width_ft', 'height_ft'):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise InvalidInputError(f"{name} must be >= 0, got {value}")

    @property
    def is_circular(self) -> bool:
        return bool(self.radius_ft)

    def cleared_area(self, clearance_ft: float) -> float:
        """Footprint including the clearance ring around it (sq ft)."""
        if self.is_circular:
            return math.pi * (self.radius_ft + clearance_ft) ** 2
        return (self.width_ft + 2 * clearance_ft) * (self.height_ft + 2 * clearance_ft)


@dataclass(frozen=True)
class SetbackRules:
    edge_setback_ft: float = 4.0
    obstruction_setback_ft: float = 4.0
    walkway_width_ft: float = 3.5


DEFAULT_SETBACK_RULES = SetbackRules()


@dataclass
class RoofLayoutResult:
    """Derived roof layout summary."""
    usable_area_sqft: float
    max_panel_count: int
    panel_rows: int
    panel_columns: int
    walkway_area_sqft: float
    setback_area_sqft: float
    obstruction_area_sqft: float
    total_capacity_kw: float
    installation_time_hours: float
    installation_cost_usd: float
    orientation_efficiency: Dict[str, float] = field(
        default_factory=lambda: dict(ORIENTATION_EFFICIENCY)
    )


def calculate_roof_layout(
    roof_area_sqft: float,
    panel_width_ft: float,
    panel_height_ft: float,
    obstructions: Iterable[RoofObstruction] = (),
    setback_rules: SetbackRules = DEFAULT_SETBACK_RULES,
    panel_capacity_watts: float = DEFAULT_PANEL_WATTAGE,
    aspect_ratio: float = 1.0,
    cost_per_watt: float = DEFAULT_COST_PER_WATT
) -> RoofLayoutResult:
    """
    Estimate the panel layout for a roof.

    Args:
        roof_area_sqft: Total roof area (sq ft)
        panel_width_ft: Panel width (ft)
        panel_height_ft: Panel height (ft)
        obstructions: Roof obstructions
        setback_rules: Edge, obstruction and walkway clearances
        panel_capacity_watts: Rated capacity per panel (W)
        aspect_ratio: Roof width / depth used to shape the panel grid
        cost_per_watt: Installed cost ($/W)

    Returns:
        RoofLayoutResult. rows x columns may be smaller than max_panel_count.
    """
    if roof_area_sqft <= 0:
        raise InvalidInputError(f"roof_area_sqft must be > 0, got {roof_area_sqft}")
    if panel_width_ft <= 0 or panel_height_ft <= 0:
        raise InvalidInputError(
            f"panel dimensions must be > 0, got {panel_width_ft} x {panel_height_ft}"
        )
    if aspect_ratio <= 0:
        raise InvalidInputError(f"aspect_ratio must be > 0, got {aspect_ratio}")

    roof_width_ft = math.sqrt(roof_area_sqft)
    perimeter_ft = 4 * roof_width_ft
    setback_area = perimeter_ft * setback_rules.edge_setback_ft

    obstruction_area = sum(
        o.cleared_area(setback_rules.obstruction_setback_ft) for o in obstructions
    )

    walkway_count = max(1, math.floor(roof_width_ft / WALKWAY_SPACING_FT))
    walkway_area = roof_width_ft * setback_rules.walkway_width_ft * walkway_count

    usable_area = max(0.0, roof_area_sqft - setback_area - obstruction_area - walkway_area)

    max_panel_count = math.floor(usable_area / (panel_width_ft * panel_height_ft))
    panel_columns = math.floor(math.sqrt(max_panel_count * aspect_ratio))
    panel_rows = max_panel_count // panel_columns if panel_columns else 0

    total_capacity_kw = max_panel_count * panel_capacity_watts / 1000

    return RoofLayoutResult(
        usable_area_sqft=usable_area,
        max_panel_count=max_panel_count,
        panel_rows=panel_rows,
        panel_columns=panel_columns,
        walkway_area_sqft=walkway_area,
        setback_area_sqft=setback_area,
        obstruction_area_sqft=obstruction_area,
        total_capacity_kw=total_capacity_kw,
        installation_time_hours=total_capacity_kw * INSTALL_HOURS_PER_KW,
        installation_cost_usd=total_capacity_kw * 1000 * cost_per_watt
    )


def calculate_layout_from_insights(
    insights,
    panel_width_ft: float,
    panel_height_ft: float,
    obstructions: Iterable[RoofObstruction] = (),
    setback_rules: SetbackRules = DEFAULT_SETBACK_RULES
) -> RoofLayoutResult:
    """Run calculate_roof_layout on a SolarInsightsResult's whole-roof area."""
    return calculate_roof_layout(
        insights.whole_roof_area_m2 * SQFT_PER_M2,
        panel_width_ft,
        panel_height_ft,
        obstructions=obstructions,
        setback_rules=setback_rules,
        panel_capacity_watts=insights.panel_capacity_watts or DEFAULT_PANEL_WATTAGE
    )


def calculate_orientation_yield_factor(orientation: float, tilt: float) -> float:
    """
    Yield adjustment for panel orientation and tilt.

    Args:
        orientation: Azimuth in degrees (0 = North, 90 = East, 180 = South, 270 = West)
        tilt: Tilt in degrees from horizontal

    Returns:
        Factor in [0.6, 1.0]; 1.0 is due south at 35 degrees
    """
    normalized = orientation % 360
    south_factor = math.cos(math.radians(normalized - 180))
    tilt_factor = math.cos(math.radians(tilt - OPTIMAL_TILT_DEG))
    return max(MIN_YIELD_FACTOR, south_factor * 0.7 + tilt_factor * 0.3)
