"""Truck loading plans for EUP and DIN pallets."""

from .axles import check_axles
from .metrics import (
    floor_area_utilization,
    height_utilization,
    length_utilization,
    width_utilization,
)
from .models import (
    ALL_BANDS,
    DEFAULT_SEQUENCE,
    AxleOptions,
    AxleReport,
    Band,
    Column,
    FamilyBandConfig,
    Item,
    PackOptions,
    Placement,
    PlanResult,
    Rejection,
    TruckPreset,
    Unit,
)
from .presets import axle_options_for_preset, get_truck_preset, load_truck_presets
from .report import axle_report_to_dict, plan_to_dict
from .sequencer import plan_for_presets, plan_with_fixed_sequence
from .validation import PlanInputError

__all__ = [
    "ALL_BANDS",
    "DEFAULT_SEQUENCE",
    "AxleOptions",
    "AxleReport",
    "Band",
    "Column",
    "FamilyBandConfig",
    "Item",
    "PackOptions",
    "Placement",
    "PlanInputError",
    "PlanResult",
    "Rejection",
    "TruckPreset",
    "Unit",
    "axle_options_for_preset",
    "axle_report_to_dict",
    "check_axles",
    "floor_area_utilization",
    "get_truck_preset",
    "height_utilization",
    "length_utilization",
    "load_truck_presets",
    "plan_for_presets",
    "plan_to_dict",
    "plan_with_fixed_sequence",
    "width_utilization",
]
