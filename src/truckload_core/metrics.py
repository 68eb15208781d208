from __future__ import annotations

from .models import PlanResult, TruckPreset


def _ratio(used: float, available: float) -> float:
    if available <= 0:
        return 0.0
    return max(0.0, min(1.0, used / available))


def length_utilization(plan: PlanResult, preset: TruckPreset) -> float:
    return _ratio(plan.used_length_mm, preset.length_mm)


def width_utilization(plan: PlanResult, preset: TruckPreset) -> float:
    return _ratio(plan.used_width_mm, preset.width_mm)


def height_utilization(plan: PlanResult, preset: TruckPreset) -> float:
    return _ratio(plan.used_height_mm, preset.clear_height_mm)


def floor_area_utilization(plan: PlanResult, preset: TruckPreset) -> float:
    """Share of the cargo floor covered by placements."""
    covered = sum(p.width * p.length for p in plan.placements)
    return _ratio(covered, preset.length_mm * preset.width_mm)
