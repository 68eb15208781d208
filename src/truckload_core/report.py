from __future__ import annotations

from typing import Any, Dict

from .models import AxleReport, Placement, PlanResult, Unit


def unit_to_dict(unit: Unit) -> Dict[str, Any]:
    return {
        "family": unit.family,
        "id": unit.item_id,
        "itemIndex": unit.item_index,
        "serial": unit.serial,
        "heightMm": unit.height_mm,
        "weightKg": unit.weight_kg,
    }


def placement_to_dict(placement: Placement) -> Dict[str, Any]:
    return {
        "idx": placement.idx,
        "x": placement.x,
        "y": placement.y,
        "w": placement.width,
        "h": placement.length,
        "z": placement.z,
        "stackHeightMm": placement.stack_height_mm,
        "band": placement.band.name if placement.band is not None else None,
        "units": [unit_to_dict(unit) for unit in placement.units],
    }


def plan_to_dict(plan: PlanResult) -> Dict[str, Any]:
    """Collect a plan as a JSON-serialisable dict."""
    return {
        "sequenceUsed": [band.name for band in plan.sequence_used],
        "bandCounts": dict(plan.band_counts),
        "placements": [placement_to_dict(p) for p in plan.placements],
        "rejected": [
            {"item": unit_to_dict(r.unit), "reason": r.reason} for r in plan.rejected
        ],
        "notes": list(plan.notes),
        "warnings": list(plan.warnings),
        "usedLengthMm": plan.used_length_mm,
        "usedWidthMm": plan.used_width_mm,
        "usedHeightMm": plan.used_height_mm,
    }


def axle_report_to_dict(report: AxleReport) -> Dict[str, Any]:
    return {
        "R_front": report.r_front,
        "R_rear": report.r_rear,
        "maxKgPerM": report.max_kg_per_m,
        "totalWeightKg": report.total_weight_kg,
        "warnings": list(report.warnings),
    }
