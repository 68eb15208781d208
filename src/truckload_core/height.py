from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, List, Tuple

from .models import Placement, PlanResult, Rejection, TruckPreset, Unit
from .units import DEFAULT_SIDE_DOOR_HEIGHT_MM, finite_or, round_half_up

logger = logging.getLogger(__name__)


def side_door_height(preset: TruckPreset) -> float:
    return finite_or(preset.side_door_height_mm, DEFAULT_SIDE_DOOR_HEIGHT_MM)


def max_top_by_position(placements: List[Placement]) -> Dict[Tuple[float, float], float]:
    """Tallest top per (x, y) floor anchor, in first-seen order."""
    tops: Dict[Tuple[float, float], float] = {}
    for placement in placements:
        key = (placement.x, placement.y)
        top = placement.top_mm
        if key not in tops or top > tops[key]:
            tops[key] = top
    return tops


def _overheight_units(placement: Placement) -> List[Unit]:
    if placement.units:
        return list(placement.units)
    family = placement.band.family if placement.band is not None else "EUP"
    return [Unit(family=family, item_id=f"overheight@{placement.x:g},{placement.y:g}")]


def apply_height_checks(plan: PlanResult, preset: TruckPreset) -> PlanResult:
    """Reject placements above the inner height and flag side-door risks.

    Offending placements are removed from the plan so that each unit ends up
    either placed or rejected, never both. Used length and height are
    measured over the placements that remain.
    """
    door_height = side_door_height(preset)
    inner_height = finite_or(preset.clear_height_mm, 0.0)

    kept: List[Placement] = []
    rejected = list(plan.rejected)
    for placement in plan.placements:
        if inner_height and placement.top_mm > inner_height:
            for unit in _overheight_units(placement):
                rejected.append(Rejection(unit, "overheight"))
            logger.info(
                "Placement %d at y=%g is %g mm tall, above %g mm",
                placement.idx,
                placement.y,
                placement.top_mm,
                inner_height,
            )
            continue
        kept.append(placement)

    warnings = list(plan.warnings)
    for (x, y), top in max_top_by_position(plan.placements).items():
        if top > door_height:
            warnings.append(
                f"Side-door height risk at approx x={x:g}mm, y={y:g}mm: "
                f"{round_half_up(top)}mm exceeds {door_height:g}mm."
            )

    return replace(
        plan,
        placements=kept,
        rejected=rejected,
        warnings=warnings,
        notes=list(plan.notes),
        used_length_mm=max((p.y + p.length for p in kept), default=0.0),
        used_height_mm=max((p.top_mm for p in kept), default=0.0),
    )
