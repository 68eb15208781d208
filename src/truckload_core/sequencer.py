from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from .bands import split_into_bands
from .height import apply_height_checks
from .models import FAMILIES, FamilyBandConfig, Item, PackOptions, PlanResult, TruckPreset
from .packer import PackingPools, pack_band_sequence
from .stacking import apply_front_zone_downgrade, build_stacked_bands, row_depth_by_family
from .units import finite_or
from .validation import ensure_valid_plan_inputs

logger = logging.getLogger(__name__)


def _zone_overlap_warning(preset: TruckPreset, options: PackOptions) -> List[str]:
    staging = max(0.0, finite_or(options.front_staging_depth_mm, 0.0))
    aisle = max(0.0, finite_or(options.aisle_reserve_mm, 0.0))
    if staging + aisle <= preset.length_mm:
        return []
    return [
        f"Front staging depth {staging:g}mm and aisle reserve {aisle:g}mm "
        f"together exceed truck length {preset.length_mm:g}mm."
    ]


def plan_with_fixed_sequence(
    items: Sequence[Item],
    configs: Sequence[FamilyBandConfig],
    preset: TruckPreset,
    options: PackOptions,
) -> PlanResult:
    """Split, stack, downgrade, pack and height-check one truck load.

    Every input unit ends up either in ``placements`` or in ``rejected``.
    Inputs are not modified.
    """
    ensure_valid_plan_inputs(items, configs, preset, options)

    unit_bands = split_into_bands(items, configs)
    stacked = build_stacked_bands(unit_bands, configs)
    row_depths = row_depth_by_family()
    downgrade = apply_front_zone_downgrade(
        stacked, options.front_staging_depth_mm, row_depths
    )

    pools = PackingPools()
    for family in FAMILIES:
        pools.columns[family] = list(downgrade.stacked.columns[family])
        pools.unstacked[family] = [
            *downgrade.downgraded[family],
            *unit_bands.unstacked[family],
            *downgrade.stacked.singles[family],
        ]

    packed = pack_band_sequence(options.fixed_sequence, pools, preset, options, row_depths)
    packed.warnings.extend(downgrade.warnings)
    packed.warnings.extend(_zone_overlap_warning(preset, options))

    plan = apply_height_checks(packed, preset)
    logger.debug(
        "Planned %d units: %d placed, %d rejected",
        unit_bands.total(),
        len(plan.placed_units),
        len(plan.rejected),
    )
    return plan


def plan_for_presets(
    items: Sequence[Item],
    configs: Sequence[FamilyBandConfig],
    presets: Dict[str, TruckPreset],
    options: PackOptions,
) -> Dict[str, PlanResult]:
    """Evaluate the same load against several trucks, one independent run each."""
    return {
        key: plan_with_fixed_sequence(items, configs, preset, options)
        for key, preset in presets.items()
    }
