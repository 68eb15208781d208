from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Tuple

from .bands import UnitBands, family_config
from .models import FAMILIES, Column, Family, FamilyBandConfig, Unit
from .units import MM, family_depth, finite_or

logger = logging.getLogger(__name__)

ROW_CLEARANCE_MM = 0.0


@dataclass
class StackedBands:
    columns: Dict[Family, List[Column]] = field(
        default_factory=lambda: {family: [] for family in FAMILIES}
    )
    singles: Dict[Family, List[Unit]] = field(
        default_factory=lambda: {family: [] for family in FAMILIES}
    )


@dataclass
class DowngradeResult:
    stacked: StackedBands
    downgraded: Dict[Family, List[Unit]]
    warnings: List[str] = field(default_factory=list)

    @property
    def downgraded_count(self) -> int:
        return sum(len(units) for units in self.downgraded.values())


def form_columns(
    units: Sequence[Unit], max_stack_height: int
) -> Tuple[List[Column], List[Unit]]:
    """Group units into full-height columns; a partial tail stays as singles."""
    if max_stack_height <= 1:
        return [], list(units)
    columns: List[Column] = []
    buffer: List[Unit] = []
    for unit in units:
        buffer.append(unit)
        if len(buffer) == max_stack_height:
            columns.append(Column(tuple(buffer)))
            buffer = []
    return columns, buffer


def build_stacked_bands(
    bands: UnitBands, configs: Iterable[FamilyBandConfig]
) -> StackedBands:
    configs = list(configs)
    stacked = StackedBands()
    for family in FAMILIES:
        cfg = family_config(configs, family)
        columns, singles = form_columns(bands.stacked[family], int(cfg.max_stack_height))
        stacked.columns[family] = columns
        stacked.singles[family] = singles
        logger.debug(
            "%s: %d columns of %d, %d leftover singles",
            family,
            len(columns),
            cfg.max_stack_height,
            len(singles),
        )
    return stacked


def row_depth_by_family() -> Dict[Family, MM]:
    return {family: family_depth(family) + ROW_CLEARANCE_MM for family in FAMILIES}


def rows_in_front_zone(front_staging_depth_mm: MM, row_depth_mm: MM) -> int:
    depth = max(0.0, finite_or(front_staging_depth_mm, 0.0))
    row_depth = max(1, math.floor(row_depth_mm))
    return max(0, math.floor(depth / row_depth))


def apply_front_zone_downgrade(
    stacked: StackedBands,
    front_staging_depth_mm: MM,
    row_depths: Dict[Family, MM] | None = None,
) -> DowngradeResult:
    """Keep only the columns that fit the front staging zone.

    Overflow columns are dissolved; their units are returned per family so the
    caller can place them single-layer.
    """
    if row_depths is None:
        row_depths = row_depth_by_family()
    kept = StackedBands(
        columns={family: [] for family in FAMILIES},
        singles={family: list(stacked.singles[family]) for family in FAMILIES},
    )
    downgraded: Dict[Family, List[Unit]] = {family: [] for family in FAMILIES}
    warnings: List[str] = []
    for family in FAMILIES:
        columns = stacked.columns[family]
        rows_fit = rows_in_front_zone(front_staging_depth_mm, row_depths[family])
        kept.columns[family] = list(columns[:rows_fit])
        removed = columns[rows_fit:]
        if not removed:
            continue
        units = [unit for column in removed for unit in column.units]
        downgraded[family] = units
        warnings.append(
            f"Stacked {family}: downgraded {len(units)} units; front zone capacity exceeded."
        )
        logger.info(
            "%s: %d columns exceed front zone (%d rows fit), %d units downgraded",
            family,
            len(removed),
            rows_fit,
            len(units),
        )
    return DowngradeResult(stacked=kept, downgraded=downgraded, warnings=warnings)
