from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence

from .models import FAMILIES, Band, Family, FamilyBandConfig, Item, Unit
from .units import finite_or

logger = logging.getLogger(__name__)


@dataclass
class UnitBands:
    """Expanded units split per family into stacked and unstacked lists."""

    stacked: Dict[Family, List[Unit]] = field(
        default_factory=lambda: {family: [] for family in FAMILIES}
    )
    unstacked: Dict[Family, List[Unit]] = field(
        default_factory=lambda: {family: [] for family in FAMILIES}
    )

    def units_for(self, band: Band) -> List[Unit]:
        source = self.stacked if band.stacked else self.unstacked
        return source[band.family]

    def total(self) -> int:
        return sum(len(units) for units in self.stacked.values()) + sum(
            len(units) for units in self.unstacked.values()
        )


def family_config(configs: Iterable[FamilyBandConfig], family: Family) -> FamilyBandConfig:
    for cfg in configs:
        if cfg.family == family:
            return cfg
    return FamilyBandConfig(family=family, stackable_count=0, max_stack_height=2)


def expand_units(items: Sequence[Item]) -> List[Unit]:
    """Expand every item into ``quantity`` independent units, keeping input order."""
    units: List[Unit] = []
    for index, item in enumerate(items):
        height = max(0.0, finite_or(item.height_mm, 0.0))
        weight = max(0.0, finite_or(item.weight_kg, 0.0))
        for _ in range(int(max(0.0, finite_or(item.quantity, 0.0)))):
            units.append(
                Unit(
                    family=item.family,
                    height_mm=height,
                    weight_kg=weight,
                    item_id=item.id,
                    item_index=index,
                    serial=len(units),
                )
            )
    return units


def split_into_bands(
    items: Sequence[Item], configs: Iterable[FamilyBandConfig]
) -> UnitBands:
    configs = list(configs)
    units = expand_units(items)
    bands = UnitBands()
    for family in FAMILIES:
        family_units = [unit for unit in units if unit.family == family]
        cfg = family_config(configs, family)
        stackable = int(max(0.0, finite_or(cfg.stackable_count, 0.0)))
        limit = min(stackable, len(family_units))
        bands.stacked[family] = family_units[:limit]
        bands.unstacked[family] = family_units[limit:]
        logger.debug(
            "%s: %d units, %d stacked-eligible", family, len(family_units), limit
        )
    return bands
