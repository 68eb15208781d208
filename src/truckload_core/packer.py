from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Union

from .models import (
    FAMILIES,
    Band,
    Column,
    Family,
    PackOptions,
    Placement,
    PlanResult,
    Rejection,
    TruckPreset,
    Unit,
)
from .units import MM, family_width, finite_or

logger = logging.getLogger(__name__)

Entry = Union[Unit, Column]


@dataclass
class Row:
    family: Family
    entries: List[Entry]
    weight: float


@dataclass
class PackingPools:
    """Work queues owned by a single packing run.

    The unstacked queue of a family is consumed by its unstacked band; orphans
    carried forward are pushed to its front.
    """

    columns: Dict[Family, List[Column]] = field(
        default_factory=lambda: {family: [] for family in FAMILIES}
    )
    unstacked: Dict[Family, List[Unit]] = field(
        default_factory=lambda: {family: [] for family in FAMILIES}
    )

    def take(self, band: Band) -> List[Entry]:
        if band.stacked:
            pool: List[Entry] = list(self.columns[band.family])
            self.columns[band.family] = []
        else:
            pool = list(self.unstacked[band.family])
            self.unstacked[band.family] = []
        return pool

    def carry_forward(self, family: Family, units: Sequence[Unit]) -> None:
        self.unstacked[family][:0] = list(units)


def entry_units(entry: Entry) -> List[Unit]:
    if isinstance(entry, Column):
        return list(entry.units)
    return [entry]


def entry_weight(entry: Entry) -> float:
    return finite_or(entry.weight_kg, 0.0)


def entry_height(entry: Entry) -> MM:
    return max(0, math.floor(finite_or(entry.height_mm, 0.0)))


def build_rows(family: Family, pool: Sequence[Entry]) -> tuple[List[Row], Optional[Entry]]:
    """Pair consecutive entries two-abreast; a trailing entry is the orphan."""
    rows: List[Row] = []
    for i in range(0, len(pool) - 1, 2):
        a, b = pool[i], pool[i + 1]
        rows.append(Row(family, [a, b], entry_weight(a) + entry_weight(b)))
    orphan = pool[-1] if len(pool) % 2 else None
    return rows, orphan


def _later_unstacked_band(sequence: Sequence[Band], position: int, family: Family) -> bool:
    return any(
        band.family == family and not band.stacked for band in sequence[position + 1 :]
    )


def pack_band_sequence(
    sequence: Sequence[Band],
    pools: PackingPools,
    preset: TruckPreset,
    options: PackOptions,
    row_depths: Dict[Family, MM],
) -> PlanResult:
    """Place bands front-to-back in two-abreast rows, heaviest rows first."""
    placements: List[Placement] = []
    rejected: List[Rejection] = []
    notes: List[str] = []
    sequence_used: List[Band] = []
    band_counts: Dict[str, int] = {}

    width_mm = preset.width_mm
    aisle_reserve = max(0, math.floor(finite_or(options.aisle_reserve_mm, 0.0)))
    usable_length = max(0, preset.length_mm - aisle_reserve)
    overflow_reason = (
        "pair-consistency" if options.enforce_row_pair_consistency else "length"
    )
    cursor_y = 0.0
    used_width = 0.0

    def reject(entries: Sequence[Entry], reason: str) -> None:
        for entry in entries:
            for unit in entry_units(entry):
                rejected.append(Rejection(unit, reason))  # type: ignore[arg-type]

    for position, band in enumerate(sequence):
        family = band.family
        pool = pools.take(band)
        band_counts[band.name] = sum(len(entry_units(entry)) for entry in pool)
        if not pool:
            continue

        rows, orphan = build_rows(family, pool)
        rows.sort(key=lambda row: -row.weight)

        row_depth = row_depths[family]
        slot_w = family_width(family)
        row_width = slot_w * 2

        if row_width > width_mm:
            notes.append(
                f"Row width {row_width:g} exceeds truck width {width_mm:g} for {family}."
            )
            reject([entry for row in rows for entry in row.entries], "row-width")
            if orphan is not None:
                reject([orphan], "row-width")
            logger.debug("%s: band rejected, row too wide", band)
            continue

        placed_any = False
        for index, row in enumerate(rows):
            if cursor_y + row_depth > usable_length:
                reject([entry for r in rows[index:] for entry in r.entries], overflow_reason)
                if orphan is not None:
                    reject([orphan], overflow_reason)
                    orphan = None
                logger.debug(
                    "%s: %d rows rejected at y=%g", band, len(rows) - index, cursor_y
                )
                break
            x_left = math.floor((width_mm - row_width) / 2)
            for slot, entry in enumerate(row.entries):
                placements.append(
                    Placement(
                        x=x_left + slot * slot_w,
                        y=cursor_y,
                        width=slot_w,
                        length=row_depth,
                        idx=len(placements),
                        z=0.0,
                        stack_height_mm=entry_height(entry),
                        units=tuple(entry_units(entry)),
                        band=band,
                    )
                )
            cursor_y += row_depth
            used_width = max(used_width, row_width)
            placed_any = True

        if orphan is not None:
            if (
                cursor_y + row_depth <= usable_length
                and options.enforce_row_pair_consistency
                and _later_unstacked_band(sequence, position, family)
            ):
                notes.append(
                    f"Carried forward orphan {family} unit for pairing in later band."
                )
                pools.carry_forward(family, entry_units(orphan))
            else:
                reject([orphan], "pair-consistency")

        if placed_any:
            sequence_used.append(band)
        logger.debug("%s: cursor at %g mm of %g mm", band, cursor_y, usable_length)

    notes.extend(
        [
            "Packed bands front-to-back with pair-consistent two-across rows and heavy-forward bias.",
            f"Aisle reserve {aisle_reserve}mm respected at rear.",
        ]
    )
    return PlanResult(
        sequence_used=sequence_used,
        band_counts=band_counts,
        placements=placements,
        rejected=rejected,
        notes=notes,
        used_length_mm=cursor_y,
        used_width_mm=used_width,
        used_height_mm=max((p.top_mm for p in placements), default=0.0),
    )
