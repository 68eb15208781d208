from __future__ import annotations

import math
from typing import Dict, Tuple

MM = float
KG = float

# Footprint per pallet family as (width across the truck, depth along it).
FAMILY_FOOTPRINTS: Dict[str, Tuple[MM, MM]] = {
    "EUP": (800.0, 1200.0),
    "DIN": (1000.0, 1200.0),
}

DEFAULT_SIDE_DOOR_HEIGHT_MM = 2650.0


def family_width(family: str) -> MM:
    return FAMILY_FOOTPRINTS[family][0]


def family_depth(family: str) -> MM:
    return FAMILY_FOOTPRINTS[family][1]


def parse_float(value: str) -> float:
    text = value.strip()
    if not text:
        raise ValueError("empty input")
    text = text.replace(",", ".")
    return float(text)


def finite_or(value: float | None, default: float) -> float:
    """Return ``value`` when it is a finite number, ``default`` otherwise."""
    if value is None:
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
