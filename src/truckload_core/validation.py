from __future__ import annotations

import math
from collections import Counter
from typing import Iterable, List, Sequence

from .models import (
    ALL_BANDS,
    FAMILIES,
    AxleOptions,
    FamilyBandConfig,
    Item,
    PackOptions,
    TruckPreset,
)
from .units import finite_or

ERROR_TRUCK_DIMENSIONS = "Truck length, width and height must be positive numbers."
ERROR_SIDE_DOOR_HEIGHT = "Side-door height must be a positive number."
ERROR_INNER_HEIGHT = "Inner height override must be a positive number."
ERROR_USABLE_LENGTH = "Usable length (truck length minus aisle reserve) must be positive."
ERROR_SEQUENCE = (
    "Fixed sequence must list DIN_stacked, EUP_stacked, DIN_unstacked and "
    "EUP_unstacked exactly once each."
)
ERROR_BIN_SIZE = "Bin size must be a positive number."
ERROR_SUPPORT_SPAN = "Rear support must lie behind the front support."


class PlanInputError(ValueError):
    """Raised at the boundary when plan inputs are malformed."""

    def __init__(self, errors: Sequence[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


def _positive(value) -> bool:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(number) and number > 0


def _finite(value) -> bool:
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def validate_truck_preset(preset: TruckPreset) -> list[str]:
    errors: list[str] = []
    if not (
        _positive(preset.length_mm)
        and _positive(preset.width_mm)
        and _positive(preset.height_mm)
    ):
        errors.append(ERROR_TRUCK_DIMENSIONS)
    if not _positive(preset.side_door_height_mm):
        errors.append(ERROR_SIDE_DOOR_HEIGHT)
    if preset.inner_height_mm is not None and not _positive(preset.inner_height_mm):
        errors.append(ERROR_INNER_HEIGHT)
    return errors


def validate_pack_options(options: PackOptions, preset: TruckPreset) -> list[str]:
    errors: list[str] = []
    aisle = max(0.0, finite_or(options.aisle_reserve_mm, 0.0))
    if _positive(preset.length_mm) and preset.length_mm - aisle <= 0:
        errors.append(ERROR_USABLE_LENGTH)
    if Counter(options.fixed_sequence) != Counter(ALL_BANDS):
        errors.append(ERROR_SEQUENCE)
    return errors


def validate_family_configs(configs: Iterable[FamilyBandConfig]) -> list[str]:
    errors: list[str] = []
    seen: set[str] = set()
    for cfg in configs:
        if cfg.family not in FAMILIES:
            errors.append(f"Unknown pallet family in stacking config: {cfg.family!r}.")
            continue
        if cfg.family in seen:
            errors.append(f"Duplicate stacking config for {cfg.family}.")
        seen.add(cfg.family)
        if not _finite(cfg.max_stack_height):
            errors.append(f"Max stack height for {cfg.family} must be a number.")
        elif int(cfg.max_stack_height) < 1:
            errors.append(f"Max stack height for {cfg.family} must be at least 1.")
    return errors


def validate_items(items: Iterable[Item]) -> list[str]:
    errors: list[str] = []
    for index, item in enumerate(items):
        label = item.id or f"#{index + 1}"
        if item.family not in FAMILIES:
            errors.append(f"Item {label}: unknown pallet family {item.family!r}.")
        if not _finite(item.quantity):
            errors.append(f"Item {label}: quantity must be a number.")
        elif int(item.quantity) < 0:
            errors.append(f"Item {label}: quantity must not be negative.")
    return errors


def validate_axle_options(options: AxleOptions) -> list[str]:
    errors: list[str] = []
    if not _positive(options.bin_size_mm):
        errors.append(ERROR_BIN_SIZE)
    front = finite_or(options.support_front_x, math.nan)
    rear = finite_or(options.support_rear_x, math.nan)
    if math.isnan(front) or math.isnan(rear) or rear <= front:
        errors.append(ERROR_SUPPORT_SPAN)
    return errors


def ensure_valid_plan_inputs(
    items: Sequence[Item],
    configs: Sequence[FamilyBandConfig],
    preset: TruckPreset,
    options: PackOptions,
) -> None:
    errors = (
        validate_items(items)
        + validate_family_configs(configs)
        + validate_truck_preset(preset)
        + validate_pack_options(options, preset)
    )
    if errors:
        raise PlanInputError(errors)


def ensure_valid_axle_options(options: AxleOptions) -> None:
    errors = validate_axle_options(options)
    if errors:
        raise PlanInputError(errors)
