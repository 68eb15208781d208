"""Axle load triage for a packed plan.

The trailer bed is treated as a simply supported beam between the kingpin
(front support) and the rear axle group. Every placement contributes its
weight at its centroid along the length of the bed.
"""

from __future__ import annotations

import logging
import math
from typing import List, Tuple

import numpy as np

from .models import AxleOptions, AxleReport, Placement, PlanResult, TruckPreset
from .units import finite_or, round_half_up
from .validation import ensure_valid_axle_options

logger = logging.getLogger(__name__)


def placement_weight(placement: Placement, per_slot_weight_kg: float = 0.0) -> float:
    total = sum(finite_or(unit.weight_kg, 0.0) for unit in placement.units)
    return total if total > 0 else per_slot_weight_kg


def support_span(options: AxleOptions) -> Tuple[int, int]:
    """Floored support coordinates with the rear kept behind the front."""
    front = max(0, math.floor(options.support_front_x))
    rear = max(front + 1, math.floor(options.support_rear_x))
    return front, rear


def linear_density_peak(
    centroids: np.ndarray, weights: np.ndarray, bin_size_mm: int
) -> float:
    """Heaviest ``bin_size_mm`` slice of the bed, expressed in kg/m."""
    if centroids.size == 0:
        return 0.0
    bins = np.floor(centroids / bin_size_mm).astype(np.int64)
    _, inverse = np.unique(bins, return_inverse=True)
    totals = np.bincount(inverse.ravel(), weights=weights)
    return float(totals.max()) * 1000.0 / bin_size_mm


def support_reactions(
    centroids: np.ndarray, weights: np.ndarray, front: int, rear: int
) -> Tuple[float, float]:
    span = rear - front
    x = np.clip(centroids, front, rear)
    r_front = float(np.sum(weights * (rear - x) / span))
    r_rear = float(np.sum(weights * (x - front) / span))
    return r_front, r_rear


def check_axles(plan: PlanResult, preset: TruckPreset, options: AxleOptions) -> AxleReport:
    ensure_valid_axle_options(options)
    placements = list(plan.placements)
    per_slot = max(0, math.floor(finite_or(options.per_slot_weight_kg, 0.0)))
    bin_size = max(1, math.floor(finite_or(options.bin_size_mm, 1000.0)))

    centroids = np.array([p.centroid_y for p in placements], dtype=float)
    weights = np.array([placement_weight(p, per_slot) for p in placements], dtype=float)
    total_weight = float(weights.sum())

    warnings: List[str] = []
    peak = linear_density_peak(centroids, weights, bin_size)
    if options.max_kg_per_m is not None and peak > options.max_kg_per_m:
        warnings.append(
            f"Peak linear density {round_half_up(peak)} kg/m exceeds threshold "
            f"{options.max_kg_per_m:g} kg/m."
        )

    front, rear = support_span(options)
    r_front, r_rear = support_reactions(centroids, weights, front, rear)

    if options.rear_axle_group_max_kg is not None and r_rear > options.rear_axle_group_max_kg:
        warnings.append(
            f"Rear axle group load {round_half_up(r_rear)} kg exceeds "
            f"{options.rear_axle_group_max_kg:g} kg."
        )
    if options.kingpin_min_kg is not None and r_front < options.kingpin_min_kg:
        warnings.append(
            f"Front support (kingpin) load {round_half_up(r_front)} kg below minimum "
            f"{options.kingpin_min_kg:g} kg."
        )
    if options.kingpin_max_kg is not None and r_front > options.kingpin_max_kg:
        warnings.append(
            f"Front support (kingpin) load {round_half_up(r_front)} kg exceeds "
            f"{options.kingpin_max_kg:g} kg."
        )
    if options.payload_max_kg is not None and total_weight > options.payload_max_kg:
        warnings.append(
            f"Total payload {round_half_up(total_weight)} kg exceeds "
            f"{options.payload_max_kg:g} kg."
        )

    logger.debug(
        "%s: R_front=%.1f kg, R_rear=%.1f kg, peak=%.1f kg/m",
        preset.name or "truck",
        r_front,
        r_rear,
        peak,
    )
    return AxleReport(
        r_front=round_half_up(r_front),
        r_rear=round_half_up(r_rear),
        max_kg_per_m=round_half_up(peak),
        total_weight_kg=round_half_up(total_weight),
        warnings=warnings,
    )
