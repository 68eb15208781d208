from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, Tuple

from .units import DEFAULT_SIDE_DOOR_HEIGHT_MM, KG, MM, family_depth, family_width

Family = Literal["EUP", "DIN"]
FAMILIES: Tuple[Family, ...] = ("EUP", "DIN")

RejectReason = Literal["row-width", "length", "pair-consistency", "overheight"]


@dataclass(frozen=True)
class Band:
    """One of the four packing queues, identified by family and stacking."""

    family: Family
    stacked: bool

    @property
    def name(self) -> str:
        return f"{self.family}_{'stacked' if self.stacked else 'unstacked'}"

    @classmethod
    def parse(cls, name: str) -> "Band":
        family, sep, kind = name.partition("_")
        if not sep or family not in FAMILIES or kind not in ("stacked", "unstacked"):
            raise ValueError(f"unknown band: {name!r}")
        return cls(family, kind == "stacked")  # type: ignore[arg-type]

    def __str__(self) -> str:
        return self.name


DIN_STACKED = Band("DIN", True)
EUP_STACKED = Band("EUP", True)
DIN_UNSTACKED = Band("DIN", False)
EUP_UNSTACKED = Band("EUP", False)
ALL_BANDS: Tuple[Band, ...] = (DIN_STACKED, EUP_STACKED, DIN_UNSTACKED, EUP_UNSTACKED)
DEFAULT_SEQUENCE: Tuple[Band, ...] = ALL_BANDS


@dataclass
class Item:
    """Order line: ``quantity`` pallets of one family sharing height and weight."""

    family: Family
    quantity: int
    height_mm: MM = 0.0
    weight_kg: KG = 0.0
    id: Optional[str] = None


@dataclass(frozen=True)
class Unit:
    """One physical pallet expanded from an :class:`Item`."""

    family: Family
    height_mm: MM = 0.0
    weight_kg: KG = 0.0
    item_id: Optional[str] = None
    item_index: int = 0
    serial: int = 0

    @property
    def width(self) -> MM:
        return family_width(self.family)

    @property
    def length(self) -> MM:
        return family_depth(self.family)


@dataclass(frozen=True)
class Column:
    """Sealed vertical stack of same-family units."""

    units: Tuple[Unit, ...]

    @property
    def family(self) -> Family:
        return self.units[0].family

    @property
    def height_mm(self) -> MM:
        return sum(unit.height_mm for unit in self.units)

    @property
    def weight_kg(self) -> KG:
        return sum(unit.weight_kg for unit in self.units)


@dataclass
class FamilyBandConfig:
    family: Family
    stackable_count: int = 0
    max_stack_height: int = 2


@dataclass
class TruckPreset:
    """Interior cargo dimensions of a vehicle."""

    length_mm: MM
    width_mm: MM
    height_mm: MM
    side_door_height_mm: MM = DEFAULT_SIDE_DOOR_HEIGHT_MM
    inner_height_mm: Optional[MM] = None
    name: str = ""

    @property
    def clear_height_mm(self) -> MM:
        if self.inner_height_mm is not None:
            return self.inner_height_mm
        return self.height_mm


@dataclass
class PackOptions:
    enforce_row_pair_consistency: bool = False
    aisle_reserve_mm: MM = 0.0
    front_staging_depth_mm: MM = 0.0
    fixed_sequence: Tuple[Band, ...] = DEFAULT_SEQUENCE

    def __post_init__(self) -> None:
        self.fixed_sequence = tuple(
            band if isinstance(band, Band) else Band.parse(band)
            for band in self.fixed_sequence
        )


@dataclass
class Placement:
    """Occupied floor rectangle; ``y`` is measured from the front bulkhead."""

    x: MM
    y: MM
    width: MM
    length: MM
    idx: int = 0
    z: MM = 0.0
    stack_height_mm: MM = 0.0
    units: Tuple[Unit, ...] = ()
    band: Optional[Band] = None

    @property
    def top_mm(self) -> MM:
        return self.z + self.stack_height_mm

    @property
    def centroid_y(self) -> MM:
        return self.y + self.length / 2


@dataclass(frozen=True)
class Rejection:
    unit: Unit
    reason: RejectReason


@dataclass
class PlanResult:
    sequence_used: List[Band] = field(default_factory=list)
    band_counts: Dict[str, int] = field(default_factory=dict)
    placements: List[Placement] = field(default_factory=list)
    rejected: List[Rejection] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    used_length_mm: MM = 0.0
    used_width_mm: MM = 0.0
    used_height_mm: MM = 0.0

    @property
    def placed_units(self) -> List[Unit]:
        return [unit for placement in self.placements for unit in placement.units]

    def rejected_by_reason(self, reason: str) -> List[Unit]:
        return [rejection.unit for rejection in self.rejected if rejection.reason == reason]


@dataclass
class AxleOptions:
    """Two-support beam model settings; ``None`` thresholds are not checked."""

    support_front_x: MM
    support_rear_x: MM
    bin_size_mm: MM = 1000.0
    per_slot_weight_kg: KG = 0.0
    max_kg_per_m: Optional[float] = None
    rear_axle_group_max_kg: Optional[KG] = None
    kingpin_min_kg: Optional[KG] = None
    kingpin_max_kg: Optional[KG] = None
    payload_max_kg: Optional[KG] = None


@dataclass
class AxleReport:
    r_front: int
    r_rear: int
    max_kg_per_m: int
    total_weight_kg: int = 0
    warnings: List[str] = field(default_factory=list)
