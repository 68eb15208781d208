from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .models import AxleOptions, TruckPreset
from .units import DEFAULT_SIDE_DOOR_HEIGHT_MM, parse_float

logger = logging.getLogger(__name__)

PRESETS_ENV_VAR = "TRUCKLOAD_PRESETS_PATH"
DEFAULT_PRESETS_PATH = Path(__file__).resolve().parent / "data" / "presets.yaml"


@dataclass(frozen=True)
class CatalogEntry:
    """Truck preset together with its axle-load limits."""

    preset: TruckPreset
    support_front_x: float
    support_rear_x: float
    payload_max_kg: Optional[float] = None
    rear_axle_group_max_kg: Optional[float] = None


def get_presets_path() -> Path:
    env_path = os.getenv(PRESETS_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser().resolve()
    return DEFAULT_PRESETS_PATH


def _number(value: Any) -> float:
    if isinstance(value, str):
        return parse_float(value)
    return float(value)


def _optional_number(data: Mapping[str, Any], key: str) -> Optional[float]:
    value = data.get(key)
    if value is None:
        return None
    return _number(value)


def _parse_entry(key: str, data: Mapping[str, Any]) -> CatalogEntry:
    inner = _optional_number(data, "inner_height_mm")
    door = _optional_number(data, "side_door_height_mm")
    preset = TruckPreset(
        length_mm=_number(data["length_mm"]),
        width_mm=_number(data["width_mm"]),
        height_mm=_number(data["height_mm"]),
        side_door_height_mm=door if door is not None else DEFAULT_SIDE_DOOR_HEIGHT_MM,
        inner_height_mm=inner,
        name=str(data.get("name", key)),
    )
    return CatalogEntry(
        preset=preset,
        support_front_x=_number(data["support_front_x"]),
        support_rear_x=_number(data["support_rear_x"]),
        payload_max_kg=_optional_number(data, "payload_max_kg"),
        rear_axle_group_max_kg=_optional_number(data, "rear_axle_group_max_kg"),
    )


@lru_cache(maxsize=None)
def _load_catalog(path: str) -> Dict[str, CatalogEntry]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        logger.exception("Failed to read truck catalog %s", path)
        raise
    if not isinstance(loaded, dict):
        raise ValueError(f"truck catalog {path} must map preset keys to settings")
    catalog: Dict[str, CatalogEntry] = {}
    for key, data in loaded.items():
        try:
            catalog[str(key)] = _parse_entry(str(key), data)
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"invalid truck preset {key!r} in {path}: {exc}") from exc
    return catalog


def load_truck_catalog(path: str | os.PathLike | None = None) -> Dict[str, CatalogEntry]:
    target = Path(path).expanduser().resolve() if path is not None else get_presets_path()
    return dict(_load_catalog(str(target)))


def load_truck_presets(path: str | os.PathLike | None = None) -> Dict[str, TruckPreset]:
    """Return ``key -> TruckPreset`` for every catalog entry."""
    return {key: replace(entry.preset) for key, entry in load_truck_catalog(path).items()}


def get_truck_preset(key: str, path: str | os.PathLike | None = None) -> TruckPreset:
    catalog = load_truck_catalog(path)
    if key not in catalog:
        raise KeyError(f"unknown truck preset: {key}")
    return replace(catalog[key].preset)


def axle_options_for_preset(
    key: str, path: str | os.PathLike | None = None, **overrides: Any
) -> AxleOptions:
    """Axle options prefilled from the catalog's support points and limits."""
    catalog = load_truck_catalog(path)
    if key not in catalog:
        raise KeyError(f"unknown truck preset: {key}")
    entry = catalog[key]
    options = AxleOptions(
        support_front_x=entry.support_front_x,
        support_rear_x=entry.support_rear_x,
        rear_axle_group_max_kg=entry.rear_axle_group_max_kg,
        payload_max_kg=entry.payload_max_kg,
    )
    return replace(options, **overrides)


def clear_preset_cache() -> None:
    _load_catalog.cache_clear()
