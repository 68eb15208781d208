import math

import pytest

from truckload_core.bands import expand_units, family_config, split_into_bands
from truckload_core.models import Band, FamilyBandConfig, Item, PackOptions


def test_expand_units_preserves_order_and_attribution():
    items = [
        Item("EUP", 2, height_mm=1000, weight_kg=300, id="a"),
        Item("DIN", 1, id="b"),
        Item("EUP", 1, id="c"),
    ]
    units = expand_units(items)
    assert [u.item_id for u in units] == ["a", "a", "b", "c"]
    assert [u.item_index for u in units] == [0, 0, 1, 2]
    assert [u.serial for u in units] == [0, 1, 2, 3]
    assert units[0].height_mm == 1000
    assert units[0].weight_kg == 300
    assert units[0] != units[1]


def test_expand_units_zero_quantity_yields_nothing():
    assert expand_units([Item("EUP", 0)]) == []


def test_missing_family_config_defaults():
    cfg = family_config([FamilyBandConfig("EUP", 3, 3)], "DIN")
    assert cfg.stackable_count == 0
    assert cfg.max_stack_height == 2


def test_split_takes_leading_units_as_stacked():
    items = [Item("EUP", 3, id="first"), Item("EUP", 2, id="second"), Item("DIN", 2)]
    bands = split_into_bands(items, [FamilyBandConfig("EUP", 4, 2)])
    assert [u.serial for u in bands.stacked["EUP"]] == [0, 1, 2, 3]
    assert [u.serial for u in bands.unstacked["EUP"]] == [4]
    assert bands.stacked["DIN"] == []
    assert len(bands.unstacked["DIN"]) == 2
    assert bands.total() == 7


@pytest.mark.parametrize("stackable, expected", [(-5, 0), (100, 3), (2, 2)])
def test_stackable_count_is_clamped(stackable, expected):
    bands = split_into_bands([Item("DIN", 3)], [FamilyBandConfig("DIN", stackable, 2)])
    assert len(bands.stacked["DIN"]) == expected
    assert len(bands.unstacked["DIN"]) == 3 - expected


def test_units_for_band():
    bands = split_into_bands([Item("EUP", 2)], [FamilyBandConfig("EUP", 1, 2)])
    assert len(bands.units_for(Band("EUP", True))) == 1
    assert len(bands.units_for(Band("EUP", False))) == 1


def test_band_parse_round_trips_names():
    band = Band.parse("DIN_unstacked")
    assert band.family == "DIN"
    assert not band.stacked
    assert band.name == "DIN_unstacked"


@pytest.mark.parametrize("name", ["EUP", "XYZ_stacked", "EUP_layered", ""])
def test_band_parse_rejects_unknown(name):
    with pytest.raises(ValueError):
        Band.parse(name)


def test_pack_options_accept_band_names():
    options = PackOptions(
        fixed_sequence=["EUP_stacked", "DIN_stacked", "EUP_unstacked", "DIN_unstacked"]
    )
    assert options.fixed_sequence[0] == Band("EUP", True)
    assert all(isinstance(band, Band) for band in options.fixed_sequence)
    with pytest.raises(ValueError):
        PackOptions(fixed_sequence=["EUP_top"])


def test_nan_stackable_count_is_clamped_to_zero():
    bands = split_into_bands([Item("EUP", 4)], [FamilyBandConfig("EUP", math.nan, 2)])
    assert bands.stacked["EUP"] == []
    assert len(bands.unstacked["EUP"]) == 4
