from truckload_core.height import apply_height_checks, max_top_by_position
from truckload_core.models import EUP_STACKED, Placement, PlanResult, TruckPreset, Unit

PRESET = TruckPreset(length_mm=13600, width_mm=2460, height_mm=2700)


def _placement(x, y, height, units=None, idx=0):
    if units is None:
        units = (Unit("EUP", height_mm=height, serial=idx),)
    return Placement(
        x=x,
        y=y,
        width=800,
        length=1200,
        idx=idx,
        stack_height_mm=height,
        units=tuple(units),
        band=EUP_STACKED,
    )


def test_overheight_placement_is_removed_and_units_rejected():
    units = (Unit("EUP", height_mm=1400, serial=0), Unit("EUP", height_mm=1400, serial=1))
    plan = PlanResult(
        placements=[_placement(430, 0, 2800, units), _placement(1230, 0, 1400, idx=2)]
    )
    checked = apply_height_checks(plan, PRESET)

    assert [p.idx for p in checked.placements] == [2]
    assert [(r.unit.serial, r.reason) for r in checked.rejected] == [
        (0, "overheight"),
        (1, "overheight"),
    ]
    assert checked.used_height_mm == 1400
    assert plan.placements[0].idx == 0


def test_inner_height_override_wins():
    preset = TruckPreset(length_mm=13600, width_mm=2460, height_mm=3000, inner_height_mm=2500)
    plan = PlanResult(placements=[_placement(430, 0, 2600)])
    checked = apply_height_checks(plan, preset)
    assert checked.placements == []
    assert len(checked.rejected) == 1


def test_placement_without_units_gets_synthetic_rejection():
    plan = PlanResult(placements=[_placement(430, 1200, 3000, units=())])
    checked = apply_height_checks(plan, PRESET)
    assert len(checked.rejected) == 1
    rejection = checked.rejected[0]
    assert rejection.reason == "overheight"
    assert rejection.unit.item_id == "overheight@430,1200"


def test_side_door_risk_is_a_warning_only():
    plan = PlanResult(placements=[_placement(430, 0, 2680)])
    checked = apply_height_checks(plan, PRESET)
    assert len(checked.placements) == 1
    assert checked.rejected == []
    assert checked.warnings == [
        "Side-door height risk at approx x=430mm, y=0mm: 2680mm exceeds 2650mm."
    ]


def test_side_door_warning_once_per_floor_position():
    plan = PlanResult(
        placements=[
            _placement(430, 0, 2660, idx=0),
            _placement(430, 0, 2690, idx=1),
            _placement(1230, 0, 1000, idx=2),
        ]
    )
    checked = apply_height_checks(plan, PRESET)
    assert len(checked.warnings) == 1
    assert "2690mm" in checked.warnings[0]


def test_custom_side_door_height():
    preset = TruckPreset(
        length_mm=13600, width_mm=2460, height_mm=3000, side_door_height_mm=2900
    )
    plan = PlanResult(placements=[_placement(430, 0, 2800)])
    assert apply_height_checks(plan, preset).warnings == []


def test_max_top_by_position():
    placements = [
        _placement(0, 0, 100),
        _placement(0, 0, 300),
        _placement(800, 0, 200),
    ]
    assert max_top_by_position(placements) == {(0, 0): 300, (800, 0): 200}


def test_used_length_shrinks_when_rear_row_is_removed():
    plan = PlanResult(
        placements=[_placement(430, 0, 1400), _placement(430, 1200, 2800, idx=1)],
        used_length_mm=2400,
    )
    checked = apply_height_checks(plan, PRESET)
    assert checked.used_length_mm == 1200
    assert apply_height_checks(PlanResult(used_length_mm=2400), PRESET).used_length_mm == 0
