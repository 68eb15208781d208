import pytest

from truckload_core.axles import check_axles, placement_weight, support_span
from truckload_core.models import AxleOptions, Placement, PlanResult, TruckPreset, Unit
from truckload_core.report import axle_report_to_dict
from truckload_core.validation import PlanInputError

PRESET = TruckPreset(length_mm=13600, width_mm=2460, height_mm=2700)


def _placement(y, *weights, x=430):
    units = tuple(Unit("EUP", weight_kg=w, serial=i) for i, w in enumerate(weights))
    return Placement(x=x, y=y, width=800, length=1200, units=units)


def test_two_support_reactions_split_by_lever_arm():
    plan = PlanResult(placements=[_placement(3400, 1000), _placement(9400, 1000)])
    report = check_axles(
        plan, PRESET, AxleOptions(support_front_x=1000, support_rear_x=11000)
    )
    assert report.r_front == 800
    assert report.r_rear == 1200
    assert report.total_weight_kg == 2000
    assert report.max_kg_per_m == 1000
    assert report.warnings == []


def test_reaction_identity_within_span():
    plan = PlanResult(
        placements=[_placement(y, 437.5, 512.25) for y in range(1300, 11000, 1200)]
    )
    report = check_axles(
        plan, PRESET, AxleOptions(support_front_x=1300, support_rear_x=12400)
    )
    assert report.r_front + report.r_rear == pytest.approx(report.total_weight_kg, abs=1)


def test_centroid_outside_span_is_clamped():
    plan = PlanResult(placements=[_placement(0, 500)])
    report = check_axles(
        plan, PRESET, AxleOptions(support_front_x=1300, support_rear_x=12000)
    )
    assert report.r_front == 500
    assert report.r_rear == 0


def test_per_slot_fallback_weight():
    assert placement_weight(_placement(0), 700) == 700
    assert placement_weight(_placement(0, 0.0), 700) == 700
    assert placement_weight(_placement(0, 250, 250), 700) == 500


def test_peak_density_uses_bins():
    plan = PlanResult(
        placements=[
            _placement(0, 600),
            _placement(0, 600, x=1230),
            _placement(1200, 300),
        ]
    )
    report = check_axles(
        plan,
        PRESET,
        AxleOptions(support_front_x=0, support_rear_x=13600, bin_size_mm=500, max_kg_per_m=2000),
    )
    # both 600 kg slots fall into the 500..1000 mm bin
    assert report.max_kg_per_m == 2400
    assert report.warnings == [
        "Peak linear density 2400 kg/m exceeds threshold 2000 kg/m."
    ]


def test_threshold_warnings():
    plan = PlanResult(placements=[_placement(10000, 12000), _placement(600, 1000)])
    options = AxleOptions(
        support_front_x=1000,
        support_rear_x=11000,
        rear_axle_group_max_kg=9000,
        kingpin_min_kg=3000,
        kingpin_max_kg=20000,
        payload_max_kg=12000,
    )
    report = check_axles(plan, PRESET, options)
    assert any(w.startswith("Rear axle group load") for w in report.warnings)
    assert any("below minimum 3000 kg" in w for w in report.warnings)
    assert not any("kingpin) load" in w and "exceeds" in w for w in report.warnings)
    assert "Total payload 13000 kg exceeds 12000 kg." in report.warnings


def test_empty_plan_reports_zero():
    report = check_axles(
        PlanResult(), PRESET, AxleOptions(support_front_x=1000, support_rear_x=11000)
    )
    assert (report.r_front, report.r_rear, report.max_kg_per_m) == (0, 0, 0)


def test_support_span_keeps_rear_behind_front():
    assert support_span(AxleOptions(support_front_x=1000.7, support_rear_x=1001.2)) == (
        1000,
        1001,
    )
    assert support_span(AxleOptions(support_front_x=-50, support_rear_x=100)) == (0, 100)


def test_degenerate_span_fails_fast():
    with pytest.raises(PlanInputError):
        check_axles(PlanResult(), PRESET, AxleOptions(support_front_x=5000, support_rear_x=5000))


def test_axle_report_dict():
    plan = PlanResult(placements=[_placement(3400, 1000)])
    report = check_axles(
        plan, PRESET, AxleOptions(support_front_x=1000, support_rear_x=11000)
    )
    assert axle_report_to_dict(report) == {
        "R_front": 700,
        "R_rear": 300,
        "maxKgPerM": 1000,
        "totalWeightKg": 1000,
        "warnings": [],
    }
