from dataclasses import replace

import pytest

from physengine.helpers import markers_to_map
from physengine.models.organ_health import (
    ALT, AST, DIASTOLIC_BP, EGFR, ESTRADIOL, GLUCOSE, HDL, HEMATOCRIT, LDL, LH_FSH,
    MARKER_ORDER, SYSTOLIC_BP, TESTOSTERONE, baseline_blood_markers, calculate_risk,
    compute_weekly_health_state, next_week_blood_markers,
)
from physengine.types import BloodMarker, BloodWork, HpsResult


def _step(profile, hps, previous=None):
    previous = previous if previous is not None else baseline_blood_markers()
    markers = next_week_blood_markers(profile, hps, previous)
    return {m.marker: m for m in markers}


def test_baseline_uses_defaults_and_supplied_labs():
    default = markers_to_map(baseline_blood_markers())
    assert default[SYSTOLIC_BP] == 120 and default[EGFR] == 100 and default[HEMATOCRIT] == 42

    custom = {m.marker: m for m in baseline_blood_markers(BloodWork(ldl=150, alt=30))}
    assert custom[LDL].value == 150
    assert custom[LDL].status == "elevated"
    assert custom[ALT].value == 30
    assert custom[ESTRADIOL].value == 25  # always starts from the default


def test_marker_order_is_stable_week_to_week(profile):
    markers = next_week_blood_markers(profile, HpsResult(), baseline_blood_markers())
    assert tuple(m.marker for m in markers) == MARKER_ORDER
    assert tuple(m.marker for m in baseline_blood_markers()) == MARKER_ORDER


def test_liver_enzymes_accumulate_above_strain_threshold(profile):
    out = _step(profile, HpsResult(total_hepatotoxicity=6))
    assert out[ALT].value == 29  # 25 * 1.05 + 3.0 = 29.25
    assert out[AST].value == 29  # 25 * 1.05 + 2.4 = 28.65


def test_liver_enzymes_regenerate_down_to_floor(profile):
    previous = [BloodMarker(ALT, 40), BloodMarker(AST, 26)]
    out = _step(profile, HpsResult(), previous)
    assert out[ALT].value == pytest.approx(34.0)
    assert out[AST].value == 25


def test_egfr_strain_recovery_and_floor(profile):
    strained = _step(profile, HpsResult(total_nephrotoxicity=2, total_cardiotoxicity=5))
    assert strained[EGFR].value == 99  # 100 - 0.9

    resting = _step(profile, HpsResult(), [BloodMarker(EGFR, 90)])
    assert resting[EGFR].value == 91  # 90.5 rounds half up

    failing = _step(profile, HpsResult(total_nephrotoxicity=50), [BloodMarker(EGFR, 16)])
    assert failing[EGFR].value == 15
    assert failing[EGFR].status == "low"


def test_blood_pressure_rises_with_cardiotoxicity_and_falls_with_support(profile):
    out = _step(profile, HpsResult(total_cardiotoxicity=5, total_blood_pressure_reduction=10))
    assert out[SYSTOLIC_BP].value == pytest.approx(117)
    assert out[DIASTOLIC_BP].value == 79


def test_poor_lipid_response_amplifies_shift(profile):
    hps = HpsResult(total_cardiotoxicity=10)
    plain = _step(profile, hps)
    flagged = _step(replace(profile, genetic_factors=("genetics.lipid_response",)), hps)

    assert plain[HDL].value == pytest.approx(48)
    assert plain[LDL].value == pytest.approx(103)
    assert flagged[HDL].value == pytest.approx(47)
    assert flagged[LDL].value == 105


def test_testosterone_is_suppressed_baseline_plus_exogenous(profile):
    out = _step(profile, HpsResult(total_hpta_suppression=9, total_anabolic=8))
    assert out[TESTOSTERONE].value == 320 + 200

    shut_down = _step(profile, HpsResult(total_hpta_suppression=30))
    assert shut_down[TESTOSTERONE].value == 50


def test_estradiol_aromatization_and_gradual_inhibition(profile):
    assert _step(profile, HpsResult(total_androgenic=10))[ESTRADIOL].value == pytest.approx(28)

    aromatizer = replace(profile, genetic_factors=("High Aromatization Tendency",))
    assert _step(aromatizer, HpsResult(total_androgenic=10))[ESTRADIOL].value == 29

    inhibited = _step(profile, HpsResult(total_androgenic=10, total_estrogen_reduction=0.5))
    assert inhibited[ESTRADIOL].value == 27  # 28 * 0.95 = 26.6

    capped = _step(profile, HpsResult(total_androgenic=10, total_estrogen_reduction=3.0))
    assert capped[ESTRADIOL].value == 25  # 28 * 0.905 = 25.34


def test_lh_fsh_tracks_suppression(profile):
    out = _step(profile, HpsResult(total_hpta_suppression=9))
    assert out[LH_FSH].value == pytest.approx(0.5)
    assert out[LH_FSH].status == "critical"
    assert out[LH_FSH].display_value == "0.5"

    assert _step(profile, HpsResult(total_hpta_suppression=20))[LH_FSH].value == 0.1


def test_glucose_and_hematocrit_drift(profile):
    out = _step(profile, HpsResult(total_androgenic=10, metabolic_adjustment_factor=1.004))
    assert out[GLUCOSE].value == 85
    assert out[HEMATOCRIT].value == pytest.approx(42.8)


def test_hematocrit_has_no_ceiling(profile):
    markers = baseline_blood_markers()
    for _ in range(20):
        markers = next_week_blood_markers(profile, HpsResult(total_androgenic=20), markers)
    hct = markers_to_map(markers)[HEMATOCRIT]
    assert hct == pytest.approx(42 + 20 * 1.6)


def test_missing_previous_markers_fall_back_to_defaults(profile):
    out = _step(profile, HpsResult(), [])
    assert out[SYSTOLIC_BP].value == 120
    assert out[EGFR].value == 101


@pytest.mark.parametrize("base, age, flag, expected", [
    (10, 30, False, 10),
    (10, 45, False, 15),
    (10, 45, True, 20),    # (10 + 5) * 1.3 = 19.5 -> 20; multiplying first would give 18
    (90, 80, True, 100),
    (-10, 30, False, 0),
])
def test_calculate_risk(base, age, flag, expected):
    assert calculate_risk(base, age, flag).score == expected


def test_health_state_uses_genetic_flag_for_cardiovascular_only(profile):
    flagged = replace(profile, age=40, genetic_factors=("cardio_risk",))
    hps = HpsResult(total_cardiotoxicity=10, total_hepatotoxicity=10)

    result = compute_weekly_health_state(flagged, hps, baseline_blood_markers())

    assert result.risk_scores.cardiovascular.score == 16  # (10 + 2.5) * 1.3 = 16.25
    assert result.risk_scores.hepatic.score == 13          # 12.5 -> 13
    assert "ALT" in result.risk_scores.hepatic.notes


def test_health_state_is_a_pure_function_of_inputs(profile):
    hps = HpsResult(total_cardiotoxicity=7, total_androgenic=9, total_hpta_suppression=4)
    previous = baseline_blood_markers()
    assert compute_weekly_health_state(profile, hps, previous) == \
        compute_weekly_health_state(profile, hps, previous)


def test_weekly_values_are_stored_rounded_with_status_from_exact_value(profile):
    out = _step(profile, HpsResult(), [BloodMarker(SYSTOLIC_BP, 130.4), BloodMarker(HEMATOCRIT, 49.96)])

    assert out[SYSTOLIC_BP].value == 130
    assert out[SYSTOLIC_BP].status == "elevated"
    assert out[HEMATOCRIT].value == 50.0
    assert out[HEMATOCRIT].status == "normal"


def test_baseline_keeps_entered_values():
    markers = markers_to_map(baseline_blood_markers(BloodWork(ldl=130.6, glucose=88.3)))
    assert markers[LDL] == 130.6
    assert markers[GLUCOSE] == 88.3


def test_rounded_value_is_what_the_next_week_reads(profile):
    """0.9 of strain per week: 100 -> 99.1 is stored as 99, so week two starts from 99."""
    hps = HpsResult(total_nephrotoxicity=2, total_cardiotoxicity=5)
    first = next_week_blood_markers(profile, hps, baseline_blood_markers())
    second = markers_to_map(next_week_blood_markers(profile, hps, first))
    assert second[EGFR] == 98  # 99 - 0.9 = 98.1
