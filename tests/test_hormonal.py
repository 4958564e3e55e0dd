import pytest

from physengine.compounds import CompoundLibrary
from physengine.models.hormonal import compute_weekly_hormonal_state
from physengine.types import CompoundSpec, HpsResult


def test_empty_map_gives_neutral_state():
    result = compute_weekly_hormonal_state({}, False)

    assert result == HpsResult()
    assert result.metabolic_adjustment_factor == 1.0


def test_single_compound_at_unit_concentration_returns_raw_traits():
    result = compute_weekly_hormonal_state({"Testosterone Enanthate": 1.0}, False)

    assert result.total_anabolic == 8
    assert result.total_androgenic == 8
    assert result.total_hepatotoxicity == 1
    assert result.total_cardiotoxicity == 5
    assert result.total_hpta_suppression == 9
    assert result.total_nephrotoxicity == 2
    assert result.metabolic_adjustment_factor == pytest.approx(1.0 + (8 / 100) * 0.05)


def test_weighted_sum_is_rounded_once_at_the_end():
    result = compute_weekly_hormonal_state(
        {"Testosterone Enanthate": 1.0, "Trenbolone Acetate": 0.5}, False)

    assert result.total_anabolic == 13        # 8 + 10 * 0.5
    assert result.total_androgenic == 13
    assert result.total_hepatotoxicity == 3   # 1 + 3 * 0.5 = 2.5 -> 3
    assert result.total_cardiotoxicity == 10  # 5 + 9 * 0.5 = 9.5 -> 10
    assert result.total_hpta_suppression == 14
    assert result.total_nephrotoxicity == 6


def test_post_cycle_stimulation_offsets_suppression():
    # 9 * 0.1 suppression against 7 * 1.0 stimulation
    result = compute_weekly_hormonal_state(
        {"Testosterone Enanthate": 0.1, "Tamoxifen (Nolvadex)": 1.0}, True)
    assert result.total_hpta_suppression == 0


def test_post_cycle_net_suppression_is_difference_when_positive():
    # 9 * 1.5 = 13.5 suppression, 8 * 0.5 = 4 stimulation
    result = compute_weekly_hormonal_state(
        {"Testosterone Enanthate": 1.5, "Clomiphene (Clomid)": 0.5}, True)
    assert result.total_hpta_suppression == 10  # 9.5 -> 10


def test_stimulation_is_ignored_outside_post_cycle():
    result = compute_weekly_hormonal_state(
        {"Testosterone Enanthate": 1.0, "Tamoxifen (Nolvadex)": 1.0}, False)
    assert result.total_hpta_suppression == 9


def test_reduction_modifiers_stay_fractional():
    result = compute_weekly_hormonal_state(
        {"Anastrozole (Arimidex)": 0.25, "Telmisartan": 0.4}, False)

    assert result.total_estrogen_reduction == pytest.approx(0.125)
    assert result.total_blood_pressure_reduction == pytest.approx(4.0)


def test_unknown_and_non_positive_entries_contribute_nothing():
    result = compute_weekly_hormonal_state(
        {"Mystery Compound": 3.0, "Testosterone Enanthate": 0.0, "Nandrolone Decanoate": -1.0}, False)
    assert result == HpsResult()


def test_injected_library_replaces_default_table():
    library = CompoundLibrary([
        CompoundSpec("Compound X", "base_hormone", 5, anabolic=4, androgenic=2, cardiotoxicity=1),
    ])

    custom = compute_weekly_hormonal_state({"Compound X": 2.0}, False, library=library)
    default = compute_weekly_hormonal_state({"Compound X": 2.0}, False)

    assert custom.total_anabolic == 8
    assert custom.total_cardiotoxicity == 2
    assert default == HpsResult()
