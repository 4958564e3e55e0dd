import pytest

from physengine.models.anthropometric import (
    compute_weekly_body_composition_change, partition_ratio,
)
from physengine.models.metabolic import activity_factor, compute_weekly_energetics
from physengine.types import HpsResult, MesResult, NutritionPlan


def test_katch_mcardle_tdee_and_balance(profile):
    mes = compute_weekly_energetics(profile, NutritionPlan(calories=3000), HpsResult())

    bmr = 370 + 21.6 * (85 * 0.85)
    assert mes.tdee == pytest.approx(bmr * 1.55)
    assert mes.calorie_balance == pytest.approx(3000 - bmr * 1.55)


def test_metabolic_factor_scales_tdee(profile):
    neutral = compute_weekly_energetics(profile, NutritionPlan(calories=2000), HpsResult())
    boosted = compute_weekly_energetics(
        profile, NutritionPlan(calories=2000), HpsResult(metabolic_adjustment_factor=1.05))

    assert boosted.tdee == pytest.approx(neutral.tdee * 1.05)
    # Unclamped: a big deficit passes straight through
    assert boosted.calorie_balance < -1000


@pytest.mark.parametrize("goal, expected", [
    ("goals.competition_prep", 1.725),
    ("competition_prep", 1.725),
    ("Anti-Aging / TRT", 1.2),
    ("something else entirely", 1.375),
])
def test_activity_factor_lookup(goal, expected):
    assert activity_factor(goal) == expected


def test_surplus_partition_grows_with_anabolic_load_and_caps():
    assert partition_ratio(700, 0) == pytest.approx(0.3)
    assert partition_ratio(700, 10) == pytest.approx(0.55)
    assert partition_ratio(700, 40) == 0.85


def test_deficit_partition_and_floor():
    assert partition_ratio(-700, 0) == pytest.approx(0.5)
    assert partition_ratio(-700, 5) == pytest.approx(0.7)
    assert partition_ratio(-700, -15) == 0.1


def test_surplus_splits_into_muscle_and_fat():
    change = compute_weekly_body_composition_change(
        MesResult(tdee=2900, calorie_balance=100), HpsResult(total_anabolic=10))

    assert change.muscle_change_kg == pytest.approx(700 * 0.55 / 5000)
    assert change.fat_change_kg == pytest.approx(700 * 0.45 / 7700)


def test_deficit_loses_both_tissues():
    change = compute_weekly_body_composition_change(
        MesResult(tdee=3000, calorie_balance=-500), HpsResult())

    assert change.muscle_change_kg == pytest.approx(-3500 * 0.5 / 5000)
    assert change.fat_change_kg == pytest.approx(-3500 * 0.5 / 7700)
    assert change.muscle_change_kg < 0 and change.fat_change_kg < 0
