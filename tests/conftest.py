import pytest

from physengine.dosing import dose_entry, make_phase
from physengine.types import AthleteProfile, NutritionPlan, SimulationInput


@pytest.fixture()
def profile() -> AthleteProfile:
    """85 kg at 15% body fat, 30 years old, no genetic flags."""
    return AthleteProfile(age=30, weight_kg=85.0, body_fat_pct=15.0, goal="lean_gain")


@pytest.fixture()
def nutrition() -> NutritionPlan:
    return NutritionPlan(calories=3000, protein_g=180, carbs_g=350, fat_g=80,
                         supplements=("supplements.creatine", "supplements.omega3"))


@pytest.fixture()
def te_cycle(profile, nutrition) -> SimulationInput:
    """
    12 weeks of Testosterone Enanthate at 500 mg/week (a concentration of 1.0
    in week 1), no support and no post-cycle therapy.
    """
    phase = make_phase("Main Cycle", 12, dose_entry("Testosterone Enanthate", 500, "weekly"))
    return SimulationInput(profile=profile, nutrition=nutrition, phases=(phase,))
