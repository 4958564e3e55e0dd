from __future__ import annotations

from ..helpers import normalize_key
from ..types import AthleteProfile, HpsResult, MesResult, NutritionPlan

GOAL_ACTIVITY_FACTORS: dict[str, float] = {
    "aggressive_bulk": 1.55,
    "lean_gain": 1.55,
    "recomposition": 1.375,
    "moderate_cut": 1.375,
    "aggressive_shred": 1.55,
    "competition_prep": 1.725,
    "anti_aging": 1.2,
}
DEFAULT_ACTIVITY_FACTOR = 1.375

# Display labels older bundles store instead of keys
GOAL_LABELS: dict[str, str] = {
    "Aggressive Muscle Gain (Bulk)": "aggressive_bulk",
    "Lean Muscle Gain": "lean_gain",
    "Maintenance / Recomposition": "recomposition",
    "Moderate Fat Loss (Cut)": "moderate_cut",
    "Aggressive Fat Loss (Shred)": "aggressive_shred",
    "Competition Preparation": "competition_prep",
    "Anti-Aging / TRT": "anti_aging",
}


def activity_factor(goal: str) -> float:
    return GOAL_ACTIVITY_FACTORS.get(normalize_key(goal, "goals", GOAL_LABELS), DEFAULT_ACTIVITY_FACTOR)


def lean_body_mass_kg(weight_kg: float, body_fat_pct: float) -> float:
    return weight_kg * (1 - body_fat_pct / 100)


def katch_mcardle_bmr(lbm_kg: float) -> float:
    """Basal metabolic rate (kcal/day) from lean body mass."""
    return 370 + 21.6 * lbm_kg


def compute_weekly_energetics(profile: AthleteProfile, nutrition: NutritionPlan,
                              hps: HpsResult) -> MesResult:
    """
    TDEE and daily calorie balance for the week.
    The balance is deliberately unclamped: deficits and surpluses pass through as-is.
    """
    bmr = katch_mcardle_bmr(lean_body_mass_kg(profile.weight_kg, profile.body_fat_pct))
    tdee = bmr * activity_factor(profile.goal) * hps.metabolic_adjustment_factor
    return MesResult(tdee=tdee, calorie_balance=nutrition.calories - tdee)
