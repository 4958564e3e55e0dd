from __future__ import annotations

from ..types import AmsWeeklyResult, HpsResult, MesResult

KCAL_PER_KG_FAT = 7700.0
KCAL_PER_KG_MUSCLE = 5000.0  # muscle-equivalent tissue incl. water and glycogen


def partition_ratio(weekly_balance: float, total_anabolic: float) -> float:
    """
    Fraction of the weekly energy balance attributed to muscle.

    In a surplus, anabolic load pushes more of it into muscle (capped at 85%).
    In a deficit the base split is 50/50, shifted by 4 points per unit of
    anabolic load, and never below 10% from muscle.
    """
    if weekly_balance > 0:
        return min(0.3 + total_anabolic * 0.025, 0.85)
    return max(1 - (0.5 - total_anabolic * 0.04), 0.1)


def compute_weekly_body_composition_change(mes: MesResult, hps: HpsResult) -> AmsWeeklyResult:
    weekly_balance = mes.calorie_balance * 7
    p_ratio = partition_ratio(weekly_balance, hps.total_anabolic)
    return AmsWeeklyResult(
        muscle_change_kg=weekly_balance * p_ratio / KCAL_PER_KG_MUSCLE,
        fat_change_kg=weekly_balance * (1 - p_ratio) / KCAL_PER_KG_FAT,
    )
