"""Hormonal & pharmacological aggregation of a week's active concentrations."""
from __future__ import annotations

from typing import Mapping, Optional

from ..compounds import CompoundLibrary, default_library
from ..helpers import round_half_up
from ..types import HpsResult

# +5% energy expenditure per 100 points of anabolic load
METABOLIC_SENSITIVITY = 0.05


def metabolic_adjustment(total_anabolic: float) -> float:
    return 1.0 + (total_anabolic / 100.0) * METABOLIC_SENSITIVITY


def compute_weekly_hormonal_state(concentrations: Mapping[str, float],
                                  is_post_cycle: bool,
                                  *,
                                  library: Optional[CompoundLibrary] = None) -> HpsResult:
    """
    Sum trait x concentration over every active compound.

    During the post-cycle phase, compounds carrying an HPTA-stimulation
    modifier count against suppression instead of toward it, and the net is
    floored at zero. Totals are rounded once at the end; the two reduction
    accumulators stay fractional.
    """
    if library is None:
        library = default_library()

    anabolic = androgenic = hepato = cardio = nephro = 0.0
    suppression = stimulation = 0.0
    estrogen_reduction = bp_reduction = 0.0

    for name, conc in concentrations.items():
        spec = library.get(name)
        if spec is None or conc <= 0:
            continue

        anabolic += spec.anabolic * conc
        androgenic += spec.androgenic * conc
        hepato += spec.hepatotoxicity * conc
        cardio += spec.cardiotoxicity * conc
        nephro += spec.nephrotoxicity * conc

        if is_post_cycle and spec.hpta_stimulation:
            stimulation += spec.hpta_stimulation * conc
        else:
            suppression += spec.hpta_suppression * conc

        if spec.estrogen_reduction:
            estrogen_reduction += spec.estrogen_reduction * conc
        if spec.blood_pressure_reduction:
            bp_reduction += spec.blood_pressure_reduction * conc

    if is_post_cycle:
        suppression = max(0.0, suppression - stimulation)

    return HpsResult(
        total_anabolic=int(round_half_up(anabolic)),
        total_androgenic=int(round_half_up(androgenic)),
        total_hepatotoxicity=int(round_half_up(hepato)),
        total_cardiotoxicity=int(round_half_up(cardio)),
        total_hpta_suppression=int(round_half_up(suppression)),
        total_nephrotoxicity=int(round_half_up(nephro)),
        total_estrogen_reduction=estrogen_reduction,
        total_blood_pressure_reduction=bp_reduction,
        metabolic_adjustment_factor=metabolic_adjustment(anabolic),
    )
