"""
Weekly pharmacokinetic step: decay last week's active concentrations, then
add this week's dosing on top.

Concentrations are unitless scores: a weekly dose equal to the category's
reference dosage adds exactly 1.0.
"""
from __future__ import annotations

from typing import Mapping, Optional, Sequence

from ..compounds import CompoundLibrary, default_library
from ..dosing import active_doses, doses_per_week
from ..helpers import is_placeholder
from ..types import CompoundSpec, DoseEntry, Phase

CONCENTRATION_FLOOR = 0.05
DAYS_PER_WEEK = 7.0

# Weekly mg that corresponds to a concentration score of 1.0
REFERENCE_WEEKLY_DOSAGE: dict[str, float] = {
    "anti_estrogen": 350.0,  # ~50 mg/day
    "support": 7.0,          # ~1 mg/day
}
DEFAULT_REFERENCE_WEEKLY_DOSAGE = 500.0


def weekly_decay_factor(half_life_days: float) -> float:
    """Fraction of a concentration left after one week of first-order elimination."""
    return 0.5 ** (DAYS_PER_WEEK / half_life_days)


def reference_dosage(spec: CompoundSpec) -> float:
    return REFERENCE_WEEKLY_DOSAGE.get(spec.category, DEFAULT_REFERENCE_WEEKLY_DOSAGE)


def decay_concentrations(previous: Mapping[str, float], library: CompoundLibrary,
                         floor: float = CONCENTRATION_FLOOR) -> dict[str, float]:
    """
    Apply one week of decay. Zero half-life or unknown compounds are fully
    eliminated; anything at or below `floor` is pruned.
    """
    decayed: dict[str, float] = {}
    for name, conc in previous.items():
        spec = library.get(name)
        if spec is None or spec.half_life_days <= 0:
            continue
        value = conc * weekly_decay_factor(spec.half_life_days)
        if value > floor:
            decayed[name] = value
    return decayed


def added_concentration(dose: DoseEntry, spec: CompoundSpec) -> float:
    weekly_dosage = dose.dosage * doses_per_week(dose.frequency)
    return weekly_dosage / reference_dosage(spec)


def compute_weekly_concentrations(week: int,
                                  phases: Sequence[Phase],
                                  support: Sequence[DoseEntry],
                                  pct: Sequence[DoseEntry],
                                  previous: Mapping[str, float],
                                  *,
                                  library: Optional[CompoundLibrary] = None,
                                  floor: float = CONCENTRATION_FLOOR) -> dict[str, float]:
    """
    Active-concentration map for `week` (1-based).

    A compound both carried over and freshly dosed gets the sum of the two.
    `previous` is left untouched.
    """
    if library is None:
        library = default_library()
    concentrations = decay_concentrations(previous, library, floor)

    for dose in active_doses(week, phases, support, pct):
        if is_placeholder(dose.compound) or dose.dosage <= 0:
            continue
        spec = library.get(dose.compound)
        if spec is None:
            continue
        concentrations[dose.compound] = (
            concentrations.get(dose.compound, 0.0) + added_concentration(dose, spec)
        )

    return concentrations
