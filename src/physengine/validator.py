"""
Bookkeeping and plausibility checks on a finished simulation.

This is not an oracle for the model's science. It checks that the time
series are complete and flags physiologically implausible outcomes.
"""
from __future__ import annotations

import logging
from typing import Optional

from .config import EngineSettings
from .dosing import total_weeks
from .metrics import physique_arrays, total_muscle_change
from .types import SimulationResult, ValidationReport

LOGGER = logging.getLogger(__name__)


def validate_simulation(sim: SimulationResult, *, settings: Optional[EngineSettings] = None) -> ValidationReport:
    """
    Return errors (history length mismatches), warnings (implausibly low
    final fat, malformed identifier) and suggestions (large muscle gain).
    Never raises and never modifies `sim`.
    """
    settings = settings or EngineSettings()
    errors: list[str] = []
    warnings: list[str] = []
    suggestions: list[str] = []

    expected = total_weeks(sim.inputs.phases, sim.inputs.pct) + 1
    n_physique = len(sim.physique_projection)
    n_blood = len(sim.blood_marker_history)
    if n_physique != expected:
        errors.append(f"Physique projection length ({n_physique}) does not match "
                      f"expected total weeks + 1 ({expected}).")
    if n_blood != expected:
        errors.append(f"Blood marker history length ({n_blood}) does not match "
                      f"expected total weeks + 1 ({expected}).")

    if n_physique > 0:
        gain = total_muscle_change(sim.physique_projection)
        if gain > settings.muscle_gain_limit_kg:
            suggestions.append(f"Muscle gain ({gain:.1f} kg) may exceed typical natural limits.")

        _, _, fat = physique_arrays(sim.physique_projection)
        initial_fat, final_fat = float(fat[0]), float(fat[-1])
        if final_fat < settings.min_fat_mass_kg and initial_fat >= settings.min_fat_mass_kg:
            warnings.append(f"Final fat mass is very low ({final_fat:.1f} kg), "
                            "which may be unrealistic or unsustainable.")

    if not sim.id.startswith(settings.id_prefix):
        warnings.append(f'Simulation ID format invalid. Should be prefixed with "{settings.id_prefix}".')

    report = ValidationReport(is_valid=not errors, errors=tuple(errors),
                              warnings=tuple(warnings), suggestions=tuple(suggestions))
    if errors:
        LOGGER.warning("Simulation %s failed validation: %s", sim.id, "; ".join(errors))
    return report
