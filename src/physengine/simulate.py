# src/physengine/simulate.py
from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Optional

from .compounds import CompoundLibrary, default_library
from .config import EngineSettings
from .dosing import cycle_duration, is_post_cycle, total_weeks
from .models.anthropometric import compute_weekly_body_composition_change
from .models.hormonal import compute_weekly_hormonal_state
from .models.metabolic import compute_weekly_energetics
from .models.organ_health import baseline_blood_markers, compute_weekly_health_state
from .models.pharmacokinetic import compute_weekly_concentrations
from .helpers import round_half_up
from .synthesis import synthesize_results
from .types import (
    BloodMarkerWeek, HormonalWeek, HpsResult, PhysiquePoint, SimulationInput, SimulationResult,
)

LOGGER = logging.getLogger(__name__)


def default_simulation_id(settings: EngineSettings) -> str:
    """Timestamp-based identifier, e.g. 'sim-1760860800000'."""
    return f"{settings.id_prefix}{int(time.time() * 1000)}"


def run_simulation(bundle: SimulationInput, *,
                   library: Optional[CompoundLibrary] = None,
                   settings: Optional[EngineSettings] = None,
                   simulation_id: Optional[str] = None) -> SimulationResult:
    """
    Run the weekly PKE -> HPS -> MES -> AMS -> OHS pipeline over the whole
    protocol and synthesise the result.

    Total weeks = sum of phase durations + the longest post-cycle entry.
    Every history holds total_weeks + 1 entries; index 0 is the baseline.
    Pass `simulation_id` for reproducible identifiers.
    """
    if library is None:
        library = default_library()
    settings = settings or EngineSettings()
    profile, nutrition = bundle.profile, bundle.nutrition
    phases, support, pct = bundle.phases, bundle.support, bundle.pct

    n_weeks = total_weeks(phases, pct)
    LOGGER.info("Simulating %d week(s): %d on cycle, %d post-cycle",
                n_weeks, cycle_duration(phases), n_weeks - cycle_duration(phases))

    muscle_kg = profile.weight_kg * (1 - profile.body_fat_pct / 100)
    fat_kg = profile.weight_kg * (profile.body_fat_pct / 100)

    baseline_markers = baseline_blood_markers(profile.baseline_bloodwork)
    baseline_hps = HpsResult()
    physique = [PhysiquePoint(week=0, muscle_mass_kg=muscle_kg, fat_mass_kg=fat_kg)]
    blood_history = [BloodMarkerWeek(week=0, markers=baseline_markers)]
    hormonal_history = [HormonalWeek(week=0, state=baseline_hps)]

    # Peak snapshot starts from a baseline run so a zero-week protocol still reports risk
    peak_ohs = compute_weekly_health_state(profile, baseline_hps, baseline_markers)
    peak_hps = baseline_hps

    concentrations: dict[str, float] = {}
    for week in range(1, n_weeks + 1):
        concentrations = compute_weekly_concentrations(
            week, phases, support, pct, concentrations,
            library=library, floor=settings.concentration_floor,
        )
        hps = compute_weekly_hormonal_state(
            concentrations, is_post_cycle(week, phases), library=library,
        )

        # TDEE follows the changing composition, not the starting profile
        weight_kg = muscle_kg + fat_kg
        body_fat_pct = fat_kg / weight_kg * 100 if weight_kg > 0 else 0.0
        current = replace(profile, weight_kg=weight_kg, body_fat_pct=body_fat_pct)
        mes = compute_weekly_energetics(current, nutrition, hps)

        ams = compute_weekly_body_composition_change(mes, hps)
        muscle_kg += ams.muscle_change_kg
        fat_kg += ams.fat_change_kg
        physique.append(PhysiquePoint(week=week,
                                      muscle_mass_kg=round_half_up(muscle_kg, 2),
                                      fat_mass_kg=round_half_up(fat_kg, 2)))

        ohs = compute_weekly_health_state(profile, hps, blood_history[-1].markers)
        blood_history.append(BloodMarkerWeek(week=week, markers=ohs.blood_markers))
        hormonal_history.append(HormonalWeek(week=week, state=hps))

        if ohs.risk_scores.cardiovascular.score > peak_ohs.risk_scores.cardiovascular.score:
            peak_ohs, peak_hps = ohs, hps

        LOGGER.debug("week %d: compounds=%d anabolic=%d balance=%.0f kcal/day cardio=%d",
                     week, len(concentrations), hps.total_anabolic, mes.calorie_balance,
                     ohs.risk_scores.cardiovascular.score)

    synthesis = synthesize_results(bundle, physique, peak_ohs, peak_hps)
    result = SimulationResult(
        id=simulation_id if simulation_id is not None else default_simulation_id(settings),
        summary=synthesis.summary,
        inferred_goal=synthesis.inferred_goal,
        physique_projection=tuple(physique),
        blood_marker_history=tuple(blood_history),
        hormonal_history=tuple(hormonal_history),
        risk_scores=peak_ohs.risk_scores,
        warnings=synthesis.warnings,
        recommendations=synthesis.recommendations,
        long_term_outlook=synthesis.long_term_outlook,
        inputs=bundle,
    )
    LOGGER.info("Simulation %s finished; peak cardiovascular risk %d",
                result.id, result.risk_scores.cardiovascular.score)
    return result
