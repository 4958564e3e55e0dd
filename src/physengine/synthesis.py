"""
Turn final and peak-week numbers into translatable descriptors.

Nothing here is rendered: every descriptor is a KeyedText whose key a
presentation layer looks up in its own message catalogue.
"""
from __future__ import annotations

from typing import Sequence

from .dosing import cycle_duration
from .helpers import group_doses_by_compound, has_genetic_factor, has_key
from .metrics import total_fat_change, total_muscle_change
from .types import (
    HpsResult, KeyedText, OhsResult, PhysiquePoint, SimulationInput, SynthesisResult,
    TranslatableText,
)

PHYSIQUE_DEAD_ZONE_KG = 0.1


def generate_summary(physique: Sequence[PhysiquePoint], peak: OhsResult, duration: int) -> KeyedText:
    muscle_gain = total_muscle_change(physique)
    fat_loss = -total_fat_change(physique)
    gain_text = f"{muscle_gain:.1f}"
    loss_text = f"{fat_loss:.1f}"

    if muscle_gain > PHYSIQUE_DEAD_ZONE_KG and fat_loss > PHYSIQUE_DEAD_ZONE_KG:
        physique_text = KeyedText("physique.gain_and_lose", {"muscleGain": gain_text, "fatLoss": loss_text})
    elif muscle_gain > PHYSIQUE_DEAD_ZONE_KG:
        physique_text = KeyedText("physique.gain", {"muscleGain": gain_text})
    elif fat_loss > PHYSIQUE_DEAD_ZONE_KG:
        physique_text = KeyedText("physique.lose", {"fatLoss": loss_text})
    else:
        physique_text = KeyedText("physique.maintain")

    highest = peak.risk_scores.highest()
    if highest > 75:
        risk_key = "risk.summary.critical"
    elif highest > 50:
        risk_key = "risk.summary.significant"
    else:
        risk_key = "risk.summary.manageable"

    return KeyedText("synthesis.summary", {
        "duration": duration,
        "physique": physique_text,
        "risk": KeyedText(risk_key),
    })


def generate_warnings(bundle: SimulationInput, peak: OhsResult, peak_hps: HpsResult) -> list[TranslatableText]:
    risks = peak.risk_scores
    warnings: list[TranslatableText] = []

    if risks.cardiovascular.score > 50:
        warnings.append(KeyedText("synthesis.warnings.cardio"))
    if risks.hepatic.score > 50:
        warnings.append(KeyedText("synthesis.warnings.hepatic"))
    if risks.renal.score > 30:
        warnings.append(KeyedText("synthesis.warnings.renal"))
    if risks.endocrine.score > 75:
        warnings.append(KeyedText("synthesis.warnings.endocrine"))
    if peak_hps.total_androgenic > 60 and has_genetic_factor(bundle.profile.genetic_factors, "alopecia"):
        warnings.append(KeyedText("synthesis.warnings.hair_loss"))

    if not warnings:
        warnings.append(KeyedText("synthesis.warnings.general"))
    return warnings


def generate_recommendations(bundle: SimulationInput, peak: OhsResult) -> list[TranslatableText]:
    supplements = bundle.nutrition.supplements
    risks = peak.risk_scores
    recommendations: list[TranslatableText] = []

    if risks.cardiovascular.score > 40:
        key = "synthesis.recommendations.cardio"
        if not has_key(supplements, "omega3", "supplements"):
            key += "_missing"
        recommendations.append(KeyedText(key))

    if risks.hepatic.score > 40:
        key = "synthesis.recommendations.hepatic"
        if not (has_key(supplements, "tudca", "supplements") or has_key(supplements, "nac", "supplements")):
            key += "_missing"
        recommendations.append(KeyedText(key))

    if group_doses_by_compound(bundle.pct):
        recommendations.append(KeyedText("synthesis.recommendations.pct_defined"))
    else:
        recommendations.append(KeyedText("synthesis.recommendations.pct_missing"))

    recommendations.append(KeyedText("synthesis.recommendations.monitoring"))
    return recommendations


def synthesize_results(bundle: SimulationInput, physique: Sequence[PhysiquePoint],
                       peak: OhsResult, peak_hps: HpsResult) -> SynthesisResult:
    """
    `peak` and `peak_hps` are the OHS and HPS outputs of the peak-risk week,
    so warnings reflect the worst point of the run rather than its end.
    """
    return SynthesisResult(
        summary=generate_summary(physique, peak, cycle_duration(bundle.phases)),
        inferred_goal=bundle.profile.goal,
        warnings=tuple(generate_warnings(bundle, peak, peak_hps)),
        recommendations=tuple(generate_recommendations(bundle, peak)),
        long_term_outlook=KeyedText("synthesis.long_term_outlook"),
    )
