"""
Organ & health sub-model.

Blood markers are first-order Markov: each week's panel depends only on the
previous week's panel and the current week's hormonal aggregates. Risk
scores are derived from the hormonal aggregates, the athlete's age and the
relevant genetic flag.
"""
from __future__ import annotations

from typing import Optional, Sequence

from ..helpers import has_genetic_factor, markers_to_map, round_half_up
from ..types import (
    AthleteProfile, BloodMarker, BloodWork, HpsResult, MarkerStatus, OhsResult,
    RiskScore, RiskScoreSet,
)

SYSTOLIC_BP = "Systolic BP"
DIASTOLIC_BP = "Diastolic BP"
HDL = "HDL-C"
LDL = "LDL-C"
GLUCOSE = "Glucose"
TESTOSTERONE = "Total Testosterone"
ESTRADIOL = "Estradiol (E2)"
LH_FSH = "LH / FSH"
ALT = "ALT"
AST = "AST"
EGFR = "eGFR"
HEMATOCRIT = "Hematocrit"

# marker -> (healthy default, BloodWork field or None, display decimals)
MARKER_DEFAULTS: dict[str, tuple[float, Optional[str], int]] = {
    SYSTOLIC_BP: (120, "systolic_bp", 0),
    DIASTOLIC_BP: (80, "diastolic_bp", 0),
    HDL: (50, "hdl", 0),
    LDL: (100, "ldl", 0),
    GLUCOSE: (85, "glucose", 0),
    TESTOSTERONE: (500, "total_testosterone", 0),
    ESTRADIOL: (25, None, 0),
    LH_FSH: (5, None, 1),
    ALT: (25, "alt", 0),
    AST: (25, "ast", 0),
    EGFR: (100, "egfr", 0),
    HEMATOCRIT: (42, None, 1),
}
MARKER_ORDER = tuple(MARKER_DEFAULTS)

LIVER_ENZYME_FLOOR = 25.0
LIVER_STRAIN_THRESHOLD = 5
LIVER_STRAIN_GROWTH = 1.05
LIVER_REGENERATION = 0.85  # 15% of the value recovered per low-strain week
EGFR_FLOOR = 15.0
EGFR_RECOVERY = 0.5
TESTOSTERONE_FLOOR = 50.0
MAX_ESTROGEN_REDUCTION = 0.95
ESTROGEN_REDUCTION_RATE = 0.1
LH_FSH_FLOOR = 0.1


def _status(value: float, *, high: Optional[float] = None, low: Optional[float] = None) -> MarkerStatus:
    if high is not None and value > high:
        return "elevated"
    if low is not None and value < low:
        return "low"
    return "normal"


# Thresholds used for value-driven statuses (LH/FSH is driven by suppression instead)
STATUS_THRESHOLDS: dict[str, dict[str, float]] = {
    SYSTOLIC_BP: {"high": 130},
    DIASTOLIC_BP: {"high": 85},
    HDL: {"low": 40},
    LDL: {"high": 130},
    GLUCOSE: {"high": 100},
    TESTOSTERONE: {"high": 900},
    ESTRADIOL: {"high": 45},
    ALT: {"high": 50},
    AST: {"high": 50},
    EGFR: {"low": 60},
    HEMATOCRIT: {"high": 50},
}


def _marker(name: str, value: float, notes: str, status: Optional[MarkerStatus] = None,
            *, rounded: bool = True) -> BloodMarker:
    """Status comes from the exact value; the stored value is the rounded lab reading."""
    precision = MARKER_DEFAULTS[name][2]
    if status is None:
        status = _status(value, **STATUS_THRESHOLDS.get(name, {}))
    stored = round_half_up(value, precision) if rounded else float(value)
    return BloodMarker(marker=name, value=stored, status=status, notes=notes, precision=precision)


def baseline_blood_markers(bloodwork: Optional[BloodWork] = None) -> tuple[BloodMarker, ...]:
    """
    Week-0 panel: user-supplied labs where given, healthy defaults otherwise.
    Estradiol, LH/FSH and hematocrit always start from their defaults.
    """
    markers = []
    for name, (default, field_name, _) in MARKER_DEFAULTS.items():
        value = default
        if bloodwork is not None and field_name is not None:
            supplied = getattr(bloodwork, field_name)
            if supplied is not None:
                value = supplied
        markers.append(_marker(name, value, "Baseline value.", rounded=False))
    return tuple(markers)


def calculate_risk(base_score: float, age: float, genetic_risk: bool, notes: str = "") -> RiskScore:
    """
    Age adds half a point per year over 35, then a genetic flag multiplies
    by 1.3. The order matters and is kept: add first, multiply second.
    """
    score = base_score
    if age > 35:
        score += (age - 35) * 0.5
    if genetic_risk:
        score = min(100, score * 1.3)
    return RiskScore(score=int(min(max(0, round_half_up(score)), 100)), notes=notes)


def next_week_blood_markers(profile: AthleteProfile, hps: HpsResult,
                            previous: Sequence[BloodMarker]) -> tuple[BloodMarker, ...]:
    prev_map = markers_to_map(previous)

    def prev(name: str) -> float:
        return prev_map.get(name, MARKER_DEFAULTS[name][0])

    factors = profile.genetic_factors
    poor_lipids = has_genetic_factor(factors, "lipid_response")
    aromatizer = has_genetic_factor(factors, "aromatization")

    hep = hps.total_hepatotoxicity
    cardio = hps.total_cardiotoxicity
    supp = hps.total_hpta_suppression
    bp_reduction = hps.total_blood_pressure_reduction
    out: dict[str, BloodMarker] = {}

    # Liver: accumulating strain above the threshold, regeneration below it
    liver_rate = LIVER_STRAIN_GROWTH if hep > LIVER_STRAIN_THRESHOLD else LIVER_REGENERATION
    alt = max(LIVER_ENZYME_FLOOR, prev(ALT) * liver_rate + hep * 0.5)
    out[ALT] = _marker(ALT, alt, f"Strain from hepatotoxicity score of {hep}.")
    ast = max(LIVER_ENZYME_FLOOR, prev(AST) * liver_rate + hep * 0.4)
    out[AST] = _marker(AST, ast, "Strain from hepatotoxicity and muscle breakdown.")

    # Kidney: direct toxicity plus blood-pressure strain
    strain = hps.total_nephrotoxicity * 0.2 + cardio * 0.1
    egfr = max(EGFR_FLOOR, prev(EGFR) - strain + (EGFR_RECOVERY if strain == 0 else 0))
    out[EGFR] = _marker(EGFR, egfr, f"Filtration rate affected by renal strain score of {strain:.1f}.")

    # Cardiovascular
    systolic = prev(SYSTOLIC_BP) + cardio * 0.4 - bp_reduction * 0.5
    out[SYSTOLIC_BP] = _marker(SYSTOLIC_BP, systolic, "Influenced by cardiotoxicity and support drugs.")
    diastolic = prev(DIASTOLIC_BP) + cardio * 0.2 - bp_reduction * 0.25
    out[DIASTOLIC_BP] = _marker(DIASTOLIC_BP, diastolic, "Influenced by cardiotoxicity and support drugs.")

    hdl = prev(HDL) - cardio * 0.2
    ldl = prev(LDL) + cardio * 0.3
    if poor_lipids:
        hdl -= cardio * 0.1
        ldl += cardio * 0.15
    out[HDL] = _marker(HDL, hdl, "Suppressed by cardiotoxicity.")
    out[LDL] = _marker(LDL, ldl, "Elevated by cardiotoxicity.")

    # Hormones
    endogenous = max(TESTOSTERONE_FLOOR, prev(TESTOSTERONE) - supp * 20)
    testosterone = endogenous + hps.total_anabolic * 25
    out[TESTOSTERONE] = _marker(TESTOSTERONE, testosterone, "Exogenous sources elevate levels.")

    e2 = prev(ESTRADIOL) + hps.total_androgenic * 0.3
    if aromatizer:
        e2 *= 1.05
    # aromatase inhibition acts gradually: 10% of its nominal strength per week
    e2 *= 1 - min(hps.total_estrogen_reduction, MAX_ESTROGEN_REDUCTION) * ESTROGEN_REDUCTION_RATE
    out[ESTRADIOL] = _marker(ESTRADIOL, e2, "Aromatization from androgens.")

    lh_fsh = max(LH_FSH_FLOOR, 5 - supp * 0.5)
    out[LH_FSH] = _marker(LH_FSH, lh_fsh, f"HPTA suppression score of {supp}.",
                          status="critical" if supp > 5 else "normal")

    # Other
    glucose = prev(GLUCOSE) + hps.metabolic_adjustment_factor - 1
    out[GLUCOSE] = _marker(GLUCOSE, glucose, "Influenced by hormonal metabolic shift.")
    hematocrit = prev(HEMATOCRIT) + hps.total_androgenic * 0.08
    out[HEMATOCRIT] = _marker(HEMATOCRIT, hematocrit, "Increased by androgenic load.")

    return tuple(out[name] for name in MARKER_ORDER)


def compute_weekly_risk_scores(profile: AthleteProfile, hps: HpsResult,
                               markers: Sequence[BloodMarker]) -> RiskScoreSet:
    by_name = {m.marker: m for m in markers}
    alt = by_name[ALT].display_value if ALT in by_name else "n/a"
    egfr = by_name[EGFR].display_value if EGFR in by_name else "n/a"
    age = profile.age
    return RiskScoreSet(
        cardiovascular=calculate_risk(
            hps.total_cardiotoxicity, age,
            has_genetic_factor(profile.genetic_factors, "cardio_risk"),
            "Based on lipid impact, androgen load, and genetics."),
        hepatic=calculate_risk(
            hps.total_hepatotoxicity, age, False,
            f"Based on direct toxicity of oral compounds. ALT: {alt}"),
        renal=calculate_risk(
            hps.total_nephrotoxicity, age, False,
            f"Based on direct nephrotoxicity and BP strain. eGFR: {egfr}"),
        endocrine=calculate_risk(
            hps.total_hpta_suppression, age, False,
            "Based on severity of HPTA shutdown."),
    )


def compute_weekly_health_state(profile: AthleteProfile, hps: HpsResult,
                                previous: Sequence[BloodMarker]) -> OhsResult:
    markers = next_week_blood_markers(profile, hps, previous)
    return OhsResult(blood_markers=markers,
                     risk_scores=compute_weekly_risk_scores(profile, hps, markers))
