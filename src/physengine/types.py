# src/physengine/types.py
from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Literal, Mapping, Optional, Sequence, Union

# All body masses are in KILOGRAMS and all time in WEEKS, except half-lives (days).
Category = Literal[
    "base_hormone", "peptide", "hormone", "anti_estrogen",
    "support", "selective_modulator", "none",
]
Frequency = Literal["daily", "eod", "e3d", "weekly", "bi-weekly"]
MarkerStatus = Literal["normal", "elevated", "low", "critical"]


@dataclass(frozen=True)
class CompoundSpec:
    """
    One row of the compound knowledge base.

    name            : unique key used by dose entries (e.g., "Testosterone Enanthate")
    category        : drives the reference dosage used to normalise concentrations
    half_life_days  : elimination half-life; 0 means "gone by next week"
    anabolic ... nephrotoxicity : trait scores on an informal 0-10 scale
    hpta_stimulation, estrogen_blockade, estrogen_reduction,
    blood_pressure_reduction    : optional modifiers, None when the compound has none
    """
    name: str
    category: Category
    half_life_days: float
    anabolic: float = 0.0
    androgenic: float = 0.0
    hepatotoxicity: float = 0.0
    cardiotoxicity: float = 0.0
    hpta_suppression: float = 0.0
    nephrotoxicity: float = 0.0
    hpta_stimulation: Optional[float] = None
    estrogen_blockade: Optional[float] = None
    estrogen_reduction: Optional[float] = None
    blood_pressure_reduction: Optional[float] = None

    def __post_init__(self) -> None:
        if self.half_life_days < 0:
            raise ValueError(f"half_life_days must be >= 0 (got {self.half_life_days}).")
        for trait in ("anabolic", "androgenic", "hepatotoxicity", "cardiotoxicity",
                      "hpta_suppression", "nephrotoxicity"):
            value = getattr(self, trait)
            if value < 0:
                raise ValueError(f"{self.name}: {trait} must be >= 0 (got {value}).")


@dataclass(frozen=True)
class DoseEntry:
    """
    A declared intent to take `dosage` mg of `compound` at `frequency`.

    duration_weeks is only meaningful for post-cycle entries, where the
    longest one sets how long the post-cycle phase lasts.
    """
    compound: str
    dosage: float
    frequency: Frequency = "weekly"
    duration_weeks: Optional[int] = None


@dataclass(frozen=True)
class Phase:
    """An ordered, time-boxed block of the main regimen."""
    name: str
    duration_weeks: int
    doses: Sequence[DoseEntry] = ()


@dataclass(frozen=True)
class BloodWork:
    """Optional user-supplied baseline labs, in conventional (US) units."""
    systolic_bp: Optional[float] = None
    diastolic_bp: Optional[float] = None
    hdl: Optional[float] = None
    ldl: Optional[float] = None
    glucose: Optional[float] = None             # mg/dL
    total_testosterone: Optional[float] = None  # ng/dL
    alt: Optional[float] = None
    ast: Optional[float] = None
    egfr: Optional[float] = None


@dataclass(frozen=True)
class AthleteProfile:
    age: int
    weight_kg: float
    body_fat_pct: float
    goal: str = "goals.lean_gain"
    gender: Literal["male", "female"] = "male"
    experience_level: Literal["beginner", "intermediate", "expert"] = "intermediate"
    genetic_factors: Sequence[str] = ()
    medical_history: str = ""
    baseline_bloodwork: Optional[BloodWork] = None


@dataclass(frozen=True)
class NutritionPlan:
    calories: float
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    supplements: Sequence[str] = ()


@dataclass(frozen=True)
class SimulationInput:
    """
    The complete input bundle for one run.

    phases  : the main regimen timeline, in order
    support : taken alongside every main phase, ignored post-cycle
    pct     : the post-cycle list, active once the main timeline ends
    """
    profile: AthleteProfile
    nutrition: NutritionPlan
    phases: Sequence[Phase] = ()
    support: Sequence[DoseEntry] = ()
    pct: Sequence[DoseEntry] = ()


# --------------------------
# Per-week sub-model outputs
# --------------------------
@dataclass(frozen=True)
class HpsResult:
    total_anabolic: int = 0
    total_androgenic: int = 0
    total_hepatotoxicity: int = 0
    total_cardiotoxicity: int = 0
    total_hpta_suppression: int = 0
    total_nephrotoxicity: int = 0
    total_estrogen_reduction: float = 0.0
    total_blood_pressure_reduction: float = 0.0
    metabolic_adjustment_factor: float = 1.0


@dataclass(frozen=True)
class MesResult:
    tdee: float
    calorie_balance: float  # per day, kcal


@dataclass(frozen=True)
class AmsWeeklyResult:
    muscle_change_kg: float
    fat_change_kg: float


@dataclass(frozen=True)
class BloodMarker:
    """
    One lab value. Weekly values are stored as a lab report shows them,
    rounded to `precision` decimals, and that stored value is what the next
    week reads. Baseline values keep whatever the athlete entered.
    """
    marker: str
    value: float
    status: MarkerStatus = "normal"
    notes: str = ""
    precision: int = 0

    @property
    def display_value(self) -> str:
        scale = 10 ** self.precision
        return f"{math.floor(self.value * scale + 0.5) / scale:.{self.precision}f}"


@dataclass(frozen=True)
class RiskScore:
    score: int
    notes: str = ""


@dataclass(frozen=True)
class RiskScoreSet:
    cardiovascular: RiskScore
    hepatic: RiskScore
    renal: RiskScore
    endocrine: RiskScore

    def highest(self) -> int:
        return max(self.cardiovascular.score, self.hepatic.score,
                   self.endocrine.score, self.renal.score)


@dataclass(frozen=True)
class OhsResult:
    blood_markers: Sequence[BloodMarker]
    risk_scores: RiskScoreSet


# --------------------------
# Time series entries
# --------------------------
@dataclass(frozen=True)
class PhysiquePoint:
    week: int
    muscle_mass_kg: float
    fat_mass_kg: float


@dataclass(frozen=True)
class BloodMarkerWeek:
    week: int
    markers: Sequence[BloodMarker]


@dataclass(frozen=True)
class HormonalWeek:
    week: int
    state: HpsResult


# --------------------------
# Translatable text
# --------------------------
@dataclass(frozen=True)
class PlainText:
    text: str


@dataclass(frozen=True)
class KeyedText:
    """A message key plus interpolation values; values may nest other KeyedText."""
    key: str
    values: Mapping[str, Any] = field(default_factory=dict)


TranslatableText = Union[PlainText, KeyedText]


@dataclass(frozen=True)
class SynthesisResult:
    summary: TranslatableText
    inferred_goal: str
    warnings: Sequence[TranslatableText]
    recommendations: Sequence[TranslatableText]
    long_term_outlook: TranslatableText


@dataclass(frozen=True)
class SimulationResult:
    """
    Everything one run produces. Index 0 of every history is the baseline,
    index N is the state after N weeks.
    """
    id: str
    summary: TranslatableText
    inferred_goal: str
    physique_projection: Sequence[PhysiquePoint]
    blood_marker_history: Sequence[BloodMarkerWeek]
    hormonal_history: Sequence[HormonalWeek]
    risk_scores: RiskScoreSet
    warnings: Sequence[TranslatableText]
    recommendations: Sequence[TranslatableText]
    long_term_outlook: TranslatableText
    inputs: SimulationInput
    ai_analysis: Optional[TranslatableText] = None

    def with_analysis(self, analysis: TranslatableText) -> "SimulationResult":
        """Return a copy carrying the narrative produced by an external service."""
        return replace(self, ai_analysis=analysis)


@dataclass(frozen=True)
class ValidationReport:
    is_valid: bool
    errors: Sequence[str] = ()
    warnings: Sequence[str] = ()
    suggestions: Sequence[str] = ()
