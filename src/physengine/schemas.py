"""Pydantic schemas for plain-dict input bundles.

Bundles arrive in the camelCase shape used by the browser front end and the
narrative service (``profile.bfp``, ``protocolPhases[].compounds``,
``durationWeeks`` ...). Field names are accepted as well. Each schema converts
to the engine's frozen dataclasses with ``to_domain``.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from .types import AthleteProfile, BloodWork, DoseEntry, NutritionPlan, Phase, SimulationInput
from .units import bloodwork_from_units, lb_to_kg

# Lab keys whose camelCase spelling is not a plain lowercase of the field name
_BLOODWORK_KEYS = {
    "systolicBP": "systolic_bp",
    "diastolicBP": "diastolic_bp",
    "totalTestosterone": "total_testosterone",
}


def _not_bool(value: Any) -> Any:
    # bool is an int subclass and would otherwise pass as 0 or 1
    if isinstance(value, bool):
        raise ValueError("must be a number, not a boolean")
    return value


Number = Annotated[float, BeforeValidator(_not_bool)]
Count = Annotated[int, BeforeValidator(_not_bool)]
Weeks = Annotated[int, BeforeValidator(_not_bool), Field(ge=0)]


class BundleModel(BaseModel):
    """Shared config: camelCase aliases, field names also accepted, extras ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class DoseSchema(BundleModel):
    compound: str = "None"
    dosage: Number = Field(default=0.0, ge=0.0)
    frequency: str = "weekly"
    duration_weeks: Optional[Weeks] = Field(default=None, alias="durationWeeks")

    def to_domain(self) -> DoseEntry:
        return DoseEntry(compound=self.compound, dosage=self.dosage,
                         frequency=self.frequency, duration_weeks=self.duration_weeks)


class PhaseSchema(BundleModel):
    name: str = ""
    duration_weeks: Weeks = Field(default=0, alias="durationWeeks")
    doses: List[DoseSchema] = Field(default_factory=list, alias="compounds")

    def to_domain(self) -> Phase:
        return Phase(name=self.name, duration_weeks=self.duration_weeks,
                     doses=tuple(d.to_domain() for d in self.doses))


class BloodWorkSchema(BundleModel):
    systolic_bp: Optional[Number] = Field(default=None, alias="systolicBP")
    diastolic_bp: Optional[Number] = Field(default=None, alias="diastolicBP")
    hdl: Optional[Number] = None
    ldl: Optional[Number] = None
    glucose: Optional[Number] = None
    total_testosterone: Optional[Number] = Field(default=None, alias="totalTestosterone")
    alt: Optional[Number] = None
    ast: Optional[Number] = None
    egfr: Optional[Number] = None

    def to_domain(self, units: Optional[Dict[str, str]] = None) -> BloodWork:
        """Raises ValueError for an unsupported lab unit."""
        unit_map = {_BLOODWORK_KEYS.get(k, k): v for k, v in (units or {}).items()}
        return bloodwork_from_units(self.model_dump(), unit_map)


class ProfileSchema(BundleModel):
    age: Count = Field(ge=0)
    weight_kg: Number = Field(gt=0, alias="weight")
    weight_unit: str = Field(default="kg", alias="weightUnit")
    body_fat_pct: Number = Field(ge=0, le=100, alias="bfp")
    goal: str = "goals.lean_gain"
    gender: str = "male"
    experience_level: str = Field(default="intermediate", alias="experienceLevel")
    genetic_factors: List[str] = Field(default_factory=list, alias="geneticFactors")
    medical_history: str = Field(default="", alias="medicalHistory")
    baseline_bloodwork: Optional[BloodWorkSchema] = Field(default=None, alias="baselineBloodWork")
    lab_units: Dict[str, str] = Field(default_factory=dict, alias="labUnits")

    def to_domain(self) -> AthleteProfile:
        weight = self.weight_kg
        if self.weight_unit.lower() in ("lb", "lbs"):
            weight = lb_to_kg(weight)
        bloodwork = None
        if self.baseline_bloodwork is not None:
            bloodwork = self.baseline_bloodwork.to_domain(self.lab_units)
        return AthleteProfile(
            age=self.age,
            weight_kg=weight,
            body_fat_pct=self.body_fat_pct,
            goal=self.goal,
            gender=self.gender,
            experience_level=self.experience_level,
            genetic_factors=tuple(self.genetic_factors),
            medical_history=self.medical_history,
            baseline_bloodwork=bloodwork,
        )


class NutritionSchema(BundleModel):
    calories: Number
    protein_g: Number = Field(default=0.0, alias="protein")
    carbs_g: Number = Field(default=0.0, alias="carbs")
    fat_g: Number = Field(default=0.0, alias="fat")
    supplements: List[str] = Field(default_factory=list)

    def to_domain(self) -> NutritionPlan:
        return NutritionPlan(calories=self.calories, protein_g=self.protein_g, carbs_g=self.carbs_g,
                             fat_g=self.fat_g, supplements=tuple(self.supplements))


class BundleSchema(BundleModel):
    """
    A complete input bundle. Compound names are not checked against the
    knowledge base: unknown compounds simply have no effect in the engine.
    """

    profile: ProfileSchema
    nutrition: NutritionSchema
    phases: List[PhaseSchema] = Field(default_factory=list, alias="protocolPhases")
    support: List[DoseSchema] = Field(default_factory=list)
    pct: List[DoseSchema] = Field(default_factory=list)

    def to_domain(self) -> SimulationInput:
        return SimulationInput(
            profile=self.profile.to_domain(),
            nutrition=self.nutrition.to_domain(),
            phases=tuple(p.to_domain() for p in self.phases),
            support=tuple(d.to_domain() for d in self.support),
            pct=tuple(d.to_domain() for d in self.pct),
        )
