"""Lab-unit and body-weight conversions for data entering the engine.

The engine works in conventional units (testosterone in ng/dL, glucose in
mg/dL, mass in kg). Lab reports often come in SI units instead.
"""
from __future__ import annotations

from dataclasses import fields
from typing import Literal, Mapping, Optional

from .types import BloodWork

TESTOSTERONE_NGDL_PER_NMOLL = 28.84
GLUCOSE_MGDL_PER_MMOLL = 18.018
LB_PER_KG = 2.20462

LabUnit = Literal["ng/dL", "nmol/L", "mg/dL", "mmol/L"]


def testosterone_to_ng_dl(value: float, unit: LabUnit = "ng/dL") -> float:
    if unit == "ng/dL":
        return value
    if unit == "nmol/L":
        return value * TESTOSTERONE_NGDL_PER_NMOLL
    raise ValueError(f"Unsupported testosterone unit {unit!r}.")


def testosterone_from_ng_dl(value: float, unit: LabUnit = "ng/dL") -> float:
    if unit == "ng/dL":
        return value
    if unit == "nmol/L":
        return value / TESTOSTERONE_NGDL_PER_NMOLL
    raise ValueError(f"Unsupported testosterone unit {unit!r}.")


def glucose_to_mg_dl(value: float, unit: LabUnit = "mg/dL") -> float:
    if unit == "mg/dL":
        return value
    if unit == "mmol/L":
        return value * GLUCOSE_MGDL_PER_MMOLL
    raise ValueError(f"Unsupported glucose unit {unit!r}.")


def glucose_from_mg_dl(value: float, unit: LabUnit = "mg/dL") -> float:
    if unit == "mg/dL":
        return value
    if unit == "mmol/L":
        return value / GLUCOSE_MGDL_PER_MMOLL
    raise ValueError(f"Unsupported glucose unit {unit!r}.")


def kg_to_lb(kg: float) -> float:
    return kg * LB_PER_KG


def lb_to_kg(lb: float) -> float:
    return lb / LB_PER_KG


def bloodwork_from_units(values: Mapping[str, Optional[float]],
                         units: Mapping[str, LabUnit] | None = None) -> BloodWork:
    """
    Build a BloodWork from a lab report whose testosterone and/or glucose
    may be in SI units, e.g. units={"total_testosterone": "nmol/L"}.
    Unknown keys are ignored.
    """
    units = units or {}
    known = {f.name for f in fields(BloodWork)}
    data = {k: v for k, v in values.items() if k in known and v is not None}
    if "total_testosterone" in data:
        data["total_testosterone"] = testosterone_to_ng_dl(
            float(data["total_testosterone"]), units.get("total_testosterone", "ng/dL"))
    if "glucose" in data:
        data["glucose"] = glucose_to_mg_dl(float(data["glucose"]), units.get("glucose", "mg/dL"))
    return BloodWork(**data)
