# src/physengine/metrics.py
import numpy as np
from typing import Sequence, Tuple

from .types import PhysiquePoint, SimulationResult


def physique_arrays(points: Sequence[PhysiquePoint]) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return (weeks, muscle_kg, fat_kg) arrays for a physique projection."""
    weeks = np.asarray([p.week for p in points], dtype=int)
    muscle = np.asarray([p.muscle_mass_kg for p in points], dtype=float)
    fat = np.asarray([p.fat_mass_kg for p in points], dtype=float)
    return weeks, muscle, fat


def total_muscle_change(points: Sequence[PhysiquePoint]) -> float:
    """Final minus starting muscle mass (kg). 0.0 for an empty projection."""
    if not points:
        return 0.0
    _, muscle, _ = physique_arrays(points)
    return float(muscle[-1] - muscle[0])


def total_fat_change(points: Sequence[PhysiquePoint]) -> float:
    """Final minus starting fat mass (kg); negative means fat was lost."""
    if not points:
        return 0.0
    _, _, fat = physique_arrays(points)
    return float(fat[-1] - fat[0])


def marker_series(result: SimulationResult, marker: str) -> np.ndarray:
    """
    One marker's value for every week of the history (index = week).
    Weeks where the marker is missing come back as NaN.
    """
    values = []
    for entry in result.blood_marker_history:
        found = next((m.value for m in entry.markers if m.marker == marker), np.nan)
        values.append(found)
    return np.asarray(values, dtype=float)


def hormonal_series(result: SimulationResult, field: str) -> np.ndarray:
    """One HPS aggregate (e.g. 'total_hpta_suppression') per week."""
    return np.asarray([getattr(h.state, field) for h in result.hormonal_history], dtype=float)


def peak_week(values: np.ndarray) -> int:
    """Index of the first maximum (ignores NaN)."""
    return int(np.nanargmax(values))


def weeks_above(values: np.ndarray, threshold: float) -> int:
    """How many weeks a series spends strictly above `threshold`."""
    return int(np.count_nonzero(values > threshold))
