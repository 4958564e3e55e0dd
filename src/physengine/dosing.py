# src/physengine/dosing.py
from __future__ import annotations

from typing import Optional, Sequence

from .types import DoseEntry, Frequency, Phase

# Doses per week for each declared frequency. 'e3d' is 2.33, not 7/3.
DOSES_PER_WEEK: dict[str, float] = {
    "daily": 7.0,
    "eod": 3.5,
    "e3d": 2.33,
    "weekly": 1.0,
    "bi-weekly": 0.5,
}


def doses_per_week(frequency: str) -> float:
    """Unknown frequencies count as once a week."""
    return DOSES_PER_WEEK.get(frequency, 1.0)


def dose_entry(compound: str, dosage: float, frequency: Frequency = "weekly",
               *, duration_weeks: Optional[int] = None) -> DoseEntry:
    """
    Build a validated DoseEntry.
    Examples:
      - 250 mg Testosterone Enanthate weekly
      - 20 mg Tamoxifen daily for 4 weeks (duration_weeks=4, post-cycle only)
    """
    _validate_non_negative("dosage", dosage)
    if frequency not in DOSES_PER_WEEK:
        raise ValueError(f"frequency must be one of {sorted(DOSES_PER_WEEK)} (got {frequency!r}).")
    if duration_weeks is not None:
        _validate_non_negative_int("duration_weeks", duration_weeks)
    return DoseEntry(compound=compound, dosage=float(dosage), frequency=frequency,
                     duration_weeks=duration_weeks)


def make_phase(name: str, duration_weeks: int, *doses: DoseEntry) -> Phase:
    """
    A named block of the main regimen, e.g. make_phase("Blast", 12, dose_entry(...)).
    A zero-week phase is allowed and simply never becomes active.
    """
    _validate_non_negative_int("duration_weeks", duration_weeks)
    return Phase(name=name, duration_weeks=duration_weeks, doses=tuple(doses))


def cycle_duration(phases: Sequence[Phase]) -> int:
    """Total length of the main regimen in weeks."""
    return sum(int(p.duration_weeks or 0) for p in phases)


def pct_duration(pct: Sequence[DoseEntry]) -> int:
    """The post-cycle phase lasts as long as its longest entry."""
    return max((int(d.duration_weeks or 0) for d in pct), default=0)


def total_weeks(phases: Sequence[Phase], pct: Sequence[DoseEntry]) -> int:
    return cycle_duration(phases) + pct_duration(pct)


def is_post_cycle(week: int, phases: Sequence[Phase]) -> bool:
    return week > cycle_duration(phases)


def phase_for_week(week: int, phases: Sequence[Phase]) -> Optional[Phase]:
    """
    Return the phase covering `week` (1-based), walking cumulative durations.
    None when the week lies outside the main regimen.
    """
    cumulative = 0
    for p in phases:
        cumulative += int(p.duration_weeks or 0)
        if week <= cumulative:
            return p
    return None


def active_doses(week: int, phases: Sequence[Phase], support: Sequence[DoseEntry],
                 pct: Sequence[DoseEntry]) -> list[DoseEntry]:
    """
    The dose list in force for `week`: the current phase plus support while
    on cycle, only the post-cycle list afterwards.
    """
    if is_post_cycle(week, phases):
        return list(pct)
    current = phase_for_week(week, phases)
    if current is None:
        return []
    return [*current.doses, *support]


# --------------------------
# Small input validators
# --------------------------
def _validate_non_negative(name: str, x: float) -> None:
    if not (x >= 0):
        raise ValueError(f"{name} must be >= 0 (got {x}).")

def _validate_non_negative_int(name: str, x: int) -> None:
    if not (isinstance(x, int) and x >= 0):
        raise ValueError(f"{name} must be a non-negative integer (got {x}).")
