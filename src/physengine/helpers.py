import math
from collections import defaultdict
from typing import Iterable, Mapping, Optional, Sequence

from .types import BloodMarker, DoseEntry

PLACEHOLDER_COMPOUNDS = frozenset({"", "none"})


def round_half_up(x: float, digits: int = 0) -> float:
    """Round with .5 going up (2.5 -> 3), unlike Python's banker's rounding."""
    scale = 10.0 ** digits
    return math.floor(x * scale + 0.5) / scale


def is_placeholder(compound: Optional[str]) -> bool:
    """'None' / empty compound names mean "no entry" and never count."""
    return compound is None or compound.strip().lower() in PLACEHOLDER_COMPOUNDS


def normalize_key(value: str, namespace: str, aliases: Mapping[str, str] | None = None) -> str:
    """
    Reduce 'goals.lean_gain', 'lean_gain' and 'Lean Muscle Gain' style keys
    to the bare key ('lean_gain'). Labels are looked up in `aliases`.
    """
    raw = value.strip()
    if aliases and raw in aliases:
        return aliases[raw]
    prefix = f"{namespace}."
    if raw.startswith(prefix):
        raw = raw[len(prefix):]
    return raw.lower()


def has_key(values: Iterable[str], key: str, namespace: str,
            aliases: Mapping[str, str] | None = None) -> bool:
    return any(normalize_key(v, namespace, aliases) == key for v in values)


def group_doses_by_compound(doses: Iterable[DoseEntry]) -> dict[str, list[DoseEntry]]:
    """
    Group non-placeholder dose entries by compound name, keeping input order.
    """
    buckets: dict[str, list[DoseEntry]] = defaultdict(list)
    for d in doses:
        if not is_placeholder(d.compound):
            buckets[d.compound].append(d)
    return dict(buckets)


def markers_to_map(markers: Sequence[BloodMarker]) -> dict[str, float]:
    return {m.marker: float(m.value) for m in markers}


# Labels older bundles store instead of 'genetics.*' keys
GENETIC_FACTOR_LABELS: dict[str, str] = {
    "Cardiovascular Disease Risk": "cardio_risk",
    "High Aromatization Tendency": "aromatization",
    "Androgenic Alopecia": "alopecia",
    "Poor Lipid Response": "lipid_response",
}


def has_genetic_factor(factors: Iterable[str], key: str) -> bool:
    return has_key(factors, key, "genetics", GENETIC_FACTOR_LABELS)
