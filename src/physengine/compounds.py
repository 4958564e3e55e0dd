# src/physengine/compounds.py
from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from types import MappingProxyType
from typing import Iterable, Iterator, Optional

from .types import CompoundSpec


class CompoundLibrary(Mapping):
    """
    Read-only name -> CompoundSpec lookup.

    Built once and handed to the PKE/HPS stages explicitly, so tests can
    swap in a small custom table. Unknown names resolve to None via get().
    """

    def __init__(self, specs: Iterable[CompoundSpec]):
        table: dict[str, CompoundSpec] = {}
        for spec in specs:
            if spec.name in table:
                raise ValueError(f"Duplicate compound name '{spec.name}' in library.")
            table[spec.name] = spec
        self._table = MappingProxyType(table)

    def __getitem__(self, name: str) -> CompoundSpec:
        return self._table[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def get(self, name: str, default: Optional[CompoundSpec] = None) -> Optional[CompoundSpec]:
        return self._table.get(name, default)

    def by_category(self, category: str) -> tuple[CompoundSpec, ...]:
        return tuple(s for s in self._table.values() if s.category == category)


# Name, category, half-life (days), anabolic, androgenic, hepato, cardio, HPTA suppression, nephro
DEFAULT_COMPOUNDS: tuple[CompoundSpec, ...] = (
    CompoundSpec("None", "none", 0),

    # Base hormones
    CompoundSpec("Testosterone Enanthate", "base_hormone", 7, 8, 8, 1, 5, 9, 2),
    CompoundSpec("Testosterone Cypionate", "base_hormone", 8, 8, 8, 1, 5, 9, 2),
    CompoundSpec("Testosterone Propionate", "base_hormone", 2, 8, 8, 1, 5, 9, 2),
    CompoundSpec("Trenbolone Acetate", "base_hormone", 3, 10, 10, 3, 9, 10, 8),
    CompoundSpec("Trenbolone Enanthate", "base_hormone", 7, 10, 10, 3, 9, 10, 8),
    CompoundSpec("Nandrolone Decanoate", "base_hormone", 14, 9, 3, 1, 4, 10, 3),
    CompoundSpec("Oxandrolone (Anavar)", "base_hormone", 0.5, 5, 2, 5, 3, 3, 2),
    CompoundSpec("Metandienone (Dianabol)", "base_hormone", 0.25, 7, 5, 8, 6, 8, 4),
    CompoundSpec("Drostanolone (Masteron)", "base_hormone", 2.5, 6, 4, 2, 6, 4, 3),
    CompoundSpec("Stanozolol (Winstrol)", "base_hormone", 0.4, 6, 3, 9, 9, 5, 6),

    # Selective modulators
    CompoundSpec("Ostarine (MK-2866)", "selective_modulator", 1, 4, 1, 3, 2, 4, 1),
    CompoundSpec("Ligandrol (LGD-4033)", "selective_modulator", 1.2, 6, 2, 4, 3, 7, 2),
    CompoundSpec("Testolone (RAD-140)", "selective_modulator", 2.5, 7, 3, 4, 4, 8, 3),

    # Peptides
    CompoundSpec("BPC-157", "peptide", 0.2, 1, 0, 0, 0, 0, 0),
    CompoundSpec("TB-500", "peptide", 2, 1, 0, 0, 0, 0, 0),
    CompoundSpec("Ipamorelin", "peptide", 0.1, 2, 0, 0, 1, 1, 0),
    CompoundSpec("CJC-1295 (with DAC)", "peptide", 8, 3, 0, 0, 2, 2, 1),

    # Hormones
    CompoundSpec("Growth Hormone (GH)", "hormone", 0.2, 5, 0, 1, 3, 2, 2),
    CompoundSpec("Insulin (Humalog)", "hormone", 0.1, 9, 0, 1, 2, 1, 1),

    # Anti-estrogens (post-cycle)
    CompoundSpec("Clomiphene (Clomid)", "anti_estrogen", 5, 0, 0, 2, 1, 0, 1,
                 hpta_stimulation=8, estrogen_blockade=5),
    CompoundSpec("Tamoxifen (Nolvadex)", "anti_estrogen", 7, 0, 0, 2, 0, 0, 1,
                 hpta_stimulation=7, estrogen_blockade=8),

    # On-cycle support
    CompoundSpec("Anastrozole (Arimidex)", "support", 2, 0, 0, 1, 2, 0, 0,
                 estrogen_reduction=0.5),
    CompoundSpec("Exemestane (Aromasin)", "support", 1, 0, 0, 1, 1, 0, 0,
                 estrogen_reduction=0.65),
    CompoundSpec("Telmisartan", "support", 1, 0, 0, 0, 0, 0, 0,
                 blood_pressure_reduction=10),
)


@lru_cache(maxsize=1)
def default_library() -> CompoundLibrary:
    """The built-in knowledge base, constructed once per process."""
    return CompoundLibrary(DEFAULT_COMPOUNDS)
