"""Runtime settings for the simulation engine."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

LOGGER = logging.getLogger(__name__)


def _float_env(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        LOGGER.warning("Ignoring non-numeric %s=%r; using %s", key, raw, default)
        return default


@dataclass(slots=True, frozen=True)
class EngineSettings:
    """Tunables shared by the driver loop and the validator.

    ``id_prefix``
        Prefix of generated simulation identifiers; the validator warns when a
        result's identifier does not carry it.
    ``concentration_floor``
        Active concentrations at or below this value are pruned after decay.
    ``muscle_gain_limit_kg`` / ``min_fat_mass_kg``
        Plausibility bounds used by the validator.
    """

    id_prefix: str = "sim-"
    concentration_floor: float = 0.05
    muscle_gain_limit_kg: float = 12.0
    min_fat_mass_kg: float = 3.0
    log_level: str = "WARNING"

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        prefix: str = "PHYSENGINE_",
    ) -> "EngineSettings":
        """Read ``PHYSENGINE_*`` variables, falling back to defaults per key."""

        env = os.environ if env is None else env
        defaults = cls()
        return cls(
            id_prefix=env.get(f"{prefix}ID_PREFIX", defaults.id_prefix),
            concentration_floor=_float_env(env, f"{prefix}CONCENTRATION_FLOOR", defaults.concentration_floor),
            muscle_gain_limit_kg=_float_env(env, f"{prefix}MUSCLE_GAIN_LIMIT_KG", defaults.muscle_gain_limit_kg),
            min_fat_mass_kg=_float_env(env, f"{prefix}MIN_FAT_MASS_KG", defaults.min_fat_mass_kg),
            log_level=env.get(f"{prefix}LOG_LEVEL", defaults.log_level).upper(),
        )


def configure_logging(settings: EngineSettings | None = None) -> None:
    """Apply the configured level to the ``physengine`` logger hierarchy."""

    settings = settings or EngineSettings.from_env()
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        LOGGER.warning("Unknown log level %r; keeping WARNING", settings.log_level)
        level = logging.WARNING
    logging.getLogger("physengine").setLevel(level)
