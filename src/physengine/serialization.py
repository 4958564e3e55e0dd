"""Plain-dict / JSON adapters around the engine's dataclasses.

Input bundles are validated by the pydantic schemas in ``schemas.py``.
Results go out as JSON-ready dicts, with translatable text tagged as either
a plain string or a ``{"key": ..., "values": ...}`` object.
"""

from __future__ import annotations

import json
import logging
from dataclasses import fields, is_dataclass
from pathlib import Path
from typing import Any, Mapping

from pydantic import ValidationError

from .schemas import BundleSchema
from .types import BloodMarker, KeyedText, PlainText, SimulationInput, SimulationResult

LOGGER = logging.getLogger(__name__)


class BundleError(ValueError):
    """Raised when a plain-dict bundle has the wrong shape or types."""


def _describe(exc: ValidationError) -> str:
    """One line per problem, e.g. 'protocolPhases[0].durationWeeks: Input should be ...'."""
    lines = []
    for err in exc.errors():
        where = ""
        for part in err["loc"]:
            if isinstance(part, int):
                where += f"[{part}]"
            elif where:
                where += f".{part}"
            else:
                where = str(part)
        lines.append(f"{where or 'bundle'}: {err['msg']}")
    return "; ".join(lines)


def bundle_from_dict(data: Any) -> SimulationInput:
    """Validate a plain-dict input bundle and convert it to a SimulationInput."""
    try:
        bundle = BundleSchema.model_validate(data).to_domain()
    except ValidationError as exc:
        raise BundleError(_describe(exc)) from exc
    except ValueError as exc:
        # unsupported lab units surface while converting the baseline labs
        raise BundleError(str(exc)) from exc
    LOGGER.debug("Parsed bundle: %d phase(s), %d support, %d post-cycle entries",
                 len(bundle.phases), len(bundle.support), len(bundle.pct))
    return bundle


def load_bundle(path: str | Path) -> SimulationInput:
    """Read a JSON input bundle from disk."""
    with open(path, "r", encoding="utf-8") as fh:
        try:
            data = json.load(fh)
        except json.JSONDecodeError as exc:
            raise BundleError(f"{path} is not valid JSON: {exc}") from exc
    return bundle_from_dict(data)


def to_plain(obj: Any) -> Any:
    """Recursively convert engine dataclasses into JSON-ready values."""
    if isinstance(obj, PlainText):
        return obj.text
    if isinstance(obj, KeyedText):
        out: dict[str, Any] = {"key": obj.key}
        if obj.values:
            out["values"] = {k: to_plain(v) for k, v in obj.values.items()}
        return out
    if isinstance(obj, BloodMarker):
        return {"marker": obj.marker, "value": obj.value, "display": obj.display_value,
                "status": obj.status, "notes": obj.notes}
    if is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: to_plain(getattr(obj, f.name)) for f in fields(obj)}
    if isinstance(obj, Mapping):
        return {str(k): to_plain(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_plain(v) for v in obj]
    return obj


def result_to_dict(result: SimulationResult) -> dict[str, Any]:
    return to_plain(result)


def result_to_json(result: SimulationResult, **kwargs: Any) -> str:
    return json.dumps(result_to_dict(result), **kwargs)
