from __future__ import annotations

import dataclasses
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from .sequences import UNITS, Unit

ENV_PREFIX = "DLDIST_"


@dataclass(frozen=True)
class EngineOptions:
    unit: Unit = "char"
    encoding: str = "utf-8"
    max_cells: Optional[int] = None
    pool_size: int = 4

    def __post_init__(self) -> None:
        if self.unit not in UNITS:
            raise ValueError(f"unit must be one of {', '.join(UNITS)}; got {self.unit!r}")
        if self.max_cells is not None and self.max_cells < 1:
            raise ValueError("max_cells must be a positive integer")
        if self.pool_size < 1:
            raise ValueError("pool_size must be >= 1")


def _load_file(path: str | None) -> dict[str, Any]:
    if not path:
        return {}
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)
    if p.suffix.lower() in {".yml", ".yaml"}:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    elif p.suffix.lower() == ".json":
        data = json.loads(p.read_text(encoding="utf-8"))
    else:
        raise ValueError("Config must be .yml/.yaml or .json")
    if not isinstance(data, dict):
        raise ValueError("Config must be a mapping of option -> value")
    return data


def _from_env() -> dict[str, Any]:
    out: dict[str, Any] = {}
    for field in dataclasses.fields(EngineOptions):
        raw = os.environ.get(ENV_PREFIX + field.name.upper(), "").strip()
        if raw:
            out[field.name] = raw
    return out


def _coerce(name: str, value: Any) -> Any:
    if name in {"max_cells", "pool_size"}:
        if value is None or (isinstance(value, str) and value.lower() in {"", "none"}):
            if name == "max_cells":
                return None
            raise ValueError(f"{name} must be an integer")
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"{name} must be an integer; got {value!r}") from e
    return str(value)


def load_options(path: str | None = None, **overrides: Any) -> EngineOptions:
    """
    Resolve options from (lowest to highest precedence) defaults, a YAML/JSON
    file, `DLDIST_*` environment variables, and keyword overrides (`None`
    overrides are ignored).
    """
    known = {f.name for f in dataclasses.fields(EngineOptions)}
    merged: dict[str, Any] = {}
    merged.update(_load_file(path))
    merged.update(_from_env())
    merged.update({k: v for k, v in overrides.items() if v is not None})

    unknown = set(merged) - known
    if unknown:
        raise ValueError(f"Unknown option(s): {', '.join(sorted(unknown))}")
    return EngineOptions(**{k: _coerce(k, v) for k, v in merged.items()})
