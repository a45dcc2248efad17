import json
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Tuple, Union

from .colormap import ColormapSpec
from .errors import Err, PumpkinError


@dataclass(frozen=True)
class PumpkinParams:
    """Parameters describing a pumpkin and how its script is generated."""

    radius: float = 1
    height: float = 1
    resolution: int = 200  # density of the mesh
    num_bumps: int = 10  # number of ridges
    bump_depth: float = 0.1
    # Added to bump_depth for primary ridges, 0 disables secondary ridges
    secondary_bump_depth: float = 0.02
    dimple_depth: float = 0.2  # depth of the dimple under the stem

    speckle_size: float = 0
    speckle_seed: int = 0

    colormap: ColormapSpec = ("#f06000", "#ff7518")

    stem_style: str = "complex"
    stem_radius: Tuple[float, float] = (0.06, 0.1)
    stem_dims: Tuple[float, float] = (0.4, 0.5)
    stem_color: Any = "#008000"

    # Fold values into the code instead of declaring variables
    constant_folding: bool = False

    def normalized(self) -> "PumpkinParams":
        """Return params with the stem style a bumpless pumpkin can support."""
        # The complex stem repeats once per ridge, so it needs at least one
        if self.num_bumps == 0 and self.stem_style != "simple":
            return replace(self, stem_style="simple")
        return self

    def with_overrides(self, **overrides: Any) -> "PumpkinParams":
        if not overrides:
            return self
        return PumpkinParams.from_dict({**self.to_dict(), **overrides})

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PumpkinParams":
        """Build params from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise PumpkinError(Err.INVALID_CONFIG, {"unknown_parameters": unknown})
        values = dict(data)
        for key in ("stem_radius", "stem_dims"):
            if key in values:
                values[key] = tuple(values[key])
        if isinstance(values.get("colormap"), list):
            values["colormap"] = tuple(values["colormap"])
        return cls(**values)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "PumpkinParams":
        """Load params from a JSON file holding a single parameter object."""
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise PumpkinError(Err.INVALID_CONFIG, {"path": str(path), "reason": "malformed JSON"}, e)
        if not isinstance(data, dict):
            raise PumpkinError(Err.INVALID_CONFIG, {"path": str(path), "reason": "expected a JSON object"})
        return cls.from_dict(data)
