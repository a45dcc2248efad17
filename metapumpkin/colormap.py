"""
Colormap handling for generated scripts.

A colormap is given either as the name of a matplotlib palette or as a pair
of colors that are linearly interpolated. Both forms normalize to two script
fragments: one computing a concrete ``size x 3`` table into ``cmap`` and one
applying the colormap to a surface. Named palettes can be applied directly by
name, so the table fragment only needs to run when a caller wants the values.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Sequence, Union

import matplotlib
from jinja2 import Environment, StrictUndefined
from matplotlib.colors import to_rgb

from .errors import Err, PumpkinError
from .literals import to_literal

logger = logging.getLogger(__name__)

ColormapSpec = Union[str, Sequence[Any]]

_JINJA = Environment(undefined=StrictUndefined, trim_blocks=True, lstrip_blocks=True)

_NAMED_VALUES = _JINJA.from_string(
    "from matplotlib import colormaps\n"
    "cmap = colormaps[{{ name }}].resampled({{ size }})(np.arange({{ size }}))[:, :3]"
)

_NAMED_APPLY = _JINJA.from_string(
    "from matplotlib import colormaps\n"
    "{{ target }}.set_cmap(colormaps[{{ name }}].resampled({{ size }}))"
)

_GRADIENT_VALUES = _JINJA.from_string(
    "{% for lo, hi in channels %}\n"
    "{{ 'cmap = np.column_stack([' if loop.first else '                        ' }}"
    "np.linspace({{ lo }}, {{ hi }}, {{ size }}){{ '])' if loop.last else ',' }}\n"
    "{% endfor %}"
)

_GRADIENT_APPLY = _JINJA.from_string(
    "from matplotlib.colors import ListedColormap\n"
    "{{ target }}.set_cmap(ListedColormap(cmap))"
)


@dataclass
class ColormapFragments:
    """Script fragments for computing and applying a colormap."""

    values: List[str]
    apply: List[str]
    named: bool


def _lines(text: str) -> List[str]:
    return text.rstrip("\n").split("\n")


def _validate_size(size: Any) -> int:
    try:
        count = int(size)
    except (TypeError, ValueError) as e:
        raise PumpkinError(Err.INVALID_CONFIG, {"colormap_size": size}, e)
    if count < 1:
        raise PumpkinError(Err.INVALID_CONFIG, {"colormap_size": size})
    return count


def validate_colors(colors: Sequence[Any]) -> List[tuple]:
    """Convert every color to an RGB triple in [0, 1]."""
    try:
        return [to_rgb(color) for color in colors]
    except (TypeError, ValueError) as e:
        raise PumpkinError(Err.INVALID_CONFIG, {"colormap": colors}, e)


def normalize_colormap(spec: ColormapSpec, size: Any, target: str = "pumpkin") -> ColormapFragments:
    """Build the value and apply fragments for a colormap specification.

    Args:
        spec: Name of a matplotlib colormap, or exactly two colors
        size: Number of samples in the colormap table
        target: Script variable holding the surface the colormap is applied to

    Returns:
        ColormapFragments with the value lines, apply lines and named flag

    Raises:
        PumpkinError: INVALID_CONFIG for unknown palettes, bad colors, a
            color count other than two, or a non-positive size
    """
    count = _validate_size(size)

    if isinstance(spec, str):
        if spec not in matplotlib.colormaps:
            raise PumpkinError(Err.INVALID_CONFIG, {"colormap": spec, "reason": "unknown colormap name"})
        context = {"name": to_literal(spec), "size": count, "target": target}
        logger.debug(f"Named colormap {spec} with {count} samples")
        return ColormapFragments(
            values=_lines(_NAMED_VALUES.render(context)),
            apply=_lines(_NAMED_APPLY.render(context)),
            named=True,
        )

    colors = validate_colors(spec)
    if len(colors) != 2:
        raise PumpkinError(
            Err.INVALID_CONFIG,
            {"colormap": spec, "reason": "colormap can be either a colormap name, or 2 colors"},
        )
    channels = [(to_literal(lo), to_literal(hi)) for lo, hi in zip(colors[0], colors[1])]
    logger.debug(f"Gradient colormap {colors[0]} -> {colors[1]} with {count} samples")
    return ColormapFragments(
        values=_lines(_GRADIENT_VALUES.render(channels=channels, size=count)),
        apply=_lines(_GRADIENT_APPLY.render(target=target)),
        named=False,
    )
