"""
Pumpkin generator: drives ScriptGen to build a parametric pumpkin mesh.

The same algorithm either draws the pumpkin immediately, returns the Python
script that draws it, or returns the computed arrays for a caller that wants
data instead of graphics.
"""
import logging
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import numpy as np
from matplotlib.colors import to_hex

from .colormap import validate_colors
from .config import (
    CAMERA_AZIMUTH,
    CAMERA_ELEVATION,
    COLORMAP_SIZE,
    LIGHT_ALTITUDE,
    LIGHT_AZIMUTH,
    SPECKLE_BAND,
    SPECKLE_COLORMAP_SIZE,
    STEM_PROFILE,
    STEM_STYLES,
)
from .errors import Err, PumpkinError
from .literals import to_literal
from .params import PumpkinParams
from .script_gen import ScriptGen

logger = logging.getLogger(__name__)


@dataclass
class PumpkinMesh:
    """Arrays describing a generated pumpkin and its stem."""

    X: np.ndarray
    Y: np.ndarray
    Z: np.ndarray
    C: np.ndarray
    Xst: np.ndarray
    Yst: np.ndarray
    Zst: np.ndarray
    stem_color: Tuple[float, float, float]


def _check_params(params: PumpkinParams) -> None:
    if int(params.resolution) < 2:
        raise PumpkinError(Err.INVALID_CONFIG, {"resolution": params.resolution, "reason": "need at least 2 samples"})
    for key in ("stem_radius", "stem_dims"):
        if len(getattr(params, key)) != 2:
            raise PumpkinError(Err.INVALID_CONFIG, {key: getattr(params, key), "reason": "expected 2 values"})


def _declare_constants(SG: ScriptGen, params: PumpkinParams, stem_color: str) -> None:
    SG.add_comment("Pumpkin parameters", header=True)
    SG.constant("pr", params.radius, "Radius")
    SG.constant("ph", params.height, "Height")
    SG.constant("res", int(params.resolution), "Resolution")
    SG.constant("nb", params.num_bumps, "Number of bumps")
    SG.constant("bd", params.bump_depth, "Depth of bumps")

    if params.secondary_bump_depth != 0:
        SG.constant("sbd", params.secondary_bump_depth, "Depth of secondary bumps")

    if params.speckle_size > 0:
        SG.constant("ss", params.speckle_size, "Speckle size")
        SG.constant("rs", int(params.speckle_seed), "Speckle random seed")

    SG.constant("dd", params.dimple_depth, "Dimple (top/bottom) depth")
    SG.constant("sr", list(reversed(params.stem_radius)), "Stem size (radius of tube)")
    SG.constant("sd", list(params.stem_dims), "Stem dimensions (length of curve)")
    SG.constant("sc", stem_color, "Stem color")


def _add_body(SG: ScriptGen, params: PumpkinParams) -> None:
    SG.add_comment("Generate initial sphere coordinates", header=True)
    SG.add_lines([
        f"lon, lat = np.meshgrid(np.linspace(-np.pi, np.pi, {SG.ref('res')}),"
        f" np.linspace(-np.pi / 2, np.pi / 2, {SG.ref('res')}))",
        "Xs = np.cos(lat) * np.cos(lon)",
        "Ys = np.cos(lat) * np.sin(lon)",
        "Zs = np.sin(lat)",
    ])

    use_rxy = params.bump_depth > 0 and params.num_bumps > 0
    if use_rxy:
        ridges = (
            f"(1 - np.mod(np.linspace(0, {SG.ref('nb')} * 2, {SG.ref('res')}), 2)) ** 2 * {SG.ref('bd')}"
        )
        if params.secondary_bump_depth == 0:
            SG.add_comment("This specifies the pumpkin ridges.")
            SG.add_lines(f"Rxy = -{ridges}")
        else:
            SG.add_comment("This specifies the pumpkin ridges and secondary ridges.")
            SG.add_lines([
                f"Rxy = (-{ridges}",
                f"       - (1 - np.mod(np.linspace(0, {SG.ref('nb')} * 4, {SG.ref('res')}), 2)) ** 2"
                f" * {SG.ref('sbd')})",
            ])

    SG.add_comment("This adds a dimple in the top/bottom of the pumpkin.")
    SG.add_lines(f"Rz = -np.linspace(1, -1, {SG.ref('res')})[:, np.newaxis] ** 4 * {SG.ref('dd')}")

    SG.add_comment("Compute the mesh")
    pr = SG.ref("pr")
    ph = SG.ref("ph")
    if use_rxy:
        SG.add_lines([
            f"X = ({pr} + Rxy) * Xs",
            f"Y = ({pr} + Rxy) * Ys",
            f"Z = ({pr} + Rz) * Zs * (Rxy + 1) * {ph}",
            f"C = np.hypot(np.hypot(X, Y), {pr} * Zs * (Rxy + 1))",
        ])
    elif params.radius != 1:
        SG.add_lines([
            f"X = {pr} * Xs",
            f"Y = {pr} * Ys",
            f"Z = ({pr} + Rz) * Zs * {ph}",
            f"C = np.hypot(np.hypot(X, Y), {pr} * Zs)",
        ])
    else:
        SG.add_lines([
            "X = Xs",
            "Y = Ys",
            f"Z = (1 + Rz) * Zs * {ph}",
            "C = np.hypot(np.hypot(X, Y), Zs)",
        ])

    if params.speckle_size > 0:
        band = to_literal(SPECKLE_BAND)
        SG.add_comment("Compute speckles")
        SG.add_lines([
            f"rng = np.random.default_rng({SG.ref('rs')})",
            f"Cm = rng.standard_normal(({SG.ref('res')}, {SG.ref('res')}))",
            f"Cm[(Cm < {band}) & (Cm > -{band})] = 0",
            f"C = np.clip(C + Cm * {SG.ref('ss')}, C.min(), C.max())",
        ])


def _add_stem(SG: ScriptGen, params: PumpkinParams) -> None:
    SG.add_comment("Compute the stem", header=True)
    style = params.stem_style.lower() if isinstance(params.stem_style, str) else None
    if style == "complex":
        SG.add_lines([
            f"rf = np.array({to_literal(STEM_PROFILE)})",
            f"r = np.append(np.tile({SG.ref('sr')}, int({SG.ref('nb')})), {SG.ref('sr', 0)})[:, np.newaxis]",
            "theta, phi = np.meshgrid(np.linspace(0, np.pi / 2, rf.size), np.linspace(0, 2 * np.pi, r.size))",
            f"Xst = ({SG.ref('sd', 0)} - np.cos(phi) * r * rf) * np.cos(theta) - {SG.ref('sd', 0)}",
            f"Zst = ({SG.ref('sd', 1)} - np.cos(phi) * r * rf) * np.sin(theta)"
            f" + {SG.ref('ph')} - max(0, {SG.ref('dd')} * {SG.ref('ph')})",
            "Yst = -np.sin(phi) * r * rf",
        ])
    elif style == "simple":
        SG.add_lines([
            f"Xst = Xs * {SG.ref('sr', 0)}",
            f"Yst = Ys * {SG.ref('sr', 1)}",
            f"Zst = Zs * {SG.ref('sd', 1)} + Z[-1, 0]",
        ])
    else:
        raise PumpkinError(
            Err.INVALID_CONFIG,
            {"stem_style": params.stem_style, "reason": f"stem style must be one of {STEM_STYLES}"},
        )


def _add_graphics(SG: ScriptGen) -> None:
    SG.add_comment("Plot the pumpkin & stem", header=True)
    SG.add_lines([
        "import matplotlib.pyplot as plt",
        "from matplotlib.colors import LightSource",
        'ax = plt.gcf().add_subplot(projection="3d")',
        "pumpkin = ax.plot_surface(X, Y, Z, rstride=1, cstride=1, linewidth=0, antialiased=False)",
        "pumpkin.set_array(C[:-1, :-1].ravel())",
        f"ax.plot_surface(Xst, Yst, Zst, color={SG.ref('sc')}, linewidth=0,"
        f" lightsource=LightSource(azdeg={LIGHT_AZIMUTH}, altdeg={LIGHT_ALTITUDE}))",
    ])
    SG.add_lines([
        'ax.set_aspect("equal")',
        f"ax.view_init(elev={CAMERA_ELEVATION}, azim={CAMERA_AZIMUTH})",
        "ax.set_axis_off()",
    ])


def build_pumpkin(params: Optional[PumpkinParams] = None) -> ScriptGen:
    """Run the pumpkin algorithm and return the populated script generator.

    Args:
        params: Pumpkin parameters, defaults to PumpkinParams()

    Returns:
        ScriptGen holding the geometry, graphics and colormap sections

    Raises:
        PumpkinError: INVALID_CONFIG for an unknown stem style, bad colors or
            an unusable resolution
    """
    if params is None:
        params = PumpkinParams()
    requested_style = params.stem_style
    params = params.normalized()
    if params.stem_style != requested_style:
        logger.debug(f"Bumpless pumpkin, using simple stem instead of {requested_style}")
    _check_params(params)

    stem_color = to_hex(validate_colors([params.stem_color])[0])

    SG = ScriptGen("Pumpkin", constant_folding=params.constant_folding)
    _declare_constants(SG, params, stem_color)
    _add_body(SG, params)
    _add_stem(SG, params)

    # Plot just the pumpkin part
    SG.next_section()
    _add_graphics(SG)

    # Setup colors
    SG.next_section()
    if params.speckle_size > 0:
        SG.colormap(params.colormap, SPECKLE_COLORMAP_SIZE)
    else:
        SG.colormap(params.colormap, COLORMAP_SIZE)

    logger.info(
        f"Built pumpkin script: {len(SG.geometry_lines)} geometry lines, "
        f"{len(SG.graphics_lines)} graphics lines, stem={params.stem_style}, "
        f"folding={params.constant_folding}"
    )
    return SG


def _resolve(params: Optional[PumpkinParams], overrides: Any) -> PumpkinParams:
    return (params or PumpkinParams()).with_overrides(**overrides)


def draw_pumpkin(params: Optional[PumpkinParams] = None, **overrides: Any) -> None:
    """Draw the pumpkin into the current matplotlib figure."""
    build_pumpkin(_resolve(params, overrides)).evaluate()


def pumpkin_script(params: Optional[PumpkinParams] = None, **overrides: Any) -> str:
    """Return a standalone Python script that draws the pumpkin."""
    return build_pumpkin(_resolve(params, overrides)).generate_script()


def pumpkin_data(params: Optional[PumpkinParams] = None, **overrides: Any) -> Tuple[PumpkinMesh, np.ndarray]:
    """Compute the pumpkin arrays without creating any graphics.

    Returns:
        Tuple of (PumpkinMesh, colormap table of shape N x 3)
    """
    params = _resolve(params, overrides)
    SG = build_pumpkin(params)
    namespace = SG.evaluate_geometry()
    mesh = PumpkinMesh(
        X=namespace["X"],
        Y=namespace["Y"],
        Z=namespace["Z"],
        C=namespace["C"],
        Xst=namespace["Xst"],
        Yst=namespace["Yst"],
        Zst=namespace["Zst"],
        stem_color=validate_colors([params.stem_color])[0],
    )
    return mesh, SG.generate_map()
