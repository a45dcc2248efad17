#!/usr/bin/env python3
"""
Command line entry point for generating pumpkin scripts.

Usage:
    metapumpkin --resolution 50 --speckle-size 0.05
    metapumpkin --params prefab.json --fold --output pumpkin.py
    metapumpkin --colormap autumn --draw
"""
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import click

from .errors import PumpkinError
from .params import PumpkinParams
from .pumpkin import draw_pumpkin, pumpkin_script


def collect_overrides(**options: Any) -> Dict[str, Any]:
    """Keep only the parameter options given on the command line."""
    colormap = options.pop("colormap", ())
    # nargs=2 options come back empty rather than None on some click versions
    overrides = {key: value for key, value in options.items() if value is not None and value != ()}
    if len(colormap) == 1:
        overrides["colormap"] = colormap[0]
    elif colormap:
        overrides["colormap"] = tuple(colormap)
    return overrides


@click.command()
@click.option(
    "--params",
    "params_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON file with a pumpkin parameter set",
)
@click.option("--radius", type=float, help="Radius of the pumpkin")
@click.option("--height", type=float, help="Height of the pumpkin")
@click.option("--resolution", type=int, help="Density of the pumpkin mesh")
@click.option("--num-bumps", type=int, help="Number of ridges around the pumpkin")
@click.option("--bump-depth", type=float, help="Depth of the ridges")
@click.option("--secondary-bump-depth", type=float, help="Depth of secondary ridges (0 disables)")
@click.option("--dimple-depth", type=float, help="Depth of the dimple on the top/bottom")
@click.option("--speckle-size", type=float, help="Prominence of speckles in the color field (0 disables)")
@click.option("--speckle-seed", type=int, help="Random seed for the speckle noise")
@click.option(
    "--colormap",
    multiple=True,
    help="Colormap name, or repeat twice with colors to interpolate between",
)
@click.option("--stem-style", type=click.Choice(["complex", "simple"], case_sensitive=False))
@click.option("--stem-radius", type=float, nargs=2, help="Two radii of the stem tube")
@click.option("--stem-dims", type=float, nargs=2, help="Size of the partial torus of the stem")
@click.option("--stem-color", help="Color of the stem")
@click.option("--fold/--no-fold", "constant_folding", default=None, help="Fold constant values into the code")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Output file (default: stdout)")
@click.option("--draw", is_flag=True, help="Draw the pumpkin instead of printing the script")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(
    params_file: Optional[Path],
    output: Optional[Path],
    draw: bool,
    verbose: bool,
    colormap: Tuple[str, ...],
    **options: Any,
):
    """Generate a Python script that draws a procedural pumpkin."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        params = PumpkinParams.from_json(params_file) if params_file else PumpkinParams()
        params = params.with_overrides(**collect_overrides(colormap=colormap, **options))

        if draw:
            import matplotlib.pyplot as plt

            draw_pumpkin(params)
            plt.show()
            return

        script = pumpkin_script(params)
    except PumpkinError as e:
        raise click.ClickException(str(e))

    if output:
        output.write_text(script, encoding="utf-8")
        click.echo(f"Script written to {output}")
    else:
        click.echo(script, nl=False)


if __name__ == "__main__":
    main()
