import numpy as np
import pytest
from matplotlib.colors import to_rgb

from metapumpkin.colormap import ColormapFragments, normalize_colormap, validate_colors
from metapumpkin.errors import Err, PumpkinError


def _run_values(fragments: ColormapFragments) -> np.ndarray:
    namespace = {"np": np}
    exec("\n".join(fragments.values), namespace)
    return namespace["cmap"]


class TestNamedColormap:
    def test_named_colormap_fragments(self):
        """Test a palette name produces the fast path fragments."""
        fragments = normalize_colormap("viridis", 256)
        assert fragments.named is True
        assert fragments.apply[-1] == 'pumpkin.set_cmap(colormaps["viridis"].resampled(256))'
        assert any("cmap = " in line for line in fragments.values)

    def test_named_colormap_values_match_palette(self):
        """Test the value fragment samples the palette itself."""
        from matplotlib import colormaps

        table = _run_values(normalize_colormap("viridis", 256))
        assert table.shape == (256, 3)
        np.testing.assert_allclose(table, colormaps["viridis"](np.arange(256))[:, :3])

    def test_unknown_colormap_name(self):
        """Test that an unknown palette name is a configuration error."""
        with pytest.raises(PumpkinError) as exc_info:
            normalize_colormap("not_a_colormap", 256)
        assert exc_info.value.code is Err.INVALID_CONFIG

    def test_custom_target(self):
        """Test the apply fragment addresses the requested surface variable."""
        fragments = normalize_colormap("copper", 8, target="surf")
        assert fragments.apply[-1].startswith("surf.set_cmap(")


class TestGradientColormap:
    def test_two_colors_interpolate(self):
        """Test two colors give a linear gradient between them."""
        fragments = normalize_colormap(("#000000", "#ffffff"), 3)
        assert fragments.named is False
        assert len(fragments.values) == 3
        assert fragments.values[0].startswith("cmap = np.column_stack([np.linspace(")
        table = _run_values(fragments)
        np.testing.assert_allclose(table, [[0, 0, 0], [0.5, 0.5, 0.5], [1, 1, 1]])

    def test_gradient_endpoints(self):
        """Test the first and last rows equal the given colors."""
        table = _run_values(normalize_colormap(("orange", "#ff7518"), 2))
        assert table.shape == (2, 3)
        np.testing.assert_allclose(table[0], to_rgb("orange"))
        np.testing.assert_allclose(table[-1], to_rgb("#ff7518"))

    def test_gradient_apply_uses_table(self):
        """Test the apply fragment wraps the computed table."""
        fragments = normalize_colormap(("#f06000", "#ff7518"), 256)
        assert fragments.apply == [
            "from matplotlib.colors import ListedColormap",
            "pumpkin.set_cmap(ListedColormap(cmap))",
        ]

    @pytest.mark.parametrize(
        "colors",
        [
            ("#f06000",),
            ("#f06000", "#ff7518", "#ffffff"),
            (1.0, 0.5, 0.0),
            ("#f06000", "not a color"),
        ],
    )
    def test_invalid_color_pairs(self, colors):
        """Test that anything but exactly two valid colors is rejected."""
        with pytest.raises(PumpkinError) as exc_info:
            normalize_colormap(colors, 2)
        assert exc_info.value.code is Err.INVALID_CONFIG

    def test_rgb_triples_accepted(self):
        """Test colors may be given as RGB triples."""
        fragments = normalize_colormap([(1.0, 0.0, 0.0), (0.0, 0.0, 1.0)], 2)
        table = _run_values(fragments)
        np.testing.assert_allclose(table, [[1, 0, 0], [0, 0, 1]])

    @pytest.mark.parametrize("size", [0, -3, "many"])
    def test_invalid_size(self, size):
        """Test that the colormap size must be a positive integer."""
        with pytest.raises(PumpkinError) as exc_info:
            normalize_colormap("viridis", size)
        assert exc_info.value.code is Err.INVALID_CONFIG


def test_validate_colors_converts_hex():
    assert validate_colors(["#008000"]) == [(0.0, 128 / 255, 0.0)]
