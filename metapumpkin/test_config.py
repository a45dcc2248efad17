"""
Unit tests for the config module.
"""
from metapumpkin.config import (
    COLORMAP_SIZE,
    SCRIPT_IMPORTS,
    SPECKLE_BAND,
    SPECKLE_COLORMAP_SIZE,
    STEM_PROFILE,
    STEM_STYLES,
)


class TestConfig:
    """Test cases for config module."""

    def test_speckle_band(self):
        """Test the speckle band defaults to 0.97 standard deviations."""
        assert SPECKLE_BAND == 0.97

    def test_colormap_sizes(self):
        """Test colormap sample counts."""
        assert COLORMAP_SIZE == 256
        assert SPECKLE_COLORMAP_SIZE == 2

    def test_stem_profile(self):
        """Test the stem profile starts wide and settles to a constant radius."""
        assert STEM_PROFILE[0] == 1.5
        assert len(STEM_PROFILE) == 8

    def test_script_imports(self):
        assert SCRIPT_IMPORTS == ["import numpy as np"]
        assert STEM_STYLES == ("complex", "simple")
