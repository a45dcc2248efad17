"""
Configuration module for pumpkin script generation.
"""
import os

from dotenv import load_dotenv

load_dotenv()

# Values in the speckle noise field inside (-SPECKLE_BAND, SPECKLE_BAND) are
# zeroed so only the tails of the normal distribution become speckles
SPECKLE_BAND = float(os.getenv("METAPUMPKIN_SPECKLE_BAND", "0.97"))

# Colormap sample counts; a speckled pumpkin only needs a two tone gradient
COLORMAP_SIZE = int(os.getenv("METAPUMPKIN_COLORMAP_SIZE", "256"))
SPECKLE_COLORMAP_SIZE = int(os.getenv("METAPUMPKIN_SPECKLE_COLORMAP_SIZE", "2"))

# Radius falloff along the complex stem, from base to tip
STEM_PROFILE = [1.5, 1, 0.7, 0.7, 0.7, 0.7, 0.7, 0.7]

# Fixed camera and light for the graphics section
CAMERA_ELEVATION = 30
CAMERA_AZIMUTH = -60
LIGHT_AZIMUTH = 315
LIGHT_ALTITUDE = 45

# Lines every generated script starts with (after its header comment)
SCRIPT_IMPORTS = ["import numpy as np"]

STEM_STYLES = ("complex", "simple")
