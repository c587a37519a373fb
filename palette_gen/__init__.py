# palette_gen/__init__.py
"""
palette_gen package.

Purpose:
  Generate palettes of perceptually distinct colours in CIE Lab, optionally
  tuned for colour-vision deficiency.

Public API:
  generate                  : palette search entry point (k-means or force-directed).
  GenerateOptions           : validated run settings, buildable from a mapping.
  DistanceType              : distance models (euclidean, cmc, compromise, protanope, ...).
  ConfusionType             : dichromacy types for simulation.
  distance                  : distance between two Lab colours.
  simulate_vision_deficiency: Lab colour as seen under a deficiency.
  lab_to_rgb / rgb_to_lab   : D65 conversions (RGB on a 0..255 scale).
  is_valid_color            : Lab colour is displayable in sRGB.
  lab_to_hex                : Lab colour to '#rrggbb'.

Quick start:
  from palette_gen import generate, DistanceType, lab_to_hex
  palette = generate(8, distance_type=DistanceType.COMPROMISE, seed=1)
  print([lab_to_hex(c) for c in palette])
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import colour_convert
from . import constants
from . import core_types
from . import colour_distance
from . import utils
from . import vision

from .colour_convert import lab_to_hex, lab_to_rgb, rgb_to_lab
from .colour_distance import DistanceType, distance
from .gamut import is_valid_color
from .generate import GenerateOptions, generate, generate_with_options
from .mode import DEFAULT_STRATEGY, Strategy
from .vision import ConfusionType, simulate_vision_deficiency

__all__ = [
    "__version__",
    "colour_convert",
    "constants",
    "core_types",
    "colour_distance",
    "utils",
    "vision",
    "generate",
    "generate_with_options",
    "GenerateOptions",
    "Strategy",
    "DEFAULT_STRATEGY",
    "DistanceType",
    "ConfusionType",
    "distance",
    "simulate_vision_deficiency",
    "lab_to_rgb",
    "rgb_to_lab",
    "lab_to_hex",
    "is_valid_color",
]
