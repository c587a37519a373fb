# palette_gen/gamut.py
from __future__ import annotations

"""
sRGB gamut checks for Lab colours.

Exports:
  rgb_in_gamut(rgb) -> bool array
  valid_lab_mask(lab) -> bool array
  is_valid_color(lab) -> bool
"""

import numpy as np
from numpy.typing import NDArray

from .colour_convert import lab_to_rgb
from .constants import RGB_MAX
from .core_types import ColourLike, as_single_colour


def rgb_in_gamut(rgb: np.ndarray) -> NDArray[np.bool_]:
    """Row-wise: every channel of (..., 3) RGB in [0, 255]. NaN is out."""
    with np.errstate(invalid="ignore"):
        inside = (rgb >= 0.0) & (rgb <= RGB_MAX)
    return np.all(inside, axis=-1)


def valid_lab_mask(lab: ColourLike) -> NDArray[np.bool_]:
    """Row-wise gamut test for (..., 3) Lab."""
    return rgb_in_gamut(lab_to_rgb(lab))


def is_valid_color(lab: ColourLike) -> bool:
    """True if a single Lab colour maps to a displayable sRGB triple."""
    return bool(valid_lab_mask(as_single_colour(lab, "lab")))


__all__ = ["rgb_in_gamut", "valid_lab_mask", "is_valid_color"]
