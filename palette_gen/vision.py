# palette_gen/vision.py
from __future__ import annotations

"""
Dichromatic colour-vision simulation on fixed confusion lines.

Exports:
  ConfusionLine
  ConfusionType  (PROTANOPIA, DEUTERANOPIA, TRITANOPIA)
  simulate_vision_deficiency(lab, confusion, amount=1.0)

Model:
  The source colour's xy chromaticity is moved along the line through the
  deficiency's confusion point until it meets the deficiency's fixed
  confusion line. Luminance Y is kept. The result is pulled towards the grey
  of equal luminance just enough to fit in RGB, then blended with the source
  by `amount` (0 = unchanged, 1 = full dichromacy).

  Degenerate chromaticities (0/0 at black, vertical lines) are coerced to 0.0
  at the chromaticity, slope and intersection steps only. Later NaNs are kept
  and mark a colour the model cannot simulate.
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np

from .colour_convert import lab_to_rgb, rgb_to_lab
from .constants import (
    NEUTRAL_X,
    NEUTRAL_Y,
    NEUTRAL_Z,
    RGB_MAX,
    SIM_GAMMA,
    SIM_RGB_TO_XYZ,
    SIM_XYZ_TO_RGB,
)
from .core_types import ColourLike, Lab, as_colour_array


@dataclass(frozen=True)
class ConfusionLine:
    """Confusion point (x, y) and the dichromat's confusion line y = m*x + yint."""

    x: float
    y: float
    m: float
    yint: float


class ConfusionType(Enum):
    PROTANOPIA = ConfusionLine(0.7465, 0.2535, 1.27345, -0.07389)
    DEUTERANOPIA = ConfusionLine(1.4, -0.4, 0.96843, 0.00333)
    TRITANOPIA = ConfusionLine(0.1748, 0.0, 1.07678, -0.02274)

    @property
    def line(self) -> ConfusionLine:
        return self.value


def _nan_to_zero(values: np.ndarray) -> np.ndarray:
    return np.where(np.isnan(values), 0.0, values)


def _mix(matrix, c0: np.ndarray, c1: np.ndarray, c2: np.ndarray):
    return tuple(m0 * c0 + m1 * c1 + m2 * c2 for (m0, m1, m2) in matrix)


def _chromaticity(X: np.ndarray, Y: np.ndarray, Z: np.ndarray):
    """xy chromaticity; black (0/0) maps to (0, 0)."""
    with np.errstate(invalid="ignore", divide="ignore"):
        total = X + Y + Z
        return _nan_to_zero(X / total), _nan_to_zero(Y / total)


def _project_to_confusion_line(
    chroma_x: np.ndarray, chroma_y: np.ndarray, line: ConfusionLine
):
    """
    Follow the line through (chroma_x, chroma_y) and the confusion point to
    where it meets the dichromat's confusion line. A 0/0 slope or
    intersection is taken as 0.
    """
    with np.errstate(invalid="ignore", divide="ignore", over="ignore"):
        m = _nan_to_zero((chroma_y - line.y) / (chroma_x - line.x))
        yint = chroma_y - chroma_x * m
        deviate_x = (line.yint - yint) / (m - line.m)
        deviate_y = m * deviate_x + yint
    return _nan_to_zero(deviate_x), _nan_to_zero(deviate_y)


def _fit_factor(channel: np.ndarray, diff: np.ndarray) -> np.ndarray:
    """Per-channel shift towards grey that lands exactly on 0 or 1; 0 if out of [0, 1]."""
    target = np.where(channel < 0.0, 0.0, 1.0)
    fit = (target - channel) / diff
    return np.where((fit > 1.0) | (fit < 0.0), 0.0, fit)


def simulate_vision_deficiency(
    lab: ColourLike, confusion: ConfusionType, amount: float = 1.0
) -> Lab:
    """
    Approximate how `lab` is seen under `confusion`, blended by `amount`.

    Args:
      lab: Lab [3] or [...,3]
      confusion: ConfusionType member
      amount: 0..1, 1 = full dichromacy, intermediate = anomalous trichromacy
    Returns:
      float64 Lab with the input's shape; rows the model cannot handle
      (e.g. out-of-gamut sources) come back as NaN.
    """
    if not isinstance(confusion, ConfusionType):
        raise TypeError(f"confusion must be a ConfusionType, got {confusion!r}")
    amount = float(amount)
    if not 0.0 <= amount <= 1.0:
        raise ValueError(f"amount must be in [0, 1], got {amount}")

    line = confusion.line
    src_rgb = lab_to_rgb(as_colour_array(lab, "lab"))
    sr = src_rgb[..., 0]
    sg = src_rgb[..., 1]
    sb = src_rgb[..., 2]

    with np.errstate(invalid="ignore", divide="ignore", over="ignore"):
        # source -> linear -> XYZ
        pow_r = np.power(sr / RGB_MAX, SIM_GAMMA)
        pow_g = np.power(sg / RGB_MAX, SIM_GAMMA)
        pow_b = np.power(sb / RGB_MAX, SIM_GAMMA)
        X, Y, Z = _mix(SIM_RGB_TO_XYZ, pow_r, pow_g, pow_b)

        chroma_x, chroma_y = _chromaticity(X, Y, Z)
        deviate_x, deviate_y = _project_to_confusion_line(chroma_x, chroma_y, line)

        # simulated XYZ at the source luminance
        X = deviate_x * Y / deviate_y
        Z = (1.0 - (deviate_x + deviate_y)) * Y / deviate_y

        # grey of equal luminance
        neutral_x = NEUTRAL_X * Y / NEUTRAL_Y
        neutral_z = NEUTRAL_Z * Y / NEUTRAL_Y

        # Y difference is zero by construction, so only X and Z columns apply
        diff_x = neutral_x - X
        diff_z = neutral_z - Z
        (rx, _ry, rz), (gx, _gy, gz), (bx, _by, bz) = SIM_XYZ_TO_RGB
        diff_r = diff_x * rx + diff_z * rz
        diff_g = diff_x * gx + diff_z * gz
        diff_b = diff_x * bx + diff_z * bz

        dr, dg, db = _mix(SIM_XYZ_TO_RGB, X, Y, Z)

        adjust = np.maximum(
            _fit_factor(dr, diff_r),
            np.maximum(_fit_factor(dg, diff_g), _fit_factor(db, diff_b)),
        )
        dr = dr + adjust * diff_r
        dg = dg + adjust * diff_g
        db = db + adjust * diff_b

        # back to gamma space
        dr = np.power(np.maximum(dr, 0.0), 1.0 / SIM_GAMMA)
        dg = np.power(np.maximum(dg, 0.0), 1.0 / SIM_GAMMA)
        db = np.power(np.maximum(db, 0.0), 1.0 / SIM_GAMMA)

    # anomalous blend with the source
    keep = 1.0 - amount
    out = np.empty(src_rgb.shape, dtype=np.float64)
    out[..., 0] = (sr / RGB_MAX * keep + dr * amount) * RGB_MAX
    out[..., 1] = (sg / RGB_MAX * keep + dg * amount) * RGB_MAX
    out[..., 2] = (sb / RGB_MAX * keep + db * amount) * RGB_MAX
    return rgb_to_lab(out)


__all__ = ["ConfusionLine", "ConfusionType", "simulate_vision_deficiency"]
