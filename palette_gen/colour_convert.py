# palette_gen/colour_convert.py
from __future__ import annotations

"""
Colour conversions between CIE Lab and sRGB (D65). Vectorised NumPy.

Exports:
  lab_to_rgb(lab)
  rgb_to_lab(rgb)
  lab_to_hex(lab)

Both directions accept a single triple or any array shaped (..., 3) and
preserve the leading shape. RGB channels are floats on a 0..255 scale and
are not clipped, so out-of-gamut Lab colours map to channels outside 0..255.
"""

import numpy as np

from .constants import (
    RGB_MAX,
    SRGB_A,
    SRGB_DECODE_THRESHOLD,
    SRGB_ENCODE_THRESHOLD,
    SRGB_GAMMA,
    SRGB_LINEAR_SLOPE,
    SRGB_TO_XYZ,
    T0,
    T1,
    T2,
    T3,
    XN,
    XYZ_TO_SRGB,
    YN,
    ZN,
)
from .core_types import RGB, ColourLike, HexStr, Lab, as_colour_array, rgb_to_hex


# Lab <-> XYZ nonlinearity


def _lab_f_inverse(t: np.ndarray) -> np.ndarray:
    return np.where(t > T1, t * t * t, T2 * (t - T0))


def _lab_f(t: np.ndarray) -> np.ndarray:
    with np.errstate(invalid="ignore"):
        return np.where(t > T3, np.cbrt(t), t / T2 + T0)


# sRGB gamma


def _linear_to_srgb(channel: np.ndarray) -> np.ndarray:
    """Linear 0..1 to encoded sRGB on the 0..255 scale."""
    with np.errstate(invalid="ignore"):
        encoded = np.where(
            channel <= SRGB_ENCODE_THRESHOLD,
            SRGB_LINEAR_SLOPE * channel,
            (1.0 + SRGB_A) * np.power(channel, 1.0 / SRGB_GAMMA) - SRGB_A,
        )
    return RGB_MAX * encoded


def _srgb_to_linear(channel: np.ndarray) -> np.ndarray:
    """Encoded sRGB on the 0..255 scale to linear 0..1."""
    norm = channel / RGB_MAX
    with np.errstate(invalid="ignore"):
        return np.where(
            norm > SRGB_DECODE_THRESHOLD,
            np.power((norm + SRGB_A) / (1.0 + SRGB_A), SRGB_GAMMA),
            norm / SRGB_LINEAR_SLOPE,
        )


# Lab -> sRGB


def lab_to_rgb(lab: ColourLike) -> RGB:
    """
    CIE Lab (D65) to sRGB on a 0..255 scale.

    A NaN a* or b* drops that chroma term, so the colour falls back to the
    neutral implied by L*. Returns float64 with the input's shape.
    """
    arr = as_colour_array(lab, "lab")
    L = arr[..., 0]
    a = arr[..., 1]
    b = arr[..., 2]

    fy = (L + 16.0) / 116.0
    fx = np.where(np.isnan(a), fy, fy + a / 500.0)
    fz = np.where(np.isnan(b), fy, fy - b / 200.0)

    x = XN * _lab_f_inverse(fx)
    y = YN * _lab_f_inverse(fy)
    z = ZN * _lab_f_inverse(fz)

    out = np.empty(arr.shape, dtype=np.float64)
    for i, (mx, my, mz) in enumerate(XYZ_TO_SRGB):
        out[..., i] = _linear_to_srgb(mx * x + my * y + mz * z)
    return out


# sRGB -> Lab


def rgb_to_lab(rgb: ColourLike) -> Lab:
    """
    sRGB on a 0..255 scale to CIE Lab (D65).
    Returns float64 with the input's shape.
    """
    arr = as_colour_array(rgb, "rgb")
    r_lin = _srgb_to_linear(arr[..., 0])
    g_lin = _srgb_to_linear(arr[..., 1])
    b_lin = _srgb_to_linear(arr[..., 2])

    (xr, xg, xb), (yr, yg, yb), (zr, zg, zb) = SRGB_TO_XYZ
    fx = _lab_f((xr * r_lin + xg * g_lin + xb * b_lin) / XN)
    fy = _lab_f((yr * r_lin + yg * g_lin + yb * b_lin) / YN)
    fz = _lab_f((zr * r_lin + zg * g_lin + zb * b_lin) / ZN)

    out = np.empty(arr.shape, dtype=np.float64)
    out[..., 0] = 116.0 * fy - 16.0
    out[..., 1] = 500.0 * (fx - fy)
    out[..., 2] = 200.0 * (fy - fz)
    return out


def lab_to_hex(lab: ColourLike) -> HexStr:
    """Single Lab colour to '#rrggbb' (channels rounded and clamped)."""
    return rgb_to_hex(lab_to_rgb(lab))


__all__ = [
    "lab_to_rgb",
    "rgb_to_lab",
    "lab_to_hex",
]
