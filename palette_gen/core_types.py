# palette_gen/core_types.py
from __future__ import annotations

"""
Core type aliases, value helpers and input coercion.
"""

import math
from typing import Callable, List, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Basic aliases

LabTriple = Tuple[float, float, float]
RGBTriple = Tuple[float, float, float]
HexStr = str

Lab = NDArray[np.float64]  # (..., 3) CIE Lab
RGB = NDArray[np.float64]  # (..., 3) sRGB, channels 0..255

ColourLike = Union[Sequence[float], NDArray[np.floating]]

# Optimiser collections

Palette = Tuple[LabTriple, ...]
LabList = List[Lab]

# Acceptance predicate: RGB triple (0..255 floats) -> keep?
AcceptPredicate = Callable[[RGBTriple], bool]

# Checks a Lab row against gamut and predicate.
LabCheck = Callable[[Lab], bool]


# Small helpers


def accept_all(rgb: RGBTriple) -> bool:
    """Default predicate: every displayable colour is acceptable."""
    return True


def as_colour_array(value: ColourLike, name: str = "colour") -> NDArray[np.float64]:
    """
    Coerce a triple or an (..., 3) array to float64.
    Raises ValueError when the last axis is not 3.
    """
    try:
        arr = np.asarray(value, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be numeric, got {value!r}") from exc
    if arr.ndim == 0 or arr.shape[-1] != 3:
        raise ValueError(f"{name} must have 3 channels, got shape {arr.shape}")
    return arr


def as_single_colour(value: ColourLike, name: str = "colour") -> NDArray[np.float64]:
    """Like as_colour_array, but only a single (3,) colour is allowed."""
    arr = as_colour_array(value, name)
    if arr.ndim != 1:
        raise ValueError(f"{name} must be a single colour, got shape {arr.shape}")
    return arr


def to_triple(row: NDArray[np.floating]) -> Tuple[float, float, float]:
    """(3,) array to a plain float tuple."""
    return (float(row[0]), float(row[1]), float(row[2]))


def clamp_value(value: float, lo: float, hi: float) -> float:
    """Clamp value to [lo, hi]."""
    return lo if value < lo else hi if value > hi else value


def rgb_to_hex(rgb: ColourLike) -> HexStr:
    """Float RGB (0..255) to '#rrggbb'. Channels are rounded and clamped."""
    out = []
    for channel in as_single_colour(rgb, "rgb"):
        if math.isnan(channel):
            raise ValueError("rgb contains NaN")
        out.append(int(round(clamp_value(float(channel), 0.0, 255.0))))
    return f"#{out[0]:02x}{out[1]:02x}{out[2]:02x}"


__all__ = [
    # aliases / types
    "LabTriple",
    "RGBTriple",
    "HexStr",
    "Lab",
    "RGB",
    "ColourLike",
    "Palette",
    "LabList",
    "AcceptPredicate",
    "LabCheck",
    # helpers
    "accept_all",
    "as_colour_array",
    "as_single_colour",
    "to_triple",
    "clamp_value",
    "rgb_to_hex",
]
