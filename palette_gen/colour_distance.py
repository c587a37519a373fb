# palette_gen/colour_distance.py
from __future__ import annotations

"""
Perceptual distance models between Lab colours.

Exports:
  DistanceType
  distance(lab1, lab2, distance_type)        -> float
  distance_array(lab1, lab2, distance_type)  -> float64 array, broadcasting
  raw_distance_array                         -> same, NaN kept
  euclidean_distance, cmc_distance, colorblind_distance, compromise_distance

Notes:
  CMC(l:c) takes its weighting terms (S_L, S_C, S_H) from the first colour
  only, so CMC and every model built on it is not symmetric. Optimisers rely
  on the argument order they pass.
  NaN results (NaN inputs) are reported as 0.0.
"""

from enum import Enum
from typing import Callable, Dict, Optional

import numpy as np

from .constants import (
    CMC_CHROMA,
    CMC_LIGHTNESS,
    COMPROMISE_DEUTERANOPIA_WEIGHT,
    COMPROMISE_NORMAL_WEIGHT,
    COMPROMISE_PROTANOPIA_WEIGHT,
    COMPROMISE_TRITANOPIA_WEIGHT,
)
from .core_types import ColourLike, as_colour_array, as_single_colour
from .vision import ConfusionType, simulate_vision_deficiency


class DistanceType(Enum):
    """
    Closed set of distance models. Colour-blind members carry their
    ConfusionType in `.confusion`; the rest carry None.
    """

    EUCLIDEAN = ("euclidean", None)
    CMC = ("cmc", None)
    COMPROMISE = ("compromise", None)
    PROTANOPE = ("protanope", ConfusionType.PROTANOPIA)
    DEUTERANOPE = ("deuteranope", ConfusionType.DEUTERANOPIA)
    TRITANOPE = ("tritanope", ConfusionType.TRITANOPIA)
    # alias of EUCLIDEAN (equal value)
    DEFAULT = ("euclidean", None)

    def __init__(self, label: str, confusion: Optional[ConfusionType]) -> None:
        self.label = label
        self.confusion = confusion

    @property
    def is_colorblind(self) -> bool:
        return self.confusion is not None

    @classmethod
    def colorblind(cls, confusion: ConfusionType) -> "DistanceType":
        """Colour-blind simulated CMC member for a confusion type."""
        for member in cls:
            if member.confusion is confusion:
                return member
        raise TypeError(f"confusion must be a ConfusionType, got {confusion!r}")

    @classmethod
    def parse(cls, name: str) -> "DistanceType":
        """Case-insensitive lookup by label ('cmc', 'protanope', ...); 'default' = euclidean."""
        key = str(name).strip().lower()
        if key == "default":
            return cls.DEFAULT
        for member in cls:
            if member.label == key:
                return member
        choices = ", ".join(m.label for m in cls)
        raise ValueError(f"unknown distance type {name!r}; expected one of: {choices}")

    def __str__(self) -> str:
        return self.label


COMPROMISE_WEIGHTS: Dict[ConfusionType, float] = {
    ConfusionType.PROTANOPIA: COMPROMISE_PROTANOPIA_WEIGHT,
    ConfusionType.DEUTERANOPIA: COMPROMISE_DEUTERANOPIA_WEIGHT,
    ConfusionType.TRITANOPIA: COMPROMISE_TRITANOPIA_WEIGHT,
}


# Models (vectorised, inputs already float64 (..., 3))


def euclidean_distance(lab1: np.ndarray, lab2: np.ndarray) -> np.ndarray:
    """Plain L2 norm in Lab."""
    diff = lab1 - lab2
    return np.sqrt(np.sum(diff * diff, axis=-1))


def cmc_distance(
    lab1: np.ndarray,
    lab2: np.ndarray,
    lightness: float = CMC_LIGHTNESS,
    chroma: float = CMC_CHROMA,
) -> np.ndarray:
    """
    CMC(l:c) colour difference of lab2 relative to the reference lab1.

    Args:
      lab1: reference Lab [...,3]; S_L, S_C, S_H, F and T come from it
      lab2: sample Lab [...,3]
      lightness: l weighting (2 = acceptability)
      chroma: c weighting
    """
    L1, a1, b1 = lab1[..., 0], lab1[..., 1], lab1[..., 2]
    L2, a2, b2 = lab2[..., 0], lab2[..., 1], lab2[..., 2]

    C1 = np.hypot(a1, b1)
    C2 = np.hypot(a2, b2)
    delta_c = C1 - C2
    delta_l = L1 - L2
    delta_a = a1 - a2
    delta_b = b1 - b2
    # rounding can leave this a hair below zero for equal hues; clamped here,
    # where the reference formula lets it become NaN
    delta_h = np.sqrt(
        np.maximum(delta_a * delta_a + delta_b * delta_b - delta_c * delta_c, 0.0)
    )

    H1 = np.degrees(np.arctan2(b1, a1))
    H1 = np.where(H1 < 0.0, H1 + 360.0, H1)

    C1_4 = C1**4
    F = np.sqrt(C1_4 / (C1_4 + 1900.0))
    T = np.where(
        (H1 >= 164.0) & (H1 <= 345.0),
        0.56 + np.abs(0.2 * np.cos(np.radians(H1 + 168.0))),
        0.36 + np.abs(0.4 * np.cos(np.radians(H1 + 35.0))),
    )
    S_L = np.where(L1 < 16.0, 0.511, 0.040975 * L1 / (1.0 + 0.01765 * L1))
    S_C = 0.0638 * C1 / (1.0 + 0.0131 * C1) + 0.638
    S_H = S_C * (F * T + 1.0 - F)

    return np.sqrt(
        (delta_l / (lightness * S_L)) ** 2
        + (delta_c / (chroma * S_C)) ** 2
        + (delta_h / S_H) ** 2
    )


def colorblind_distance(
    lab1: np.ndarray, lab2: np.ndarray, confusion: ConfusionType
) -> np.ndarray:
    """CMC(2:1) between both colours as seen under `confusion`."""
    sim1 = simulate_vision_deficiency(lab1, confusion)
    sim2 = simulate_vision_deficiency(lab2, confusion)
    return cmc_distance(sim1, sim2)


def compromise_distance(lab1: np.ndarray, lab2: np.ndarray) -> np.ndarray:
    """
    Weighted mean of normal-vision CMC and the three colour-blind CMCs.
    A colour-blind term whose simulation produced NaN drops out with its weight.
    """
    normal = cmc_distance(lab1, lab2)
    total = COMPROMISE_NORMAL_WEIGHT * normal
    weight_sum = np.full(normal.shape, COMPROMISE_NORMAL_WEIGHT)

    for confusion in ConfusionType:
        sim1 = simulate_vision_deficiency(lab1, confusion)
        sim2 = simulate_vision_deficiency(lab2, confusion)
        failed = np.any(np.isnan(sim1), axis=-1) | np.any(np.isnan(sim2), axis=-1)
        term = np.where(failed, 0.0, cmc_distance(sim1, sim2))
        weight = np.where(failed, 0.0, COMPROMISE_WEIGHTS[confusion])
        total = total + weight * term
        weight_sum = weight_sum + weight

    with np.errstate(invalid="ignore", divide="ignore"):
        return np.where(weight_sum == 0.0, 0.0, total / weight_sum)


_MODELS: Dict[DistanceType, Callable[[np.ndarray, np.ndarray], np.ndarray]] = {
    DistanceType.EUCLIDEAN: euclidean_distance,
    DistanceType.CMC: cmc_distance,
    DistanceType.COMPROMISE: compromise_distance,
    DistanceType.PROTANOPE: lambda a, b: colorblind_distance(
        a, b, ConfusionType.PROTANOPIA
    ),
    DistanceType.DEUTERANOPE: lambda a, b: colorblind_distance(
        a, b, ConfusionType.DEUTERANOPIA
    ),
    DistanceType.TRITANOPE: lambda a, b: colorblind_distance(
        a, b, ConfusionType.TRITANOPIA
    ),
}


# Public entry points


def raw_distance_array(
    lab1: ColourLike,
    lab2: ColourLike,
    distance_type: DistanceType = DistanceType.DEFAULT,
) -> np.ndarray:
    """
    Like distance_array, but NaN is kept. Optimisers use it to skip
    colours the model cannot measure (e.g. out-of-gamut under simulation).
    """
    if not isinstance(distance_type, DistanceType):
        raise TypeError(f"distance_type must be a DistanceType, got {distance_type!r}")
    a = as_colour_array(lab1, "lab1")
    b = as_colour_array(lab2, "lab2")
    with np.errstate(invalid="ignore", divide="ignore", over="ignore"):
        return np.asarray(_MODELS[distance_type](a, b), dtype=np.float64)


def distance_array(
    lab1: ColourLike,
    lab2: ColourLike,
    distance_type: DistanceType = DistanceType.DEFAULT,
) -> np.ndarray:
    """
    Row-wise distance between broadcastable Lab arrays.

    Args:
      lab1: Lab [...,3], the reference side for asymmetric models
      lab2: Lab [...,3]
      distance_type: DistanceType member
    Returns:
      float64 array of the broadcast leading shape; NaN reported as 0.0
    """
    out = raw_distance_array(lab1, lab2, distance_type)
    return np.where(np.isnan(out), 0.0, out)


def distance(
    lab1: ColourLike,
    lab2: ColourLike,
    distance_type: DistanceType = DistanceType.DEFAULT,
) -> float:
    """Distance between two single Lab colours under `distance_type`."""
    a = as_single_colour(lab1, "lab1")
    b = as_single_colour(lab2, "lab2")
    return float(distance_array(a, b, distance_type))


__all__ = [
    "DistanceType",
    "COMPROMISE_WEIGHTS",
    "distance",
    "distance_array",
    "raw_distance_array",
    "euclidean_distance",
    "cmc_distance",
    "colorblind_distance",
    "compromise_distance",
]
