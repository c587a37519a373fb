# palette_gen/constants.py
"""
Colour-science constants and optimiser tunables used across the project.

- D65 reference white and Lab thresholds (T0..T3)
- sRGB <-> XYZ matrices and gamma curve constants
- Colour-blind simulation matrices (gamma 2.2 model)
- Distance model weights (CMC l:c, compromise weights)
- Force-directed and k-means tunables
"""
from __future__ import annotations

from typing import Tuple

# =========================
# Reference white (D65)
# =========================
XN = 0.950470
YN = 1.0
ZN = 1.088830

# Lab nonlinearity. Truncated values kept as-is, conversions are tuned to them.
T0 = 0.137931034  # 4 / 29
T1 = 0.206896552  # 6 / 29
T2 = 0.12841855  # 3 * t1 * t1
T3 = 0.008856452  # t1 * t1 * t1

# =========================
# sRGB
# =========================
XYZ_TO_SRGB: Tuple[Tuple[float, float, float], ...] = (
    (3.2404542, -1.5371385, -0.4985314),
    (-0.9692660, 1.8760108, 0.0415560),
    (0.0556434, -0.2040259, 1.0572252),
)
SRGB_TO_XYZ: Tuple[Tuple[float, float, float], ...] = (
    (0.4124564, 0.3575761, 0.1804375),
    (0.2126729, 0.7151522, 0.0721750),
    (0.0193339, 0.1191920, 0.9503041),
)

SRGB_ENCODE_THRESHOLD = 0.00304  # linear side
SRGB_DECODE_THRESHOLD = 0.04045  # encoded side
SRGB_LINEAR_SLOPE = 12.92
SRGB_GAMMA = 2.4
SRGB_A = 0.055

RGB_MAX = 255.0

# =========================
# Colour-blind simulation
# =========================
SIM_GAMMA = 2.2

SIM_RGB_TO_XYZ: Tuple[Tuple[float, float, float], ...] = (
    (0.412424, 0.357579, 0.180464),
    (0.212656, 0.715158, 0.0721856),
    (0.0193324, 0.119193, 0.950444),
)
SIM_XYZ_TO_RGB: Tuple[Tuple[float, float, float], ...] = (
    (3.24071, -1.53726, -0.498571),
    (-0.969258, 1.87599, 0.0415557),
    (0.0556352, -0.203996, 1.05707),
)

# D65 white point chromaticity (x, y, z)
NEUTRAL_X = 0.312713
NEUTRAL_Y = 0.329016
NEUTRAL_Z = 0.358271

# =========================
# Distance models
# =========================
CMC_LIGHTNESS = 2.0
CMC_CHROMA = 1.0

COMPROMISE_NORMAL_WEIGHT = 1000.0
COMPROMISE_PROTANOPIA_WEIGHT = 100.0
COMPROMISE_DEUTERANOPIA_WEIGHT = 500.0
COMPROMISE_TRITANOPIA_WEIGHT = 1.0

# =========================
# Search space
# =========================
LAB_L_MAX = 100.0
LAB_AB_MAX = 100.0

# =========================
# Force-directed
# =========================
FORCE_REPULSION = 100.0
FORCE_SPEED = 100.0
FORCE_MAX_STEP = 0.1
FORCE_STEPS_PER_QUALITY = 20
FORCE_JITTER = 2.0  # jitter drawn from (-J, J] per channel

# =========================
# K-means
# =========================
KMEANS_INIT_RETRIES = 10

# (L step, a step, b step)
LATTICE_STEPS_STANDARD: Tuple[int, int, int] = (5, 10, 10)
LATTICE_STEPS_HIGH_RES: Tuple[int, int, int] = (1, 5, 5)

# =========================
# Defaults
# =========================
DEFAULT_QUALITY = 50
