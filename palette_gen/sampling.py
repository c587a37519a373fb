# palette_gen/sampling.py
from __future__ import annotations

"""
Helpers shared by the optimisers: per-run random generator, uniform Lab
draws over the search cube, and the gamut + predicate check.
"""

from typing import Optional

import numpy as np

from .colour_convert import lab_to_rgb
from .constants import LAB_AB_MAX, LAB_L_MAX
from .core_types import AcceptPredicate, Lab, LabCheck, to_triple
from .gamut import valid_lab_mask


def make_rng(
    seed: Optional[int] = None, rng: Optional[np.random.Generator] = None
) -> np.random.Generator:
    """Fresh generator for one run; a caller-supplied generator is used as is."""
    if rng is not None:
        if seed is not None:
            raise ValueError("pass either seed or rng, not both")
        if not isinstance(rng, np.random.Generator):
            raise TypeError(f"rng must be a numpy Generator, got {type(rng).__name__}")
        return rng
    return np.random.default_rng(seed)


def random_lab(rng: np.random.Generator) -> Lab:
    """Uniform draw from L in [0,100), a and b in [-100,100)."""
    u = rng.random(3)
    return np.array(
        [
            LAB_L_MAX * u[0],
            LAB_AB_MAX * (2.0 * u[1] - 1.0),
            LAB_AB_MAX * (2.0 * u[2] - 1.0),
        ],
        dtype=np.float64,
    )


def make_lab_check(accept: AcceptPredicate) -> LabCheck:
    """
    Build the Lab acceptance test: displayable in sRGB AND accepted by the
    caller's predicate. The predicate only ever sees in-gamut RGB triples.
    """

    def check(lab: Lab) -> bool:
        if not bool(valid_lab_mask(lab)):
            return False
        return bool(accept(to_triple(lab_to_rgb(lab))))

    return check


__all__ = ["make_rng", "random_lab", "make_lab_check"]
