# palette_gen/force.py
from __future__ import annotations

"""
Force-directed palette search.

Colours repel each other with a force falling off as 1/d^2 under the chosen
distance model. Each step every colour moves a capped distance along its
accumulated force, but only if it stays displayable and accepted. There is
no convergence test: the run lasts quality * 20 steps.
"""

import time

import numpy as np

from .colour_distance import DistanceType, distance_array
from .constants import (
    FORCE_JITTER,
    FORCE_MAX_STEP,
    FORCE_REPULSION,
    FORCE_SPEED,
    FORCE_STEPS_PER_QUALITY,
)
from .core_types import Lab, LabCheck, LabList
from .sampling import random_lab
from .utils import debug_log, format_seconds_compact, print_config_line


def _initial_colours(count: int, check: LabCheck, rng: np.random.Generator) -> Lab:
    """Rejection-sample `count` accepted colours. Retries without bound."""
    colours = np.empty((count, 3), dtype=np.float64)
    for i in range(count):
        lab = random_lab(rng)
        while not check(lab):
            lab = random_lab(rng)
        colours[i] = lab
    return colours


def _force_vectors(
    colours: Lab,
    rows: np.ndarray,
    cols: np.ndarray,
    distance_type: DistanceType,
    rng: np.random.Generator,
) -> Lab:
    """
    Accumulated repulsion per colour for one step.

    Pairs are (rows[k], cols[k]) with rows > cols. Coincident pairs (d == 0)
    push the second colour by random jitter instead.
    """
    vectors = np.zeros_like(colours)
    if rows.size == 0:
        return vectors

    colour_a = colours[rows]
    colour_b = colours[cols]
    dist = distance_array(colour_a, colour_b, distance_type)

    pushing = dist > 0.0
    if np.any(pushing):
        d = dist[pushing][:, None]
        force = FORCE_REPULSION / (d * d)
        push = (colour_a[pushing] - colour_b[pushing]) * force / d
        np.add.at(vectors, rows[pushing], push)
        np.subtract.at(vectors, cols[pushing], push)

    stuck = ~pushing
    n_stuck = int(np.count_nonzero(stuck))
    if n_stuck:
        jitter = FORCE_JITTER - 2.0 * FORCE_JITTER * rng.random((n_stuck, 3))
        np.add.at(vectors, cols[stuck], jitter)
    return vectors


def run_force_directed(
    count: int,
    check: LabCheck,
    quality: int,
    distance_type: DistanceType,
    rng: np.random.Generator,
    *,
    debug: bool = False,
) -> LabList:
    """
    Spread `count` colours apart by simulated repulsion.

    Args:
      count: palette size
      check: Lab -> bool, gamut and caller predicate
      quality: step budget factor (steps = quality * 20)
      distance_type: distance model driving the repulsion
      rng: per-run generator
      debug: print timings and move counts
    Returns:
      list of `count` Lab [3] arrays, each passing `check`
    """
    t0 = time.perf_counter()
    steps = quality * FORCE_STEPS_PER_QUALITY
    if debug:
        print_config_line(
            "force",
            [("Colours", count), ("Steps", steps), ("Distance", str(distance_type))],
        )

    colours = _initial_colours(count, check, rng)
    t_init = time.perf_counter()

    rows, cols = np.tril_indices(count, k=-1)
    moved = 0
    blocked = 0
    for _step in range(steps):
        vectors = _force_vectors(colours, rows, cols, distance_type, rng)
        for i in range(count):
            vec = vectors[i]
            displacement = FORCE_SPEED * float(np.sqrt(np.dot(vec, vec)))
            if displacement > 0.0:
                ratio = FORCE_SPEED * min(FORCE_MAX_STEP, displacement) / displacement
                candidate = colours[i] + vec * ratio
                if check(candidate):
                    colours[i] = candidate
                    moved += 1
                else:
                    blocked += 1

    if debug:
        t_end = time.perf_counter()
        debug_log(
            f"force: init {format_seconds_compact(t_init - t0)}, "
            f"search {format_seconds_compact(t_end - t_init)}, "
            f"moves {moved:,}, blocked {blocked:,}"
        )
    return [colours[i].copy() for i in range(count)]


__all__ = ["run_force_directed"]
