# palette_gen/kmeans.py
from __future__ import annotations

"""
Constrained k-means palette search.

Centroids move to the mean of the lattice samples nearest to them. A mean
that is not displayable or not accepted is replaced by the closest sample
not already taken by an earlier centroid this step, so centroids always land
inside the accepted region after the first step (given a non-empty lattice).

Exports:
  UNASSIGNED
  build_sample_lattice(accept, high_resolution=False)
  run_kmeans(count, accept, quality, high_resolution, distance_type, rng, debug=False)
"""

import time
from typing import Tuple

import numpy as np

from .colour_convert import lab_to_rgb
from .colour_distance import DistanceType, raw_distance_array
from .constants import (
    KMEANS_INIT_RETRIES,
    LAB_AB_MAX,
    LAB_L_MAX,
    LATTICE_STEPS_HIGH_RES,
    LATTICE_STEPS_STANDARD,
)
from .core_types import AcceptPredicate, Lab, LabCheck, LabList, to_triple
from .gamut import rgb_in_gamut
from .sampling import make_lab_check, random_lab
from .utils import debug_log, format_seconds_compact, print_config_line

# Sample not yet assigned to any centroid. Never a valid centroid index.
UNASSIGNED = -1


def build_sample_lattice(accept: AcceptPredicate, high_resolution: bool = False) -> Lab:
    """
    Regular Lab grid over L 0..100, a/b -100..100 (inclusive), keeping points
    that are displayable and accepted.

    Steps (L, a, b) are 5/10/10, or 1/5/5 with high_resolution.
    Order is L outermost, then a, then b. Returns float64 [S,3].
    """
    l_step, a_step, b_step = (
        LATTICE_STEPS_HIGH_RES if high_resolution else LATTICE_STEPS_STANDARD
    )
    l_max = int(LAB_L_MAX)
    ab_max = int(LAB_AB_MAX)
    ls = np.arange(0, l_max + 1, l_step, dtype=np.float64)
    as_ = np.arange(-ab_max, ab_max + 1, a_step, dtype=np.float64)
    bs = np.arange(-ab_max, ab_max + 1, b_step, dtype=np.float64)
    grid = np.stack(np.meshgrid(ls, as_, bs, indexing="ij"), axis=-1).reshape(-1, 3)

    rgb = lab_to_rgb(grid)
    in_gamut = rgb_in_gamut(rgb)
    keep = np.zeros(grid.shape[0], dtype=bool)
    for idx in np.flatnonzero(in_gamut):
        keep[idx] = bool(accept(to_triple(rgb[idx])))
    return grid[keep]


def _initial_centroids(
    count: int, check: LabCheck, rng: np.random.Generator
) -> Tuple[Lab, int]:
    """
    Rejection-sample centroids with at most KMEANS_INIT_RETRIES redraws each.
    Past that the last draw is kept even if it fails `check`.
    Returns (centroids [count,3], number kept invalid).
    """
    centroids = np.empty((count, 3), dtype=np.float64)
    kept_invalid = 0
    for i in range(count):
        lab = random_lab(rng)
        valid = check(lab)
        retries = KMEANS_INIT_RETRIES
        while not valid and retries > 0:
            retries -= 1
            lab = random_lab(rng)
            valid = check(lab)
        if not valid:
            kept_invalid += 1
        centroids[i] = lab
    return centroids, kept_invalid


def _assign_samples(
    samples: Lab,
    centroids: Lab,
    assignment: np.ndarray,
    distance_type: DistanceType,
) -> np.ndarray:
    """
    Nearest centroid per sample, first index on ties.
    A sample with no finite distance keeps its previous assignment.
    """
    dist = raw_distance_array(
        samples[:, None, :], centroids[None, :, :], distance_type
    )
    finite = np.isfinite(dist)
    dist = np.where(finite, dist, np.inf)
    nearest = np.argmin(dist, axis=1)
    return np.where(np.any(finite, axis=1), nearest, assignment)


def _nearest_sample(
    samples: Lab, pool: np.ndarray, target: Lab, distance_type: DistanceType
) -> int:
    """Index into `samples` of the pooled sample closest to `target`, or -1."""
    indices = np.flatnonzero(pool)
    if indices.size == 0:
        return -1
    dist = raw_distance_array(samples[indices], target, distance_type)
    dist = np.where(np.isfinite(dist), dist, np.inf)
    best = int(np.argmin(dist))
    if not np.isfinite(dist[best]):
        return -1
    return int(indices[best])


def _update_centroids(
    samples: Lab,
    centroids: Lab,
    assignment: np.ndarray,
    check: LabCheck,
    distance_type: DistanceType,
) -> int:
    """
    Move each centroid in turn. Returns how many fell back to a sample.
    Mutates `centroids`.
    """
    free = np.ones(samples.shape[0], dtype=bool)
    fallbacks = 0
    for j in range(centroids.shape[0]):
        members = assignment == j
        n_members = int(np.count_nonzero(members))
        candidate = (
            samples[members].mean(axis=0) if n_members else np.zeros(3, dtype=np.float64)
        )
        if n_members and check(candidate):
            centroids[j] = candidate
        else:
            pool = free if np.any(free) else np.ones_like(free)
            closest = _nearest_sample(samples, pool, candidate, distance_type)
            if closest >= 0:
                centroids[j] = samples[closest]
                fallbacks += 1
        if samples.shape[0]:
            free &= ~np.all(samples == centroids[j], axis=1)
    return fallbacks


def run_kmeans(
    count: int,
    accept: AcceptPredicate,
    quality: int,
    high_resolution: bool,
    distance_type: DistanceType,
    rng: np.random.Generator,
    *,
    debug: bool = False,
) -> LabList:
    """
    K-means over the accepted part of a Lab lattice.

    Args:
      count: palette size (number of centroids)
      accept: RGB triple -> bool, caller predicate
      quality: number of assign/update iterations
      high_resolution: finer lattice (slower, smoother)
      distance_type: distance model for assignment and fallbacks
      rng: per-run generator
      debug: print lattice size, timings and fallback counts
    Returns:
      list of `count` Lab [3] arrays
    """
    t0 = time.perf_counter()
    check = make_lab_check(accept)

    centroids, kept_invalid = _initial_centroids(count, check, rng)
    if debug and kept_invalid:
        debug_log(
            f"kmeans: {kept_invalid} initial centroid(s) kept after "
            f"{KMEANS_INIT_RETRIES} failed retries"
        )

    samples = build_sample_lattice(accept, high_resolution)
    assignment = np.full(samples.shape[0], UNASSIGNED, dtype=np.int64)
    t_lattice = time.perf_counter()
    if debug:
        print_config_line(
            "kmeans",
            [
                ("Colours", count),
                ("Samples", int(samples.shape[0])),
                ("Steps", quality),
                ("High-res", bool(high_resolution)),
                ("Distance", str(distance_type)),
            ],
        )

    fallbacks = 0
    for _step in range(quality):
        if samples.shape[0]:
            assignment = _assign_samples(samples, centroids, assignment, distance_type)
        fallbacks += _update_centroids(
            samples, centroids, assignment, check, distance_type
        )

    if debug:
        t_end = time.perf_counter()
        debug_log(
            f"kmeans: lattice {format_seconds_compact(t_lattice - t0)}, "
            f"search {format_seconds_compact(t_end - t_lattice)}, "
            f"sample fallbacks {fallbacks:,}"
        )
    return [centroids[j].copy() for j in range(count)]


__all__ = ["UNASSIGNED", "build_sample_lattice", "run_kmeans"]
