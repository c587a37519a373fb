# palette_gen/generate.py
from __future__ import annotations

"""
Palette generation entry point.

generate(count, accept=None, strategy="kmeans", quality=50,
         high_resolution=False, distance_type=DistanceType.DEFAULT,
         *, seed=None, rng=None, debug=False) -> tuple of (L, a, b)

GenerateOptions bundles the same settings for callers that keep them as
configuration (e.g. parsed from JSON or CLI flags).
"""

import time
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import numpy as np

from .colour_convert import lab_to_hex
from .colour_distance import DistanceType
from .constants import DEFAULT_QUALITY
from .core_types import AcceptPredicate, LabList, Palette, accept_all, to_triple
from .force import run_force_directed
from .kmeans import run_kmeans
from .mode import DEFAULT_STRATEGY, Strategy, resolve_strategy
from .sampling import make_lab_check, make_rng
from .utils import debug_log, format_seconds_compact, print_config_line


def _positive_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value <= 0:
        raise ValueError(f"{name} must be > 0, got {value}")
    return int(value)


@dataclass(frozen=True)
class GenerateOptions:
    """Validated settings for one palette run."""

    count: int
    strategy: Strategy = DEFAULT_STRATEGY
    quality: int = DEFAULT_QUALITY
    high_resolution: bool = False
    distance_type: DistanceType = DistanceType.DEFAULT
    seed: Optional[int] = None
    debug: bool = False

    def __post_init__(self) -> None:
        _positive_int(self.count, "count")
        _positive_int(self.quality, "quality")
        object.__setattr__(self, "strategy", resolve_strategy(self.strategy))
        if not isinstance(self.distance_type, DistanceType):
            raise TypeError(
                f"distance_type must be a DistanceType, got {self.distance_type!r}"
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GenerateOptions":
        """
        Build options from a plain mapping. `distance_type` may be a
        DistanceType or its name ('cmc', 'compromise', 'protanope', ...).
        Unknown keys are rejected.
        """
        fields = set(cls.__dataclass_fields__)
        unknown = sorted(set(data) - fields)
        if unknown:
            raise ValueError(f"unknown option(s): {', '.join(unknown)}")
        kwargs = dict(data)
        dist = kwargs.get("distance_type")
        if isinstance(dist, str):
            kwargs["distance_type"] = DistanceType.parse(dist)
        return cls(**kwargs)


def generate_with_options(
    options: GenerateOptions,
    accept: Optional[AcceptPredicate] = None,
    rng: Optional[np.random.Generator] = None,
) -> Palette:
    """Run one palette search as described by `options`."""
    if accept is None:
        accept = accept_all
    elif not callable(accept):
        raise TypeError("accept must be callable: (r, g, b) -> bool")
    run_rng = make_rng(options.seed, rng)

    t0 = time.perf_counter()
    if options.debug:
        print_config_line(
            "generate",
            [
                ("Colours", options.count),
                ("Strategy", options.strategy),
                ("Distance", str(options.distance_type)),
                ("Quality", options.quality),
                ("High-res", options.high_resolution),
            ],
        )

    colours: LabList
    if options.strategy == "force":
        colours = run_force_directed(
            options.count,
            make_lab_check(accept),
            options.quality,
            options.distance_type,
            run_rng,
            debug=options.debug,
        )
    else:
        colours = run_kmeans(
            options.count,
            accept,
            options.quality,
            options.high_resolution,
            options.distance_type,
            run_rng,
            debug=options.debug,
        )

    palette: Palette = tuple(to_triple(c) for c in colours)
    if options.debug:
        hexes = " ".join(lab_to_hex(c) for c in palette)
        debug_log(f"palette: {hexes}")
        debug_log(f"done in {format_seconds_compact(time.perf_counter() - t0)}")
    return palette


def generate(
    count: int,
    accept: Optional[AcceptPredicate] = None,
    strategy: Strategy = DEFAULT_STRATEGY,
    quality: int = DEFAULT_QUALITY,
    high_resolution: bool = False,
    distance_type: DistanceType = DistanceType.DEFAULT,
    *,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
    debug: bool = False,
) -> Palette:
    """
    Generate `count` perceptually distinct Lab colours.

    Args:
      count: number of colours (> 0)
      accept: (r, g, b) floats 0..255 -> bool; only displayable colours are
              offered. None accepts everything.
      strategy: "kmeans" (default) or "force"
      quality: k-means iterations, or force steps / 20 (> 0)
      high_resolution: finer k-means sampling lattice
      distance_type: distance model (DistanceType member)
      seed: seed for a fresh generator; same seed and settings give the
            same palette
      rng: caller-owned numpy Generator instead of seed
      debug: print settings, timings and the final palette

    Returns:
      tuple of `count` (L, a, b) float tuples. Force-directed colours always
      pass the gamut and `accept`; k-means colours do too except in the rare
      case an unplaceable initial centroid survives (e.g. empty lattice).
    """
    options = GenerateOptions(
        count=count,
        strategy=strategy,
        quality=quality,
        high_resolution=bool(high_resolution),
        distance_type=distance_type,
        seed=seed,
        debug=debug,
    )
    return generate_with_options(options, accept=accept, rng=rng)


__all__ = ["GenerateOptions", "generate", "generate_with_options"]
