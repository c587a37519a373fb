# palette_gen/mode.py
from __future__ import annotations

"""
Optimiser strategy names.

Exports:
- Strategy = Literal["kmeans", "force"]
- DEFAULT_STRATEGY
- resolve_strategy(name) -> Strategy

Notes:
- "kmeans" is the default (faster, covers the accepted region evenly).
- "force" repels colours apart; usually better spread, slower for large counts.
"""

from typing import Dict, Literal

Strategy = Literal["kmeans", "force"]

DEFAULT_STRATEGY: Strategy = "kmeans"

_ALIASES: Dict[str, Strategy] = {
    "kmeans": "kmeans",
    "k-means": "kmeans",
    "force": "force",
    "force-vector": "force",
    "force_directed": "force",
    "force-directed": "force",
}


def resolve_strategy(name: str) -> Strategy:
    """
    Normalise a user-supplied strategy name.
    - "kmeans" / "k-means" -> "kmeans"
    - "force" / "force-vector" / "force-directed" -> "force"
    """
    key = str(name).strip().lower()
    if key not in _ALIASES:
        raise ValueError(f"unknown strategy {name!r}; expected 'kmeans' or 'force'")
    return _ALIASES[key]


__all__ = ["Strategy", "DEFAULT_STRATEGY", "resolve_strategy"]
