"""Thought graph store and demo data."""

from mindgalaxy.graph.seed import MINDFUL_PALETTE, seed_thoughts, solid_gradient
from mindgalaxy.graph.store import (
    GraphError,
    InvalidConnectionError,
    ThoughtGraph,
    UnknownThoughtError,
    validate_weight,
)

__all__ = [
    "ThoughtGraph",
    "GraphError",
    "InvalidConnectionError",
    "UnknownThoughtError",
    "validate_weight",
    "MINDFUL_PALETTE",
    "seed_thoughts",
    "solid_gradient",
]
