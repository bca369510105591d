"""Thought node model - a short text entry placed in the galaxy."""

import math
import time
from dataclasses import dataclass, field
from typing import Any, Literal

WeightBand = Literal["strong", "weak", "faint"]

STRONG_WEIGHT = 0.6  # Cluster-forming
WEAK_WEIGHT = 0.3  # Cross-cluster


def now_ms() -> int:
    """Current wall clock in milliseconds."""
    return int(time.time() * 1000)


def normalize_connections(owner_id: str, raw: Any) -> dict[str, float]:
    """Normalize a connection payload to the canonical id -> weight mapping.

    A list of ids (the unweighted representation) means weight 1.0 for every
    entry. Self references, non-finite weights and weights at or below
    zero are dropped; weights above 1 are clipped.
    """
    if not raw:
        return {}
    if isinstance(raw, dict):
        items = raw.items()
    else:
        items = ((neighbor_id, 1.0) for neighbor_id in raw)

    connections: dict[str, float] = {}
    for neighbor_id, weight in items:
        neighbor_id = str(neighbor_id)
        weight = float(weight)
        if neighbor_id == owner_id or not math.isfinite(weight) or weight <= 0:
            continue
        connections[neighbor_id] = min(weight, 1.0)
    return connections


def weight_band(weight: float) -> WeightBand:
    """Classify a connection weight into its semantic band."""
    if weight >= STRONG_WEIGHT:
        return "strong"
    if weight >= WEAK_WEIGHT:
        return "weak"
    return "faint"


@dataclass
class Thought:
    """
    A node in the thought graph.

    Connections are directed and weighted: this thought may hold an entry
    for a neighbor that holds none back.
    """

    id: str
    content: str

    # Layout position and velocity
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    mass: float = 1.0

    connections: dict[str, float] = field(default_factory=dict)  # neighbor id -> weight (0, 1]

    # Presentation only
    color: str = "#e2e8f0"
    gradient: str = "linear-gradient(135deg, #e2e8f0, #e2e8f0)"

    created_at: int = field(default_factory=now_ms)

    def __post_init__(self) -> None:
        self.connections = normalize_connections(self.id, self.connections)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "content": self.content,
            "x": self.x,
            "y": self.y,
            "vx": self.vx,
            "vy": self.vy,
            "mass": self.mass,
            "connections": dict(self.connections),
            "color": self.color,
            "gradient": self.gradient,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Thought":
        """Create from dictionary (accepts list or mapping connections)."""
        return cls(
            id=str(data["id"]),
            content=data.get("content", ""),
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
            vx=float(data.get("vx", 0.0)),
            vy=float(data.get("vy", 0.0)),
            mass=float(data.get("mass", 1.0)),
            connections=data.get("connections") or {},
            color=data.get("color", "#e2e8f0"),
            gradient=data.get("gradient", "linear-gradient(135deg, #e2e8f0, #e2e8f0)"),
            created_at=int(data.get("created_at") or now_ms()),
        )


def effective_weight(a: Thought, b: Thought) -> float:
    """Display strength between two thoughts: the larger directed entry, 0 if none."""
    return max(a.connections.get(b.id, 0.0), b.connections.get(a.id, 0.0))
