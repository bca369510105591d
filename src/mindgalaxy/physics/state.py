"""Mutable physics shadow of the thought graph.

One PhysicsNode per thought, keyed by id. Evolved positions and velocities
survive graph edits so the layout never jumps when the graph changes.
"""

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field

from mindgalaxy.models import Thought

logger = logging.getLogger(__name__)

SpawnFn = Callable[[Thought], tuple[float, float]]


@dataclass
class PhysicsNode:
    """Simulation-only view of a thought."""

    id: str
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    fx: float = 0.0
    fy: float = 0.0
    mass: float = 1.0
    is_sleeping: bool = False

    # Refreshed from the graph on every sync
    content: str = ""
    color: str = ""
    connections: dict[str, float] = field(default_factory=dict)

    @property
    def speed(self) -> float:
        return (self.vx * self.vx + self.vy * self.vy) ** 0.5


@dataclass(frozen=True)
class NodeSnapshot:
    """Read-only position record handed to renderers and cluster detection."""

    id: str
    x: float
    y: float
    vx: float
    vy: float
    is_sleeping: bool

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "vx": self.vx,
            "vy": self.vy,
            "is_sleeping": self.is_sleeping,
        }


class PhysicsState:
    """The PhysicsNode map. Only the layout engine writes to it."""

    def __init__(self) -> None:
        self._nodes: dict[str, PhysicsNode] = {}
        # Bumped whenever node membership or any connection map changes
        self.topology_version = 0

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __iter__(self) -> Iterator[PhysicsNode]:
        return iter(self._nodes.values())

    def get(self, node_id: str) -> PhysicsNode | None:
        return self._nodes.get(node_id)

    def nodes(self) -> list[PhysicsNode]:
        return list(self._nodes.values())

    def sync_from_graph(
        self,
        thoughts: Iterable[Thought],
        spawn: SpawnFn | None = None,
    ) -> None:
        """Reconcile with the current graph.

        New thoughts get a node at the spawn position (the thought's own
        coordinates by default), at rest and awake. Existing nodes keep
        their evolved motion but take fresh content, color and connections;
        a change in connection count wakes them. Nodes whose thought is gone
        are removed. Calling this twice with the same input changes nothing.
        """
        seen: set[str] = set()
        topology_changed = False
        added = 0

        for thought in thoughts:
            seen.add(thought.id)
            node = self._nodes.get(thought.id)

            if node is None:
                x, y = spawn(thought) if spawn else (thought.x, thought.y)
                self._nodes[thought.id] = PhysicsNode(
                    id=thought.id,
                    x=float(x),
                    y=float(y),
                    mass=thought.mass,
                    content=thought.content,
                    color=thought.color,
                    connections=dict(thought.connections),
                )
                topology_changed = True
                added += 1
                continue

            if len(thought.connections) != len(node.connections):
                node.is_sleeping = False
            if thought.connections != node.connections:
                node.connections = dict(thought.connections)
                topology_changed = True
            node.content = thought.content
            node.color = thought.color
            node.mass = thought.mass

        stale = [node_id for node_id in self._nodes if node_id not in seen]
        for node_id in stale:
            del self._nodes[node_id]

        if stale:
            topology_changed = True
        if topology_changed:
            self.topology_version += 1
            logger.debug(
                f"Physics sync: {added} added, {len(stale)} removed, {len(self._nodes)} total"
            )

    def snapshot(self) -> list[NodeSnapshot]:
        return [
            NodeSnapshot(
                id=n.id, x=n.x, y=n.y, vx=n.vx, vy=n.vy, is_sleeping=n.is_sleeping
            )
            for n in self._nodes.values()
        ]

    def positions(self) -> dict[str, tuple[float, float]]:
        return {n.id: (n.x, n.y) for n in self._nodes.values()}
