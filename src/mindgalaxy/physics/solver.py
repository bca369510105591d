"""Per-frame force solver.

Each step:
1. Reset forces
2. Center gravity on active nodes (every node while a drag is in progress)
3. Weighted springs: rest length shrinks as weight grows
4. Inverse-square repulsion inside a squared-distance cutoff
5. Damped semi-implicit Euler; slow nodes stop and sleep
6. The dragged node is held: zero velocity, awake, position owned by the pointer

Sleeping nodes are frozen. A sleeping node is woken when an active node
pulls or pushes it hard enough; the awake set is settled before
integration so a woken node moves with its full net force in the same step.
"""

import logging
import math
from dataclasses import dataclass

import numpy as np

from mindgalaxy.physics.config import PhysicsConfig
from mindgalaxy.physics.state import PhysicsNode, PhysicsState

logger = logging.getLogger(__name__)

# Rows of the repulsion matrix evaluated at once
REPULSION_CHUNK = 256


@dataclass
class StepResult:
    """What one step did."""

    awake: int = 0  # Nodes integrated this step
    fell_asleep: int = 0
    woken: int = 0
    total_speed: float = 0.0  # Sum of speeds of moving nodes


@dataclass
class _EdgeArrays:
    src: np.ndarray
    dst: np.ndarray
    weight: np.ndarray


class ForceSolver:
    """Stateless apart from a cache of edge index arrays."""

    def __init__(self) -> None:
        self._edge_cache_key: tuple[int, int] | None = None
        self._edges: _EdgeArrays | None = None

    def step(
        self,
        state: PhysicsState,
        config: PhysicsConfig,
        drag_target: str | None = None,
    ) -> StepResult:
        """Advance every non-sleeping node by one time step."""
        nodes = state.nodes()
        n = len(nodes)
        if n == 0:
            return StepResult()

        index = {node.id: i for i, node in enumerate(nodes)}
        pos = np.array([(node.x, node.y) for node in nodes], dtype=np.float64)
        vel = np.array([(node.vx, node.vy) for node in nodes], dtype=np.float64)
        asleep = np.array([node.is_sleeping for node in nodes], dtype=bool)
        was_asleep = asleep.copy()

        dragged = index.get(drag_target) if drag_target is not None else None
        if dragged is not None:
            asleep[dragged] = False

        edges = self._edge_arrays(state, nodes, index)
        springs, spring_mag = spring_forces(pos, edges, config)

        force = np.zeros((n, 2), dtype=np.float64)
        processed = np.zeros(n, dtype=bool)
        frontier = np.ones(n, dtype=bool) if dragged is not None else ~asleep

        while frontier.any():
            rows = np.flatnonzero(frontier)
            processed |= frontier

            force[rows] -= pos[rows] * config.center_gravity
            force[rows] += springs[rows]

            repulsion, pushed = repulsion_forces(pos, rows, config)
            force[rows] += repulsion

            woken = pushed | spring_wakes(edges, spring_mag, frontier, config)
            woken &= asleep
            asleep[woken] = False
            # Newly woken nodes still need their own net force
            frontier = woken & ~processed

        movable = ~asleep
        if dragged is not None:
            vel[dragged] = 0.0
            movable[dragged] = False

        moving_idx = np.flatnonzero(movable)
        vel[moving_idx] = (vel[moving_idx] + force[moving_idx]) * config.damping
        speed = np.hypot(vel[moving_idx, 0], vel[moving_idx, 1])

        stopping = speed < config.sleep_speed
        stop_idx = moving_idx[stopping]
        go_idx = moving_idx[~stopping]

        vel[stop_idx] = 0.0
        asleep[stop_idx] = True
        pos[go_idx] += vel[go_idx]

        self._write_back(nodes, pos, vel, force, asleep)

        return StepResult(
            awake=len(moving_idx),
            fell_asleep=len(stop_idx),
            woken=int(np.count_nonzero(was_asleep & ~asleep)),
            total_speed=float(speed[~stopping].sum()),
        )

    def _edge_arrays(
        self,
        state: PhysicsState,
        nodes: list[PhysicsNode],
        index: dict[str, int],
    ) -> _EdgeArrays:
        key = (id(state), state.topology_version)
        if self._edges is not None and self._edge_cache_key == key:
            return self._edges

        src: list[int] = []
        dst: list[int] = []
        weights: list[float] = []
        for i, node in enumerate(nodes):
            for neighbor_id, weight in node.connections.items():
                j = index.get(neighbor_id)
                # Dangling ids, self references and unusable weights contribute nothing
                if j is None or j == i or not math.isfinite(weight) or weight <= 0:
                    continue
                src.append(i)
                dst.append(j)
                weights.append(min(weight, 1.0))

        self._edges = _EdgeArrays(
            src=np.array(src, dtype=np.intp),
            dst=np.array(dst, dtype=np.intp),
            weight=np.array(weights, dtype=np.float64),
        )
        self._edge_cache_key = key
        return self._edges

    @staticmethod
    def _write_back(
        nodes: list[PhysicsNode],
        pos: np.ndarray,
        vel: np.ndarray,
        force: np.ndarray,
        asleep: np.ndarray,
    ) -> None:
        for i, node in enumerate(nodes):
            node.x, node.y = float(pos[i, 0]), float(pos[i, 1])
            node.vx, node.vy = float(vel[i, 0]), float(vel[i, 1])
            node.fx, node.fy = float(force[i, 0]), float(force[i, 1])
            node.is_sleeping = bool(asleep[i])


def spring_forces(
    pos: np.ndarray,
    edges: _EdgeArrays,
    config: PhysicsConfig,
) -> tuple[np.ndarray, np.ndarray]:
    """Net spring force per node and the signed magnitude per edge."""
    total = np.zeros_like(pos)
    if len(edges.src) == 0:
        return total, np.zeros(0)

    delta = pos[edges.dst] - pos[edges.src]
    dist = np.maximum(np.hypot(delta[:, 0], delta[:, 1]), 1.0)

    slack = (1.0 - edges.weight) ** 2
    target = config.spring_length * (config.min_mult + (config.max_mult - config.min_mult) * slack)
    magnitude = (dist - target) * config.stiffness * edges.weight
    magnitude = np.clip(magnitude, -config.max_force, config.max_force)

    # Stretched springs pull the source toward the target and vice versa
    vec = delta / dist[:, None] * magnitude[:, None]
    np.add.at(total, edges.src, vec)
    np.add.at(total, edges.dst, -vec)
    return total, magnitude


def spring_wakes(
    edges: _EdgeArrays,
    magnitude: np.ndarray,
    active: np.ndarray,
    config: PhysicsConfig,
) -> np.ndarray:
    """Nodes tugged hard by a spring attached to an active node."""
    woken = np.zeros(len(active), dtype=bool)
    if len(edges.src) == 0:
        return woken
    strong = np.abs(magnitude) > config.spring_wake_force
    woken[edges.dst[strong & active[edges.src]]] = True
    woken[edges.src[strong & active[edges.dst]]] = True
    return woken


def repulsion_forces(
    pos: np.ndarray,
    rows: np.ndarray,
    config: PhysicsConfig,
) -> tuple[np.ndarray, np.ndarray]:
    """Repulsion felt by each row node from every other node.

    Returns the (len(rows), 2) force block and a mask of nodes pushed
    harder than the wake threshold by any row node.
    """
    n = len(pos)
    result = np.zeros((len(rows), 2), dtype=np.float64)
    pushed = np.zeros(n, dtype=bool)
    if n < 2 or config.repulsion == 0:
        return result, pushed

    for start in range(0, len(rows), REPULSION_CHUNK):
        chunk = rows[start:start + REPULSION_CHUNK]
        delta = pos[chunk][:, None, :] - pos[None, :, :]
        raw_sq = np.einsum("ijk,ijk->ij", delta, delta)

        in_range = raw_sq <= config.repulsion_cutoff_sq
        in_range[np.arange(len(chunk)), chunk] = False

        dist_sq = np.maximum(raw_sq, 1.0)
        magnitude = np.minimum(config.repulsion / dist_sq, config.max_force)
        magnitude = np.where(in_range, magnitude, 0.0)

        unit = delta / np.sqrt(dist_sq)[:, :, None]
        result[start:start + len(chunk)] = (unit * magnitude[:, :, None]).sum(axis=1)
        pushed |= (magnitude > config.repulsion_wake_force).any(axis=0)

    return result, pushed
