"""Canonical store of thoughts and their weighted connections.

Every edit bumps `version` and notifies subscribers synchronously, so the
layout engine and cluster tracker can reconcile before the next frame.
"""

import copy
import itertools
import logging
import math
from collections.abc import Callable, Iterator

from mindgalaxy.models import Thought
from mindgalaxy.models.thought import now_ms

logger = logging.getLogger(__name__)

GraphListener = Callable[["ThoughtGraph"], None]


class GraphError(ValueError):
    """Invalid edit requested against the thought graph."""


class UnknownThoughtError(GraphError, KeyError):
    """A thought id that is not (or no longer) in the graph."""

    def __str__(self) -> str:
        return f"Unknown thought: {self.args[0]}"


class InvalidConnectionError(GraphError):
    """Self-connection or weight outside (0, 1]."""


def validate_weight(weight: float) -> float:
    """Check a connection weight is in (0, 1]."""
    weight = float(weight)
    if not 0.0 < weight <= 1.0:
        raise InvalidConnectionError(f"Connection weight must be in (0, 1], got {weight}")
    return weight


class ThoughtGraph:
    """In-memory graph store: thoughts in insertion order plus a version counter."""

    def __init__(self, thoughts: list[Thought] | None = None) -> None:
        self._thoughts: dict[str, Thought] = {}
        self._listeners: list[GraphListener] = []
        self._id_counter = itertools.count()
        # Ids handed out by new_id or ever stored; stored ids are never reused
        self._issued_ids: set[str] = set()
        self._stored_ids: set[str] = set()
        self.version = 0

        for thought in thoughts or []:
            self._thoughts[thought.id] = thought
            self._issued_ids.add(thought.id)
            self._stored_ids.add(thought.id)
        if self._thoughts:
            self._prune_dangling()

    def __len__(self) -> int:
        return len(self._thoughts)

    def __contains__(self, thought_id: object) -> bool:
        return thought_id in self._thoughts

    def __iter__(self) -> Iterator[Thought]:
        return iter(list(self._thoughts.values()))

    @property
    def thoughts(self) -> list[Thought]:
        """Live thoughts in insertion order."""
        return list(self._thoughts.values())

    def subscribe(self, listener: GraphListener) -> None:
        """Register a callback invoked after every mutation."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: GraphListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def new_id(self) -> str:
        """Issue a thought id that has never been used in this graph."""
        while True:
            candidate = f"{now_ms()}-{next(self._id_counter)}"
            if candidate not in self._issued_ids:
                self._issued_ids.add(candidate)
                return candidate

    def get(self, thought_id: str) -> Thought:
        try:
            return self._thoughts[thought_id]
        except KeyError:
            raise UnknownThoughtError(thought_id) from None

    def snapshot(self) -> list[Thought]:
        """Deep copies of all thoughts, safe to hand to other components."""
        return [copy.deepcopy(t) for t in self._thoughts.values()]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, thought: Thought, mutual: bool = False) -> Thought:
        """Add a new thought. Connections to unknown ids or with weights
        outside (0, 1] (NaN included) are dropped.

        With `mutual`, every neighbor also gets an entry back to the new
        thought at the same weight, within the same change notification.
        """
        if thought.id in self._stored_ids:
            raise GraphError(f"Thought id already used: {thought.id}")
        self._issued_ids.add(thought.id)
        self._stored_ids.add(thought.id)

        thought.connections = {
            nid: w for nid, w in thought.connections.items()
            if nid in self._thoughts and math.isfinite(w) and 0.0 < w <= 1.0
        }
        self._thoughts[thought.id] = thought
        if mutual:
            for neighbor_id, weight in thought.connections.items():
                self._thoughts[neighbor_id].connections[thought.id] = weight
        logger.debug(f"Added thought {thought.id} with {len(thought.connections)} connections")
        self._changed()
        return thought

    def update_content(self, thought_id: str, content: str) -> Thought:
        thought = self.get(thought_id)
        thought.content = content
        self._changed()
        return thought

    def delete(self, thought_id: str) -> Thought:
        """Remove a thought and every connection entry pointing at it."""
        thought = self.get(thought_id)
        del self._thoughts[thought_id]
        removed = 0
        for other in self._thoughts.values():
            if other.connections.pop(thought_id, None) is not None:
                removed += 1
        logger.info(f"Deleted thought {thought_id} ({removed} inbound connections removed)")
        self._changed()
        return thought

    def connect(
        self,
        source_id: str,
        target_id: str,
        weight: float,
        mutual: bool = False,
    ) -> None:
        """Add or update the directed connection source -> target."""
        if source_id == target_id:
            raise InvalidConnectionError(f"Thought {source_id} cannot connect to itself")
        weight = validate_weight(weight)
        source = self.get(source_id)
        target = self.get(target_id)

        source.connections[target_id] = weight
        if mutual:
            target.connections[source_id] = weight
        self._changed()

    def disconnect(self, source_id: str, target_id: str, mutual: bool = False) -> None:
        source = self.get(source_id)
        source.connections.pop(target_id, None)
        if mutual and target_id in self._thoughts:
            self._thoughts[target_id].connections.pop(source_id, None)
        self._changed()

    # ------------------------------------------------------------------

    def _prune_dangling(self) -> None:
        for thought in self._thoughts.values():
            thought.connections = {
                nid: w for nid, w in thought.connections.items() if nid in self._thoughts
            }

    def _changed(self) -> None:
        self.version += 1
        for listener in list(self._listeners):
            listener(self)
