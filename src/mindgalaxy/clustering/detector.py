"""Cluster detection: connected components over strong connections.

Two thoughts share a cluster iff a path of connections, each with weight at
or above the threshold, joins them. Direction is ignored: a single a -> b
entry is enough. Thoughts left alone are collected into one orphan group
rather than dropped.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

import networkx as nx

from mindgalaxy.models import Cluster, Thought

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.6
ORPHAN_CLUSTER_ID = "sub-orphans"


@dataclass
class ClusterGroups:
    """Partition of thought ids: real clusters (2+ members) plus orphans."""

    clusters: list[list[str]] = field(default_factory=list)
    orphans: list[str] = field(default_factory=list)

    def partition(self) -> set[frozenset[str]]:
        """Order-free view of the groups, orphans as one group."""
        groups = {frozenset(c) for c in self.clusters}
        if self.orphans:
            groups.add(frozenset(self.orphans))
        return groups


def build_strength_graph(thoughts: Sequence[Thought], threshold: float) -> nx.Graph:
    """Undirected graph of every thought, with an edge per connection >= threshold."""
    graph = nx.Graph()
    graph.add_nodes_from(t.id for t in thoughts)
    for thought in thoughts:
        for neighbor_id, weight in thought.connections.items():
            if weight >= threshold and neighbor_id in graph and neighbor_id != thought.id:
                graph.add_edge(thought.id, neighbor_id)
    return graph


def detect_clusters(
    thoughts: Sequence[Thought],
    threshold: float = DEFAULT_THRESHOLD,
) -> ClusterGroups:
    """Group thoughts into strongly connected components.

    Members within a group keep the input order of the thoughts, and groups
    are ordered by their first member. Composition never depends on order.
    """
    if not thoughts:
        return ClusterGroups()

    graph = build_strength_graph(thoughts, threshold)
    order = {t.id: i for i, t in enumerate(thoughts)}

    clusters: list[list[str]] = []
    orphans: list[str] = []
    for component in nx.connected_components(graph):
        members = sorted(component, key=order.__getitem__)
        if len(members) >= 2:
            clusters.append(members)
        else:
            orphans.extend(members)

    clusters.sort(key=lambda members: order[members[0]])
    orphans.sort(key=order.__getitem__)

    logger.debug(f"Detected {len(clusters)} clusters and {len(orphans)} orphans at {threshold}")
    return ClusterGroups(clusters=clusters, orphans=orphans)


def centroid(
    node_ids: Sequence[str],
    positions: Mapping[str, tuple[float, float]],
) -> tuple[float, float]:
    """Mean position of the members that have one; origin if none do."""
    points = [positions[nid] for nid in node_ids if nid in positions]
    if not points:
        return 0.0, 0.0
    return (
        sum(p[0] for p in points) / len(points),
        sum(p[1] for p in points) / len(points),
    )


def build_clusters(
    groups: ClusterGroups,
    positions: Mapping[str, tuple[float, float]],
) -> list[Cluster]:
    """Sub-cluster objects with centroids; the orphan group comes last."""
    clusters = []
    for index, node_ids in enumerate(groups.clusters):
        cx, cy = centroid(node_ids, positions)
        clusters.append(Cluster(id=f"sub-{index}", node_ids=list(node_ids), center_x=cx, center_y=cy))

    if groups.orphans:
        cx, cy = centroid(groups.orphans, positions)
        clusters.append(
            Cluster(
                id=ORPHAN_CLUSTER_ID,
                node_ids=list(groups.orphans),
                center_x=cx,
                center_y=cy,
                is_orphan_group=True,
            )
        )
    return clusters
