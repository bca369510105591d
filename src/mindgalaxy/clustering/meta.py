"""Group many sub-clusters into at most K spatial major clusters.

Greedy farthest-point seeding (first seed random, each next seed the
sub-cluster farthest from every chosen seed), then one nearest-center
assignment. No Lloyd iterations.
"""

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from mindgalaxy.models import Cluster

logger = logging.getLogger(__name__)

DEFAULT_MAX_MAJOR = 5


@dataclass
class MetaGrouping:
    """Result of meta-grouping."""

    major_clusters: list[Cluster]
    sub_clusters: list[Cluster]  # Re-tagged with parent_cluster_id


def farthest_point_seeds(centers: np.ndarray, k: int, first: int) -> list[int]:
    """Indices of k seeds chosen by greedy max-min distance."""
    seeds = [first]
    min_dist = np.linalg.norm(centers - centers[first], axis=1)
    while len(seeds) < k:
        # argmax keeps the lowest index among equal distances
        next_seed = int(np.argmax(min_dist))
        seeds.append(next_seed)
        min_dist = np.minimum(min_dist, np.linalg.norm(centers - centers[next_seed], axis=1))
    return seeds


def group_into_meta_clusters(
    sub_clusters: Sequence[Cluster],
    max_major: int = DEFAULT_MAX_MAJOR,
    rng: random.Random | None = None,
) -> MetaGrouping:
    """Bucket sub-clusters into at most `max_major` major clusters.

    Every sub-cluster ends up in exactly one major cluster and the majors'
    node ids are the union of their subs' node ids.
    """
    if max_major < 1:
        raise ValueError(f"max_major must be at least 1, got {max_major}")
    if not sub_clusters:
        return MetaGrouping(major_clusters=[], sub_clusters=[])

    if len(sub_clusters) <= max_major:
        majors = []
        subs = []
        for i, sc in enumerate(sub_clusters):
            major_id = f"major-{i}"
            majors.append(
                sc.with_changes(
                    id=major_id,
                    node_ids=list(sc.node_ids),
                    level="major",
                    summary=None,
                    sub_cluster_ids=[sc.id],
                    parent_cluster_id=None,
                )
            )
            subs.append(sc.with_changes(level="sub", parent_cluster_id=major_id))
        return MetaGrouping(major_clusters=majors, sub_clusters=subs)

    rng = rng or random.Random()
    centers = np.array([(sc.center_x, sc.center_y) for sc in sub_clusters], dtype=np.float64)
    seeds = farthest_point_seeds(centers, max_major, rng.randrange(len(sub_clusters)))

    # (subs, seeds) distance matrix; argmin breaks ties by lowest seed index
    seed_centers = centers[seeds]
    distances = np.linalg.norm(centers[:, None, :] - seed_centers[None, :, :], axis=2)
    assignment = np.argmin(distances, axis=1)

    # Duplicate seeds can leave a center with nothing; those are dropped
    used = sorted(set(int(a) for a in assignment))
    renumber = {seed_pos: i for i, seed_pos in enumerate(used)}

    majors: list[Cluster] = []
    for seed_pos in used:
        members = [i for i, a in enumerate(assignment) if a == seed_pos]
        node_ids = [nid for i in members for nid in sub_clusters[i].node_ids]
        sizes = np.array([max(len(sub_clusters[i].node_ids), 1) for i in members], dtype=np.float64)
        cx, cy = (centers[members] * sizes[:, None]).sum(axis=0) / sizes.sum()
        majors.append(
            Cluster(
                id=f"major-{renumber[seed_pos]}",
                node_ids=node_ids,
                center_x=float(cx),
                center_y=float(cy),
                level="major",
                sub_cluster_ids=[sub_clusters[i].id for i in members],
            )
        )

    subs = [
        sc.with_changes(level="sub", parent_cluster_id=f"major-{renumber[int(assignment[i])]}")
        for i, sc in enumerate(sub_clusters)
    ]

    logger.debug(f"Grouped {len(sub_clusters)} sub-clusters into {len(majors)} major clusters")
    return MetaGrouping(major_clusters=majors, sub_clusters=subs)
