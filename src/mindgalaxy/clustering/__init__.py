"""Cluster detection, meta-grouping and summary tracking."""

from mindgalaxy.clustering.detector import (
    DEFAULT_THRESHOLD,
    ORPHAN_CLUSTER_ID,
    ClusterGroups,
    build_clusters,
    centroid,
    detect_clusters,
)
from mindgalaxy.clustering.meta import MetaGrouping, group_into_meta_clusters
from mindgalaxy.clustering.tracker import ClusterTracker

__all__ = [
    "DEFAULT_THRESHOLD",
    "ORPHAN_CLUSTER_ID",
    "ClusterGroups",
    "build_clusters",
    "centroid",
    "detect_clusters",
    "MetaGrouping",
    "group_into_meta_clusters",
    "ClusterTracker",
]
