"""Cluster model - detected or synthesized groupings of thoughts."""

from dataclasses import dataclass, field, replace
from typing import Literal

ClusterLevel = Literal["sub", "major"]


@dataclass(frozen=True)
class ClusterSummary:
    """Human-readable theme attached to a cluster once summarization resolves."""

    theme: str
    description: str

    def to_dict(self) -> dict:
        return {"theme": self.theme, "description": self.description}


@dataclass
class Cluster:
    """
    A group of thoughts.

    Sub-clusters come from connected-component detection; major clusters
    bucket sub-clusters spatially. `summary` stays None until the
    summarization task for this cluster id resolves.
    """

    id: str
    node_ids: list[str]
    center_x: float = 0.0
    center_y: float = 0.0
    level: ClusterLevel = "sub"
    summary: ClusterSummary | None = None

    # Hierarchy
    sub_cluster_ids: list[str] = field(default_factory=list)  # major only
    parent_cluster_id: str | None = None  # sub only

    is_orphan_group: bool = False  # Catch-all for thoughts without strong links

    def with_changes(self, **changes) -> "Cluster":
        """Copy with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "node_ids": list(self.node_ids),
            "center_x": self.center_x,
            "center_y": self.center_y,
            "level": self.level,
            "summary": self.summary.to_dict() if self.summary else None,
            "sub_cluster_ids": list(self.sub_cluster_ids),
            "parent_cluster_id": self.parent_cluster_id,
            "is_orphan_group": self.is_orphan_group,
        }
