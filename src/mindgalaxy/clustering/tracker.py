"""Current cluster set plus asynchronous summaries.

Clusters are rebuilt from scratch on every graph change. Each rebuilt
cluster gets a detached summarization task keyed by its id; a task that
finishes after another rebuild applies its summary only if that id still
exists, otherwise the result is dropped. Tasks are never cancelled.
"""

import asyncio
import logging
import random
from collections.abc import Mapping, Sequence

from mindgalaxy.clustering.detector import build_clusters, centroid, detect_clusters
from mindgalaxy.clustering.meta import MetaGrouping, group_into_meta_clusters
from mindgalaxy.config import settings
from mindgalaxy.models import Cluster, ClusterSummary, Thought
from mindgalaxy.services.base import ThoughtServices
from mindgalaxy.services.themes import MISCELLANEOUS

logger = logging.getLogger(__name__)

# Centroid shift (world units) that counts as a material move
CENTROID_EPSILON = 1.0


class ClusterTracker:
    """Owns sub and major clusters and their pending summaries."""

    def __init__(
        self,
        services: ThoughtServices,
        threshold: float | None = None,
        max_major: int | None = None,
        summary_timeout: float | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.services = services
        self.threshold = threshold if threshold is not None else settings.cluster_threshold
        self.max_major = max_major or settings.max_major_clusters
        self.summary_timeout = summary_timeout or settings.summary_timeout
        self._rng = rng or random.Random()

        self._thoughts: dict[str, Thought] = {}
        self._subs: dict[str, Cluster] = {}
        self._majors: dict[str, Cluster] = {}
        self._tasks: set[asyncio.Task] = set()
        self.generation = 0
        self._requested_generation: int | None = None

    @property
    def sub_clusters(self) -> list[Cluster]:
        return list(self._subs.values())

    @property
    def major_clusters(self) -> list[Cluster]:
        return list(self._majors.values())

    @property
    def pending_summaries(self) -> int:
        return len(self._tasks)

    def get(self, cluster_id: str) -> Cluster | None:
        return self._subs.get(cluster_id) or self._majors.get(cluster_id)

    def cluster_of(self, thought_id: str) -> Cluster | None:
        """The sub-cluster (or orphan group) holding a thought."""
        for cluster in self._subs.values():
            if thought_id in cluster.node_ids:
                return cluster
        return None

    def recompute(
        self,
        thoughts: Sequence[Thought],
        positions: Mapping[str, tuple[float, float]],
    ) -> MetaGrouping:
        """Rebuild clusters from a snapshot and schedule their summaries."""
        groups = detect_clusters(thoughts, self.threshold)
        subs = build_clusters(groups, positions)
        grouping = group_into_meta_clusters(subs, self.max_major, self._rng)

        self._thoughts = {t.id: t for t in thoughts}
        self._subs = {c.id: c for c in grouping.sub_clusters}
        self._majors = {c.id: c for c in grouping.major_clusters}
        self.generation += 1

        logger.info(
            f"Clusters rebuilt (generation {self.generation}): "
            f"{len(self._subs)} sub, {len(self._majors)} major"
        )

        self.request_summaries()
        return grouping

    def request_summaries(self) -> int:
        """Schedule a summary task for every current cluster; returns the count.

        Each cluster generation is summarized at most once, so a second
        request before the next rebuild schedules nothing.
        """
        if self._requested_generation == self.generation:
            logger.debug(f"Summaries for generation {self.generation} already requested")
            return 0
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; cluster summaries not requested")
            return 0

        self._requested_generation = self.generation

        for cluster in list(self._subs.values()) + list(self._majors.values()):
            texts = [self._thoughts[nid].content for nid in cluster.node_ids if nid in self._thoughts]
            task = loop.create_task(self._summarize(cluster.id, texts))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
        return len(self._subs) + len(self._majors)

    async def _summarize(self, cluster_id: str, texts: list[str]) -> None:
        try:
            summary = await asyncio.wait_for(
                self.services.summarize_cluster(texts),
                timeout=self.summary_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Summary for {cluster_id} timed out after {self.summary_timeout}s")
            summary = MISCELLANEOUS
        except Exception as e:
            logger.warning(f"Summary for {cluster_id} failed: {e}")
            summary = MISCELLANEOUS
        self.apply_summary(cluster_id, summary)

    def apply_summary(self, cluster_id: str, summary: ClusterSummary) -> bool:
        """Attach a summary if the cluster id is still current."""
        for clusters in (self._subs, self._majors):
            cluster = clusters.get(cluster_id)
            if cluster is not None:
                cluster.summary = summary
                return True
        logger.debug(f"Dropped summary for vanished cluster {cluster_id}")
        return False

    async def wait_for_summaries(self) -> None:
        """Wait until every summary scheduled so far has resolved."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def refresh_centroids(self, positions: Mapping[str, tuple[float, float]]) -> int:
        """Recompute centroids from current positions; returns how many moved."""
        moved = 0
        for cluster in list(self._subs.values()) + list(self._majors.values()):
            cx, cy = centroid(cluster.node_ids, positions)
            if abs(cx - cluster.center_x) >= CENTROID_EPSILON or abs(cy - cluster.center_y) >= CENTROID_EPSILON:
                cluster.center_x, cluster.center_y = cx, cy
                moved += 1
        return moved

    async def summarize_neighborhood(self, thought_id: str) -> ClusterSummary | None:
        """Theme of a thought and the thoughts it links to.

        Uses the snapshot from the last recompute. Returns None for unknown
        ids and for thoughts without neighbors.
        """
        thought = self._thoughts.get(thought_id)
        if thought is None:
            return None
        neighbors = [t for t in self._thoughts.values() if t.id in thought.connections]
        if not neighbors:
            return None

        texts = [thought.content] + [t.content for t in neighbors]
        try:
            return await asyncio.wait_for(
                self.services.summarize_cluster(texts),
                timeout=self.summary_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Neighborhood summary for {thought_id} timed out")
        except Exception as e:
            logger.warning(f"Neighborhood summary for {thought_id} failed: {e}")
        return MISCELLANEOUS
