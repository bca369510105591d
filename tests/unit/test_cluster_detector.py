"""Unit tests for cluster detection."""

import random

from mindgalaxy.clustering import (
    ORPHAN_CLUSTER_ID,
    build_clusters,
    centroid,
    detect_clusters,
)
from mindgalaxy.models import Thought


class TestDetectClusters:
    """Tests for connected components over strong links."""

    def test_chain_and_orphan(self, triangle_thoughts) -> None:
        """A-B at 0.9 and B-C at 0.7 chain together; D is left alone."""
        groups = detect_clusters(triangle_thoughts, 0.6)
        assert groups.clusters == [["a", "b", "c"]]
        assert groups.orphans == ["d"]

    def test_weak_links_ignored(self) -> None:
        """Test links below the threshold form no cluster."""
        thoughts = [
            Thought(id="a", content="", connections={"b": 0.5}),
            Thought(id="b", content=""),
            Thought(id="c", content="", connections={"a": 0.59}),
        ]
        groups = detect_clusters(thoughts, 0.6)
        assert groups.clusters == []
        assert groups.orphans == ["a", "b", "c"]

    def test_threshold_is_inclusive(self) -> None:
        """Test a link exactly at the threshold counts."""
        thoughts = [
            Thought(id="a", content="", connections={"b": 0.6}),
            Thought(id="b", content=""),
        ]
        assert detect_clusters(thoughts, 0.6).clusters == [["a", "b"]]

    def test_one_direction_suffices(self) -> None:
        """Test a single directed strong entry joins both thoughts."""
        thoughts = [
            Thought(id="a", content=""),
            Thought(id="b", content="", connections={"a": 0.9}),
        ]
        assert detect_clusters(thoughts).partition() == {frozenset({"a", "b"})}

    def test_dangling_connection_ignored(self) -> None:
        """Test connections to absent ids are ignored."""
        thoughts = [
            Thought(id="a", content="", connections={"ghost": 1.0}),
            Thought(id="b", content=""),
        ]
        groups = detect_clusters(thoughts)
        assert groups.clusters == []
        assert "ghost" not in groups.orphans

    def test_empty_input(self) -> None:
        """Test no thoughts gives no groups."""
        groups = detect_clusters([])
        assert groups.clusters == []
        assert groups.orphans == []

    def test_lone_thought_is_orphan(self) -> None:
        """Test a single thought lands in the orphan group like any singleton."""
        one = detect_clusters([Thought(id="a", content="")])
        two = detect_clusters([Thought(id="a", content=""), Thought(id="b", content="")])
        assert one.clusters == []
        assert one.orphans == ["a"]
        assert two.orphans == ["a", "b"]

    def test_order_independent(self, triangle_thoughts) -> None:
        """Test the partition does not depend on input order."""
        expected = detect_clusters(triangle_thoughts).partition()
        shuffled = list(triangle_thoughts)
        for seed in range(5):
            random.Random(seed).shuffle(shuffled)
            assert detect_clusters(shuffled).partition() == expected

    def test_groups_cover_every_thought_once(self, triangle_thoughts) -> None:
        """Test each thought lands in exactly one group."""
        groups = detect_clusters(triangle_thoughts)
        members = [nid for c in groups.clusters for nid in c] + groups.orphans
        assert sorted(members) == ["a", "b", "c", "d"]


class TestBuildClusters:
    """Tests for Cluster construction."""

    def test_ids_and_centroids(self, triangle_thoughts) -> None:
        """Test sub-cluster ids, centroids and the trailing orphan group."""
        positions = {t.id: (t.x, t.y) for t in triangle_thoughts}
        clusters = build_clusters(detect_clusters(triangle_thoughts), positions)

        assert [c.id for c in clusters] == ["sub-0", ORPHAN_CLUSTER_ID]
        assert (clusters[0].center_x, clusters[0].center_y) == (50.0, 0.0)
        assert clusters[1].is_orphan_group
        assert clusters[1].node_ids == ["d"]
        assert all(c.level == "sub" for c in clusters)

    def test_centroid_skips_unknown_positions(self) -> None:
        """Test members without a position are skipped."""
        assert centroid(["a", "ghost"], {"a": (4.0, 2.0)}) == (4.0, 2.0)

    def test_centroid_empty(self) -> None:
        """Test an empty member list centers at the origin."""
        assert centroid([], {}) == (0.0, 0.0)
