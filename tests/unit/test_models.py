"""Unit tests for data models."""

import pytest

from mindgalaxy.models import (
    THINKERS,
    Cluster,
    ClusterSummary,
    Thought,
    effective_weight,
    get_persona,
    normalize_connections,
    weight_band,
)


class TestThought:
    """Tests for Thought model."""

    def test_defaults(self) -> None:
        """Test default layout fields of a new thought."""
        thought = Thought(id="t1", content="Hello")
        assert thought.x == 0.0 and thought.y == 0.0
        assert thought.vx == 0.0 and thought.vy == 0.0
        assert thought.mass == 1.0
        assert thought.connections == {}
        assert thought.created_at > 0

    def test_to_dict(self) -> None:
        """Test conversion to dictionary."""
        thought = Thought(id="t1", content="Hello", x=1.5, connections={"t2": 0.8})
        data = thought.to_dict()
        assert data["id"] == "t1"
        assert data["x"] == 1.5
        assert data["connections"] == {"t2": 0.8}

    def test_from_dict_list_connections(self) -> None:
        """Unweighted connection lists become weight 1.0."""
        thought = Thought.from_dict({"id": "t1", "content": "x", "connections": ["t2", "t3"]})
        assert thought.connections == {"t2": 1.0, "t3": 1.0}

    def test_from_dict_roundtrip(self) -> None:
        """Test a thought survives to_dict and from_dict unchanged."""
        thought = Thought(id="t1", content="Hello", x=3.0, y=-2.0, connections={"t2": 0.4})
        restored = Thought.from_dict(thought.to_dict())
        assert restored == thought

    def test_self_connection_dropped(self) -> None:
        """Test a thought cannot hold a connection to itself."""
        thought = Thought(id="t1", content="x", connections={"t1": 0.9, "t2": 0.5})
        assert thought.connections == {"t2": 0.5}


class TestConnections:
    """Tests for connection helpers."""

    def test_normalize_drops_non_positive(self) -> None:
        """Test zero and negative weights are dropped."""
        assert normalize_connections("a", {"b": 0.0, "c": -1.0, "d": 0.3}) == {"d": 0.3}

    def test_normalize_clips_above_one(self) -> None:
        """Test weights above one are clipped to one."""
        assert normalize_connections("a", {"b": 2.5}) == {"b": 1.0}

    def test_normalize_empty(self) -> None:
        """Test missing or empty payloads give no connections."""
        assert normalize_connections("a", None) == {}
        assert normalize_connections("a", []) == {}

    def test_normalize_drops_non_finite(self) -> None:
        """Test NaN and infinite weights are dropped."""
        raw = {"b": float("nan"), "c": float("inf"), "d": 0.5}
        assert normalize_connections("a", raw) == {"d": 0.5}

    def test_effective_weight_is_max(self) -> None:
        """Test the pair weight is the stronger of both directions."""
        a = Thought(id="a", content="", connections={"b": 0.3})
        b = Thought(id="b", content="", connections={"a": 0.8})
        assert effective_weight(a, b) == 0.8
        assert effective_weight(b, a) == 0.8

    def test_effective_weight_one_directional(self) -> None:
        """Test a single directed entry sets the pair weight."""
        a = Thought(id="a", content="", connections={"b": 0.7})
        b = Thought(id="b", content="")
        assert effective_weight(a, b) == 0.7

    def test_effective_weight_unconnected(self) -> None:
        """Test unconnected thoughts have zero pair weight."""
        assert effective_weight(Thought(id="a", content=""), Thought(id="b", content="")) == 0.0

    @pytest.mark.parametrize(
        "weight,band",
        [(1.0, "strong"), (0.6, "strong"), (0.59, "weak"), (0.3, "weak"), (0.29, "faint")],
    )
    def test_weight_band(self, weight: float, band: str) -> None:
        """Test weights map onto strong, weak and faint bands."""
        assert weight_band(weight) == band


class TestCluster:
    """Tests for Cluster model."""

    def test_to_dict_without_summary(self) -> None:
        """Test a fresh sub-cluster serializes without a summary."""
        cluster = Cluster(id="sub-0", node_ids=["a", "b"], center_x=1.0, center_y=2.0)
        data = cluster.to_dict()
        assert data["summary"] is None
        assert data["level"] == "sub"
        assert data["is_orphan_group"] is False

    def test_to_dict_with_summary(self) -> None:
        """Test the summary is nested in the dictionary."""
        cluster = Cluster(id="sub-0", node_ids=["a"])
        cluster.summary = ClusterSummary(theme="Food & Cooking", description="Culinary")
        assert cluster.to_dict()["summary"] == {"theme": "Food & Cooking", "description": "Culinary"}

    def test_with_changes_copies(self) -> None:
        """Test with_changes leaves the original cluster untouched."""
        cluster = Cluster(id="sub-0", node_ids=["a"])
        changed = cluster.with_changes(parent_cluster_id="major-0")
        assert changed.parent_cluster_id == "major-0"
        assert cluster.parent_cluster_id is None


class TestPersonas:
    """Tests for the thinker table."""

    def test_five_thinkers(self) -> None:
        """Test the thinker table order."""
        assert [p.id for p in THINKERS] == ["jobs", "feynman", "jung", "kahlo", "musk"]

    def test_get_persona(self) -> None:
        """Test persona lookup by id."""
        persona = get_persona("feynman")
        assert persona is not None
        assert persona.name == "Richard Feynman"

    def test_get_unknown_persona(self) -> None:
        """Test an unknown persona id gives None."""
        assert get_persona("nobody") is None
