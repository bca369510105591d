"""Unit tests for physics state reconciliation and config."""

import pytest

from mindgalaxy.models import Thought
from mindgalaxy.physics import PhysicsConfig, PhysicsState


def make_thoughts() -> list[Thought]:
    return [
        Thought(id="a", content="A", x=10.0, y=20.0, connections={"b": 1.0}),
        Thought(id="b", content="B", x=-5.0, y=0.0, connections={"a": 1.0}),
    ]


class TestSyncFromGraph:
    """Tests for PhysicsState.sync_from_graph."""

    def test_new_nodes_at_rest_and_awake(self) -> None:
        """Test new nodes start at their thought's position, at rest and awake."""
        state = PhysicsState()
        state.sync_from_graph(make_thoughts())
        node = state.get("a")
        assert (node.x, node.y) == (10.0, 20.0)
        assert (node.vx, node.vy) == (0.0, 0.0)
        assert node.is_sleeping is False

    def test_spawn_function_overrides_position(self) -> None:
        """Test a spawn callback places new nodes."""
        state = PhysicsState()
        state.sync_from_graph(make_thoughts(), spawn=lambda t: (1.0, 2.0))
        assert (state.get("b").x, state.get("b").y) == (1.0, 2.0)

    def test_idempotent(self) -> None:
        """Test syncing the same graph twice changes nothing."""
        state = PhysicsState()
        thoughts = make_thoughts()
        state.sync_from_graph(thoughts)
        before = state.snapshot()
        version = state.topology_version
        state.sync_from_graph(thoughts)
        assert state.snapshot() == before
        assert state.topology_version == version

    def test_existing_motion_preserved(self) -> None:
        """Test a resync keeps motion but takes fresh content."""
        state = PhysicsState()
        state.sync_from_graph(make_thoughts())
        node = state.get("a")
        node.x, node.vx = 99.0, 3.0

        thoughts = make_thoughts()
        thoughts[0].content = "A edited"
        state.sync_from_graph(thoughts)

        node = state.get("a")
        assert node.x == 99.0
        assert node.vx == 3.0
        assert node.content == "A edited"

    def test_stale_nodes_removed(self) -> None:
        """Test nodes for deleted thoughts are removed."""
        state = PhysicsState()
        state.sync_from_graph(make_thoughts())
        state.sync_from_graph(make_thoughts()[:1])
        assert "b" not in state
        assert len(state) == 1

    def test_connection_count_change_wakes(self) -> None:
        """Test gaining a connection wakes a sleeping node."""
        state = PhysicsState()
        state.sync_from_graph(make_thoughts())
        state.get("a").is_sleeping = True

        thoughts = make_thoughts()
        thoughts.append(Thought(id="c", content="C"))
        thoughts[0].connections["c"] = 0.5
        state.sync_from_graph(thoughts)
        assert state.get("a").is_sleeping is False

    def test_weight_change_keeps_sleep(self) -> None:
        """Same count, different weight: topology updates but the node may sleep on."""
        state = PhysicsState()
        state.sync_from_graph(make_thoughts())
        state.get("a").is_sleeping = True
        version = state.topology_version

        thoughts = make_thoughts()
        thoughts[0].connections["b"] = 0.4
        state.sync_from_graph(thoughts)

        assert state.get("a").is_sleeping is True
        assert state.get("a").connections == {"b": 0.4}
        assert state.topology_version == version + 1

    def test_positions(self) -> None:
        """Test the id to position mapping."""
        state = PhysicsState()
        state.sync_from_graph(make_thoughts())
        assert state.positions() == {"a": (10.0, 20.0), "b": (-5.0, 0.0)}


class TestPhysicsConfig:
    """Tests for PhysicsConfig validation and helpers."""

    def test_defaults(self) -> None:
        """Test default physics tunables."""
        config = PhysicsConfig()
        assert config.repulsion == 5000.0
        assert config.spring_length == 40.0
        assert config.damping == 0.88

    def test_spring_target_extremes(self) -> None:
        """Test rest length at full and zero weight."""
        config = PhysicsConfig()
        assert config.spring_target(1.0) == pytest.approx(12.0)
        assert config.spring_target(0.0) == pytest.approx(120.0)

    def test_spring_target_shorter_for_stronger(self) -> None:
        """Test stronger links rest closer."""
        config = PhysicsConfig()
        assert config.spring_target(0.9) < config.spring_target(0.5) < config.spring_target(0.1)

    def test_updated_partial(self) -> None:
        """Test updated changes only the named fields."""
        config = PhysicsConfig().updated(repulsion=100.0)
        assert config.repulsion == 100.0
        assert config.stiffness == 0.3

    def test_updated_unknown_field(self) -> None:
        """Test updating an unknown field is rejected."""
        with pytest.raises(ValueError):
            PhysicsConfig().updated(gravity=1.0)

    @pytest.mark.parametrize("damping", [0.0, 1.0, 1.5])
    def test_invalid_damping(self, damping: float) -> None:
        """Test damping outside (0, 1) is rejected."""
        with pytest.raises(ValueError):
            PhysicsConfig(damping=damping)

    def test_negative_rejected(self) -> None:
        """Test negative tunables are rejected."""
        with pytest.raises(ValueError):
            PhysicsConfig(repulsion=-1.0)

    def test_from_settings(self, test_settings) -> None:
        """Test config defaults come from settings."""
        config = PhysicsConfig.from_settings(test_settings)
        assert config.repulsion == test_settings.physics_repulsion
        assert config.sleep_speed == test_settings.physics_sleep_speed
