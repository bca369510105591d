"""Unit tests for the layout engine."""

import asyncio
import logging

import pytest

from mindgalaxy.models import Thought
from mindgalaxy.physics import LayoutEngine, PhysicsConfig


@pytest.fixture
def engine(test_settings) -> LayoutEngine:
    engine = LayoutEngine(app_settings=test_settings)
    engine.sync_from_graph([
        Thought(id="a", content="A", x=0.0, y=0.0, connections={"b": 1.0}),
        Thought(id="b", content="B", x=80.0, y=0.0, connections={"a": 1.0}),
    ])
    return engine


class TestStepping:
    """Tests for synchronous stepping."""

    def test_step_advances_frame(self, engine: LayoutEngine) -> None:
        """Test each step increments the frame counter."""
        engine.step()
        engine.step()
        assert engine.frame == 2

    def test_frame_listener_called(self, engine: LayoutEngine) -> None:
        """Test frame listeners get the frame number and step result."""
        frames = []
        engine.add_frame_listener(lambda frame, result: frames.append((frame, result.awake)))
        engine.run_steps(3)
        assert [f for f, _ in frames] == [1, 2, 3]
        assert frames[0][1] == 2

    def test_failing_listener_does_not_stop_others(self, engine: LayoutEngine, caplog) -> None:
        """Test a raising frame listener is logged and later listeners still run."""
        frames = []

        def broken(frame, result):
            raise RuntimeError("boom")

        engine.add_frame_listener(broken)
        engine.add_frame_listener(lambda frame, result: frames.append(frame))
        with caplog.at_level(logging.ERROR, logger="mindgalaxy.physics.engine"):
            engine.run_steps(2)
        assert frames == [1, 2]
        assert "Frame listener failed" in caplog.text

    def test_settles_eventually(self, engine: LayoutEngine) -> None:
        """Test a connected pair eventually settles."""
        engine.run_steps(5000)
        assert engine.is_settled

    def test_sync_removes_nodes(self, engine: LayoutEngine) -> None:
        """Test syncing a smaller graph removes nodes."""
        engine.sync_from_graph([Thought(id="a", content="A")])
        assert len(engine) == 1
        assert engine.position_of("b") is None


class TestDragControl:
    """Tests for the drag API."""

    def test_set_drag_target_unknown(self, engine: LayoutEngine) -> None:
        """Test dragging an unknown node is refused."""
        assert engine.set_drag_target("ghost") is False
        assert engine.drag_target is None

    def test_move_dragged(self, engine: LayoutEngine) -> None:
        """Test the dragged node stays where the pointer put it."""
        assert engine.set_drag_target("a") is True
        assert engine.move_dragged(-50.0, 25.0) is True
        engine.step()
        assert engine.position_of("a") == (-50.0, 25.0)

    def test_move_without_drag(self, engine: LayoutEngine) -> None:
        """Test moving without a drag target is refused."""
        assert engine.move_dragged(1.0, 1.0) is False

    def test_not_settled_while_dragging(self, engine: LayoutEngine) -> None:
        """Test the layout is not settled during a drag."""
        engine.run_steps(5000)
        engine.set_drag_target("a")
        assert engine.is_settled is False
        engine.release_drag()
        assert engine.drag_target is None

    def test_deleting_dragged_node_releases(self, engine: LayoutEngine) -> None:
        """Test removing the dragged node ends the drag."""
        engine.set_drag_target("b")
        engine.sync_from_graph([Thought(id="a", content="A")])
        assert engine.drag_target is None


class TestConfigControl:
    """Tests for live tuning."""

    def test_update_config_wakes_all(self, engine: LayoutEngine) -> None:
        """Test a tuning change wakes every node."""
        engine.run_steps(5000)
        config = engine.update_config(repulsion=100.0)
        assert config.repulsion == 100.0
        assert all(not n.is_sleeping for n in engine.snapshot())

    def test_update_config_invalid(self, engine: LayoutEngine) -> None:
        """Test an invalid tuning change is rejected and not applied."""
        with pytest.raises(ValueError):
            engine.update_config(damping=2.0)
        assert engine.config.damping == 0.88

    def test_reset_config(self, engine: LayoutEngine) -> None:
        """Test reset restores the default tunables."""
        engine.update_config(stiffness=0.9)
        assert engine.reset_config() == PhysicsConfig.from_settings(engine._settings)


class TestFrameLoop:
    """Tests for the asyncio frame loop."""

    @pytest.mark.asyncio
    async def test_start_and_stop(self, engine: LayoutEngine) -> None:
        """Test the frame loop runs until stopped."""
        engine.start()
        assert engine.is_running
        await asyncio.sleep(0.05)
        await engine.stop()
        assert not engine.is_running
        assert engine.frame > 0

    @pytest.mark.asyncio
    async def test_start_twice_is_noop(self, engine: LayoutEngine) -> None:
        """Test a second start keeps the running task."""
        engine.start()
        task = engine._task
        engine.start()
        assert engine._task is task
        await engine.stop()

    @pytest.mark.asyncio
    async def test_stop_without_start(self, engine: LayoutEngine) -> None:
        """Test stop before start does nothing."""
        await engine.stop()
        assert engine.frame == 0

    @pytest.mark.asyncio
    async def test_loop_survives_failing_listener(self, engine: LayoutEngine) -> None:
        """Test the frame loop keeps running when a listener raises."""

        def broken(frame, result):
            raise RuntimeError("boom")

        engine.add_frame_listener(broken)
        engine.start()
        await asyncio.sleep(0.05)
        assert engine.is_running
        assert engine.frame > 1
        await engine.stop()
        assert not engine.is_running
