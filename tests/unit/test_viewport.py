"""Unit tests for the camera."""

import pytest

from mindgalaxy.physics import Camera, ViewState
from mindgalaxy.physics.viewport import MAX_ZOOM, MIN_ZOOM


class TestCamera:
    """Tests for pan, zoom and projection."""

    def test_default_projection_centers_origin(self) -> None:
        """Test the world origin projects to the screen center."""
        camera = Camera()
        assert camera.world_to_screen(0.0, 0.0, 800, 600) == (400.0, 300.0)

    def test_pan(self) -> None:
        """Test panning offsets the view."""
        camera = Camera()
        camera.pan(10.0, -5.0)
        assert (camera.view.x, camera.view.y) == (10.0, -5.0)

    def test_zoom_clamped(self) -> None:
        """Test zoom stays within its limits."""
        camera = Camera()
        camera.zoom_at(1000.0)
        assert camera.view.zoom == MAX_ZOOM
        camera.zoom_at(1e-6)
        assert camera.view.zoom == MIN_ZOOM

    def test_zoom_keeps_anchor_fixed(self) -> None:
        """Test the point under the cursor stays put while zooming."""
        camera = Camera(ViewState(x=20.0, y=-10.0, zoom=1.0, rotation=30.0))
        anchor = camera.screen_to_world(500.0, 200.0, 800, 600)
        camera.zoom_at(2.0, 500.0, 200.0, 800, 600)
        sx, sy = camera.world_to_screen(anchor[0], anchor[1], 800, 600)
        assert sx == pytest.approx(500.0)
        assert sy == pytest.approx(200.0)
        assert camera.view.zoom == 2.0

    def test_zoom_rejects_non_positive(self) -> None:
        """Test a non-positive zoom factor is rejected."""
        with pytest.raises(ValueError):
            Camera().zoom_at(0.0)

    def test_projection_inverse(self) -> None:
        """Test screen_to_world inverts world_to_screen."""
        camera = Camera(ViewState(x=13.0, y=7.0, zoom=2.5, rotation=75.0))
        sx, sy = camera.world_to_screen(123.0, -45.0, 1024, 768)
        x, y = camera.screen_to_world(sx, sy, 1024, 768)
        assert x == pytest.approx(123.0)
        assert y == pytest.approx(-45.0)


class TestRotationInertia:
    """Tests for angular velocity decay."""

    def test_inertia_decays(self) -> None:
        """Test rotation keeps spinning and decays after release."""
        camera = Camera()
        camera.begin_drag()
        camera.rotate_by(10.0)
        camera.end_drag()
        assert camera.tick() is True
        assert camera.angular_velocity == pytest.approx(9.5)
        assert camera.view.rotation == pytest.approx(19.5)

    def test_inertia_stops(self) -> None:
        """Test inertia stops below the minimum speed."""
        camera = Camera()
        camera.rotate_by(1.0)
        for _ in range(1000):
            camera.tick()
        assert camera.angular_velocity == 0.0
        assert camera.tick() is False

    def test_no_inertia_while_dragging(self) -> None:
        """Test the view does not coast during a drag."""
        camera = Camera()
        camera.begin_drag()
        camera.rotate_by(5.0)
        assert camera.tick() is False
        assert camera.view.rotation == 5.0

    def test_rotation_wraps(self) -> None:
        """Test rotation wraps into [0, 360)."""
        camera = Camera()
        camera.rotate_by(350.0)
        camera.rotate_by(20.0)
        assert camera.view.rotation == pytest.approx(10.0)
