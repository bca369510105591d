"""2D camera: pan, zoom and an in-plane rotation with inertia."""

import math
from dataclasses import asdict, dataclass

MIN_ZOOM = 0.1
MAX_ZOOM = 5.0
ROTATION_DECAY = 0.95  # Angular velocity multiplier per frame
ROTATION_REST = 0.001  # Degrees per frame treated as stopped


@dataclass
class ViewState:
    """Camera parameters consumed by the screen projection."""

    x: float = 0.0  # Pan offset in screen pixels
    y: float = 0.0
    zoom: float = 1.0
    rotation: float = 0.0  # Degrees

    def to_dict(self) -> dict:
        return asdict(self)


class Camera:
    """
    Holds the view state and its angular inertia.

    Interaction handlers call pan/zoom/rotate; the frame loop calls tick().
    World origin maps to the viewport center when pan is zero.
    """

    def __init__(self, view: ViewState | None = None) -> None:
        self.view = view or ViewState()
        self.angular_velocity = 0.0
        self.is_dragging = False

    def pan(self, dx: float, dy: float) -> ViewState:
        self.view.x += dx
        self.view.y += dy
        return self.view

    def zoom_at(
        self,
        factor: float,
        screen_x: float = 0.0,
        screen_y: float = 0.0,
        width: float = 0.0,
        height: float = 0.0,
    ) -> ViewState:
        """Scale the zoom, keeping the world point under (screen_x, screen_y) fixed."""
        if factor <= 0:
            raise ValueError(f"Zoom factor must be positive, got {factor}")
        anchor = self.screen_to_world(screen_x, screen_y, width, height)
        self.view.zoom = min(max(self.view.zoom * factor, MIN_ZOOM), MAX_ZOOM)

        # Re-pan so the anchor projects back to where it was
        sx, sy = self.world_to_screen(anchor[0], anchor[1], width, height)
        self.view.x += screen_x - sx
        self.view.y += screen_y - sy
        return self.view

    def begin_drag(self) -> None:
        self.is_dragging = True
        self.angular_velocity = 0.0

    def rotate_by(self, degrees: float) -> ViewState:
        """Rotate under the pointer; the last delta becomes the inertia."""
        self.view.rotation = (self.view.rotation + degrees) % 360.0
        self.angular_velocity = degrees
        return self.view

    def end_drag(self) -> None:
        self.is_dragging = False

    def tick(self) -> bool:
        """Apply one frame of rotational inertia. Returns True if the view moved."""
        if self.is_dragging:
            return False
        self.angular_velocity *= ROTATION_DECAY
        if abs(self.angular_velocity) <= ROTATION_REST:
            self.angular_velocity = 0.0
            return False
        self.view.rotation = (self.view.rotation + self.angular_velocity) % 360.0
        return True

    def world_to_screen(
        self, x: float, y: float, width: float = 0.0, height: float = 0.0
    ) -> tuple[float, float]:
        theta = math.radians(self.view.rotation)
        cos_t, sin_t = math.cos(theta), math.sin(theta)
        rx = x * cos_t - y * sin_t
        ry = x * sin_t + y * cos_t
        return (
            width / 2 + self.view.x + rx * self.view.zoom,
            height / 2 + self.view.y + ry * self.view.zoom,
        )

    def screen_to_world(
        self, sx: float, sy: float, width: float = 0.0, height: float = 0.0
    ) -> tuple[float, float]:
        rx = (sx - width / 2 - self.view.x) / self.view.zoom
        ry = (sy - height / 2 - self.view.y) / self.view.zoom
        theta = math.radians(self.view.rotation)
        cos_t, sin_t = math.cos(theta), math.sin(theta)
        return (rx * cos_t + ry * sin_t, -rx * sin_t + ry * cos_t)
