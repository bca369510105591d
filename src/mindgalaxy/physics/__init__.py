"""Force-directed layout: physics state, solver, frame loop and camera."""

from mindgalaxy.physics.config import TUNABLE_FIELDS, PhysicsConfig
from mindgalaxy.physics.engine import LayoutEngine
from mindgalaxy.physics.solver import ForceSolver, StepResult
from mindgalaxy.physics.state import NodeSnapshot, PhysicsNode, PhysicsState
from mindgalaxy.physics.viewport import Camera, ViewState

__all__ = [
    "PhysicsConfig",
    "TUNABLE_FIELDS",
    "PhysicsNode",
    "PhysicsState",
    "NodeSnapshot",
    "ForceSolver",
    "StepResult",
    "LayoutEngine",
    "Camera",
    "ViewState",
]
