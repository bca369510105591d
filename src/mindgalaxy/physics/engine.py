"""Layout engine: owns the physics state and runs the frame loop.

External code never touches the PhysicsNode map directly. It may sync the
graph, set or release a drag target, move the dragged node, tune the config
and read snapshots. Everything runs on one asyncio event loop, so a step
never interleaves with a graph sync or a cluster recompute.
"""

import asyncio
import logging
from collections.abc import Callable, Iterable

from mindgalaxy.config import Settings, settings
from mindgalaxy.models import Thought
from mindgalaxy.physics.config import PhysicsConfig
from mindgalaxy.physics.solver import ForceSolver, StepResult
from mindgalaxy.physics.state import NodeSnapshot, PhysicsState, SpawnFn

logger = logging.getLogger(__name__)

FrameListener = Callable[[int, StepResult], None]


class LayoutEngine:
    """Single writer of the physics state."""

    def __init__(
        self,
        config: PhysicsConfig | None = None,
        frame_rate: float | None = None,
        app_settings: Settings | None = None,
    ) -> None:
        self._settings = app_settings or settings
        self._default_config = config or PhysicsConfig.from_settings(self._settings)
        self.config = self._default_config
        self.frame_rate = frame_rate or self._settings.frame_rate

        self._state = PhysicsState()
        self._solver = ForceSolver()
        self._drag_target: str | None = None
        self._frame_listeners: list[FrameListener] = []
        self._task: asyncio.Task | None = None
        self.frame = 0

    def __len__(self) -> int:
        return len(self._state)

    # ------------------------------------------------------------------
    # Graph reconciliation
    # ------------------------------------------------------------------

    def sync_from_graph(self, thoughts: Iterable[Thought], spawn: SpawnFn | None = None) -> None:
        self._state.sync_from_graph(thoughts, spawn)
        if self._drag_target is not None and self._drag_target not in self._state:
            self._drag_target = None

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def step(self) -> StepResult:
        """Advance one frame and notify frame listeners."""
        result = self._solver.step(self._state, self.config, self._drag_target)
        self.frame += 1
        for listener in list(self._frame_listeners):
            try:
                listener(self.frame, result)
            except Exception:
                logger.exception(f"Frame listener failed on frame {self.frame}")
        return result

    def run_steps(self, count: int) -> StepResult:
        """Step synchronously `count` times (headless use)."""
        result = StepResult()
        for _ in range(count):
            result = self.step()
        return result

    def add_frame_listener(self, listener: FrameListener) -> None:
        self._frame_listeners.append(listener)

    @property
    def is_settled(self) -> bool:
        """True when every node sleeps and nothing is being dragged."""
        return self._drag_target is None and all(n.is_sleeping for n in self._state)

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the frame loop on the running event loop."""
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.info(f"Layout engine started at {self.frame_rate:.0f} fps")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info(f"Layout engine stopped after {self.frame} frames")

    async def _run(self) -> None:
        interval = 1.0 / self.frame_rate
        loop = asyncio.get_running_loop()
        while True:
            started = loop.time()
            self.step()
            elapsed = loop.time() - started
            if elapsed > interval:
                logger.debug(f"Frame {self.frame} took {elapsed * 1000:.1f}ms")
            await asyncio.sleep(max(0.0, interval - elapsed))

    # ------------------------------------------------------------------
    # Drag override
    # ------------------------------------------------------------------

    @property
    def drag_target(self) -> str | None:
        return self._drag_target

    def set_drag_target(self, node_id: str | None) -> bool:
        """Start (or with None, end) a drag. Unknown ids are ignored."""
        if node_id is None:
            self._drag_target = None
            return True
        node = self._state.get(node_id)
        if node is None:
            return False
        self._drag_target = node_id
        node.is_sleeping = False
        return True

    def move_dragged(self, x: float, y: float) -> bool:
        """Place the dragged node at a world position."""
        if self._drag_target is None:
            return False
        node = self._state.get(self._drag_target)
        if node is None:
            return False
        node.x, node.y = float(x), float(y)
        return True

    def release_drag(self) -> None:
        self._drag_target = None

    # ------------------------------------------------------------------
    # Config
    # ------------------------------------------------------------------

    def update_config(self, **changes: float) -> PhysicsConfig:
        """Apply live tuning; every node wakes so the change is visible."""
        self.config = self.config.updated(**changes)
        for node in self._state:
            node.is_sleeping = False
        return self.config

    def reset_config(self) -> PhysicsConfig:
        self.config = self._default_config
        for node in self._state:
            node.is_sleeping = False
        return self.config

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def snapshot(self) -> list[NodeSnapshot]:
        return self._state.snapshot()

    def positions(self) -> dict[str, tuple[float, float]]:
        return self._state.positions()

    def position_of(self, node_id: str) -> tuple[float, float] | None:
        node = self._state.get(node_id)
        return (node.x, node.y) if node else None
