"""Galaxy session: the thought graph, its layout, clusters and camera.

The graph store is the source of truth. Every mutation notifies the session,
which reconciles the layout engine and rebuilds clusters before returning,
so the next frame always sees the edited graph.
"""

import logging
import math
import random

from mindgalaxy.clustering import ClusterTracker
from mindgalaxy.config import Settings, settings
from mindgalaxy.graph import GraphError, ThoughtGraph, seed_thoughts, solid_gradient
from mindgalaxy.models import ClusterSummary, Thought, get_persona, normalize_connections
from mindgalaxy.physics import Camera, LayoutEngine, StepResult
from mindgalaxy.services import ThoughtServices, create_services

logger = logging.getLogger(__name__)

# Spawn placement, in world units
CONNECTED_JITTER = 80.0
SPARK_JITTER = 100.0
RING_MIN_RADIUS = 250.0
RING_SPREAD = 200.0


class UnknownPersonaError(LookupError):
    """A persona id that is not one of the thinkers."""


class Galaxy:
    """One user's galaxy: store, layout engine, cluster tracker and camera."""

    def __init__(
        self,
        services: ThoughtServices | None = None,
        graph: ThoughtGraph | None = None,
        engine: LayoutEngine | None = None,
        app_settings: Settings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = app_settings or settings
        self.services = services or create_services(self.settings)
        self.graph = graph or ThoughtGraph()
        self.engine = engine or LayoutEngine(app_settings=self.settings)
        self.camera = Camera()
        self._rng = rng or random.Random()
        self.tracker = ClusterTracker(
            self.services,
            threshold=self.settings.cluster_threshold,
            max_major=self.settings.max_major_clusters,
            summary_timeout=self.settings.summary_timeout,
            rng=self._rng,
        )
        self.selected_id: str | None = None

        self.graph.subscribe(self._on_graph_changed)
        self.engine.add_frame_listener(self._on_frame)
        self._reconcile()

    @classmethod
    def seeded(
        cls,
        services: ThoughtServices | None = None,
        app_settings: Settings | None = None,
        rng: random.Random | None = None,
    ) -> "Galaxy":
        """A galaxy pre-filled with the demo thoughts."""
        rng = rng or random.Random()
        graph = ThoughtGraph(seed_thoughts(rng))
        return cls(services=services, graph=graph, app_settings=app_settings, rng=rng)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the frame loop and request summaries for the current clusters."""
        self.engine.start()
        self.tracker.request_summaries()

    async def close(self) -> None:
        await self.engine.stop()
        await self.services.close()

    # ------------------------------------------------------------------
    # Reconciliation
    # ------------------------------------------------------------------

    def _on_graph_changed(self, graph: ThoughtGraph) -> None:
        self._reconcile()

    def _reconcile(self) -> None:
        snapshot = self.graph.snapshot()
        self.engine.sync_from_graph(snapshot)
        self.tracker.recompute(snapshot, self.engine.positions())
        if self.selected_id is not None and self.selected_id not in self.graph:
            self.selected_id = None

    def _on_frame(self, frame: int, result: StepResult) -> None:
        self.camera.tick()
        if frame % self.settings.centroid_refresh_frames == 0:
            self.tracker.refresh_centroids(self.engine.positions())

    # ------------------------------------------------------------------
    # Thought operations
    # ------------------------------------------------------------------

    async def submit_thought(self, text: str) -> Thought:
        """Create a thought, link it to related ones and place it near them."""
        text = text.strip()
        if not text:
            raise GraphError("Thought content must not be empty")

        vibe = await self.services.assign_vibe(text)
        proposals = await self.services.propose_connections(text, self.graph.snapshot())
        thought_id = self.graph.new_id()
        # The graph may have changed while the collaborators were working
        proposals = normalize_connections(
            thought_id, {nid: w for nid, w in proposals.items() if nid in self.graph}
        )

        x, y = self._spawn_position(list(proposals))
        thought = Thought(
            id=thought_id,
            content=text,
            x=x,
            y=y,
            connections=proposals,
            color=vibe.color,
            gradient=vibe.gradient,
        )
        self.graph.add(thought, mutual=True)
        self.selected_id = thought.id

        logger.info(f"Thought {thought.id} added with {len(thought.connections)} connections")
        return thought

    def _spawn_position(self, connected_ids: list[str]) -> tuple[float, float]:
        if len(self.graph) == 0:
            return 0.0, 0.0

        positions = [self.engine.position_of(nid) for nid in connected_ids]
        positions = [p for p in positions if p is not None]
        if positions:
            cx = sum(p[0] for p in positions) / len(positions)
            cy = sum(p[1] for p in positions) / len(positions)
            return (
                cx + self._rng.uniform(-CONNECTED_JITTER, CONNECTED_JITTER),
                cy + self._rng.uniform(-CONNECTED_JITTER, CONNECTED_JITTER),
            )

        radius = RING_MIN_RADIUS + self._rng.random() * RING_SPREAD
        theta = self._rng.random() * 2 * math.pi
        return radius * math.cos(theta), radius * math.sin(theta)

    async def add_spark(self, origin_id: str, persona_id: str) -> Thought:
        """Ask a thinker to react to a thought; the reaction becomes a linked thought."""
        origin = self.graph.get(origin_id)
        persona = get_persona(persona_id)
        if persona is None:
            raise UnknownPersonaError(persona_id)

        reaction = await self.services.react_as_persona(origin.content, persona)

        # Raises if the origin was deleted while waiting for the reaction
        self.graph.get(origin_id)
        ox, oy = self.engine.position_of(origin_id) or (origin.x, origin.y)
        spark = Thought(
            id=self.graph.new_id(),
            content=reaction,
            x=ox + self._rng.uniform(-SPARK_JITTER, SPARK_JITTER),
            y=oy + self._rng.uniform(-SPARK_JITTER, SPARK_JITTER),
            connections={origin_id: 1.0},
            color=persona.color,
            gradient=solid_gradient(persona.color),
        )
        self.graph.add(spark, mutual=True)
        self.selected_id = spark.id

        logger.info(f"Spark {spark.id} from {persona.id} on {origin_id}")
        return spark

    def update_thought(self, thought_id: str, content: str) -> Thought:
        content = content.strip()
        if not content:
            raise GraphError("Thought content must not be empty")
        return self.graph.update_content(thought_id, content)

    def delete_thought(self, thought_id: str) -> Thought:
        return self.graph.delete(thought_id)

    def connect(
        self, source_id: str, target_id: str, weight: float = 1.0, mutual: bool = True
    ) -> None:
        self.graph.connect(source_id, target_id, weight, mutual=mutual)

    async def search(self, query: str) -> list[Thought]:
        """Thoughts related to the query, best match first."""
        if not query.strip():
            return []
        ids = await self.services.search_semantic(query, self.graph.snapshot())
        return [self.graph.get(tid) for tid in ids if tid in self.graph]

    def select(self, thought_id: str | None) -> str | None:
        if thought_id is not None:
            self.graph.get(thought_id)
        self.selected_id = thought_id
        return thought_id

    async def neighborhood_summary(self, thought_id: str | None = None) -> ClusterSummary | None:
        """Theme of a thought (default: the selected one) and its direct links."""
        thought_id = thought_id or self.selected_id
        if thought_id is None:
            return None
        self.graph.get(thought_id)
        return await self.tracker.summarize_neighborhood(thought_id)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def nodes(self) -> list[dict]:
        """Thoughts merged with their live physics position and sleep flag."""
        physics = {n.id: n for n in self.engine.snapshot()}
        nodes = []
        for thought in self.graph:
            data = thought.to_dict()
            node = physics.get(thought.id)
            if node is not None:
                data.update(node.to_dict())
            else:
                data["is_sleeping"] = False
            nodes.append(data)
        return nodes
