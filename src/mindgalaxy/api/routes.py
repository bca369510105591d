"""API routes for Mind Galaxy.

Provides:
- Graph editing: thoughts, sparks, connections, search
- Layout: graph snapshot, physics tuning, node dragging
- Camera: view state, pan, zoom, rotate
- Clusters and personas
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from mindgalaxy.galaxy import Galaxy, UnknownPersonaError
from mindgalaxy.graph import GraphError, UnknownThoughtError
from mindgalaxy.models import THINKERS, Cluster, Thought

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# Graph Models
# ============================================================================


class ThoughtInfo(BaseModel):
    """A thought with its live layout position."""

    id: str
    content: str
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    mass: float = 1.0
    connections: dict[str, float] = Field(default_factory=dict)
    color: str
    gradient: str
    created_at: int
    is_sleeping: bool = False


class GraphResponse(BaseModel):
    """Full graph snapshot for rendering."""

    nodes: list[ThoughtInfo]
    frame: int
    settled: bool
    selected_id: str | None = None


class ThoughtCreateRequest(BaseModel):
    text: str = Field(min_length=1)


class ThoughtUpdateRequest(BaseModel):
    content: str = Field(min_length=1)


class SparkRequest(BaseModel):
    persona_id: str


class ConnectionRequest(BaseModel):
    source_id: str
    target_id: str
    weight: float = Field(default=1.0, gt=0.0, le=1.0)
    mutual: bool = True


class SearchResponse(BaseModel):
    query: str
    results: list[ThoughtInfo]


class SummaryInfo(BaseModel):
    theme: str
    description: str


class ClusterInfo(BaseModel):
    """Sub or major cluster with its summary, once available."""

    id: str
    node_ids: list[str]
    center_x: float
    center_y: float
    level: str
    summary: SummaryInfo | None = None
    sub_cluster_ids: list[str] = Field(default_factory=list)
    parent_cluster_id: str | None = None
    is_orphan_group: bool = False


class ClustersResponse(BaseModel):
    sub_clusters: list[ClusterInfo]
    major_clusters: list[ClusterInfo]
    pending_summaries: int


class NeighborhoodResponse(BaseModel):
    thought_id: str
    summary: SummaryInfo | None = None


# ============================================================================
# Layout and Camera Models
# ============================================================================


class PhysicsUpdateRequest(BaseModel):
    """Live tuning; omitted fields keep their current value."""

    repulsion: float | None = Field(default=None, ge=0.0)
    spring_length: float | None = Field(default=None, ge=0.0)
    stiffness: float | None = Field(default=None, ge=0.0)
    damping: float | None = Field(default=None, gt=0.0, lt=1.0)
    center_gravity: float | None = Field(default=None, ge=0.0)


class DragStartRequest(BaseModel):
    thought_id: str


class DragMoveRequest(BaseModel):
    """Pointer position; in screen pixels when `screen` is set, else world units."""

    x: float
    y: float
    screen: bool = False
    width: float = 0.0
    height: float = 0.0


class PanRequest(BaseModel):
    dx: float
    dy: float


class ZoomRequest(BaseModel):
    factor: float = Field(gt=0.0)
    screen_x: float = 0.0
    screen_y: float = 0.0
    width: float = 0.0
    height: float = 0.0


class RotateRequest(BaseModel):
    degrees: float


class ViewResponse(BaseModel):
    x: float
    y: float
    zoom: float
    rotation: float
    angular_velocity: float = 0.0


class PersonaInfo(BaseModel):
    id: str
    name: str
    role: str
    avatar: str
    color: str
    description: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    thoughts: int
    engine_running: bool
    version: str = "0.1.0"


# ============================================================================
# Helper Functions
# ============================================================================


def get_galaxy(request: Request) -> Galaxy:
    """Get the galaxy session from app state."""
    return request.app.state.galaxy


@contextmanager
def graph_errors() -> Iterator[None]:
    """Map graph edit errors onto HTTP status codes."""
    try:
        yield
    except UnknownThoughtError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except UnknownPersonaError as e:
        raise HTTPException(status_code=404, detail=f"Unknown persona: {e.args[0]}")
    except GraphError as e:
        raise HTTPException(status_code=422, detail=str(e))


def thought_info(galaxy: Galaxy, thought: Thought) -> ThoughtInfo:
    data = thought.to_dict()
    node = galaxy.engine.position_of(thought.id)
    if node is not None:
        data["x"], data["y"] = node
    return ThoughtInfo(**data)


def cluster_info(cluster: Cluster) -> ClusterInfo:
    return ClusterInfo(**cluster.to_dict())


def view_response(galaxy: Galaxy) -> ViewResponse:
    return ViewResponse(
        **galaxy.camera.view.to_dict(),
        angular_velocity=galaxy.camera.angular_velocity,
    )


# ============================================================================
# Health and Graph
# ============================================================================


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    galaxy = get_galaxy(request)
    return HealthResponse(
        status="healthy",
        thoughts=len(galaxy.graph),
        engine_running=galaxy.engine.is_running,
    )


@router.get("/graph", response_model=GraphResponse)
async def get_graph(request: Request) -> GraphResponse:
    """Every thought with position, velocity, sleep flag and connections."""
    galaxy = get_galaxy(request)
    return GraphResponse(
        nodes=[ThoughtInfo(**node) for node in galaxy.nodes()],
        frame=galaxy.engine.frame,
        settled=galaxy.engine.is_settled,
        selected_id=galaxy.selected_id,
    )


@router.get("/clusters", response_model=ClustersResponse)
async def get_clusters(request: Request) -> ClustersResponse:
    galaxy = get_galaxy(request)
    return ClustersResponse(
        sub_clusters=[cluster_info(c) for c in galaxy.tracker.sub_clusters],
        major_clusters=[cluster_info(c) for c in galaxy.tracker.major_clusters],
        pending_summaries=galaxy.tracker.pending_summaries,
    )


# ============================================================================
# Thought Endpoints
# ============================================================================


@router.post("/thoughts", response_model=ThoughtInfo, status_code=201)
async def create_thought(request: Request, body: ThoughtCreateRequest) -> ThoughtInfo:
    """Add a thought; related thoughts are linked and it spawns near them."""
    galaxy = get_galaxy(request)
    with graph_errors():
        thought = await galaxy.submit_thought(body.text)
    return thought_info(galaxy, thought)


@router.patch("/thoughts/{thought_id}", response_model=ThoughtInfo)
async def update_thought(
    request: Request, thought_id: str, body: ThoughtUpdateRequest
) -> ThoughtInfo:
    galaxy = get_galaxy(request)
    with graph_errors():
        thought = galaxy.update_thought(thought_id, body.content)
    return thought_info(galaxy, thought)


@router.delete("/thoughts/{thought_id}")
async def delete_thought(request: Request, thought_id: str) -> dict:
    galaxy = get_galaxy(request)
    with graph_errors():
        galaxy.delete_thought(thought_id)
    return {"status": "deleted", "id": thought_id}


@router.post("/thoughts/{thought_id}/spark", response_model=ThoughtInfo, status_code=201)
async def add_spark(request: Request, thought_id: str, body: SparkRequest) -> ThoughtInfo:
    """A persona reacts to the thought; the reaction becomes a linked thought."""
    galaxy = get_galaxy(request)
    with graph_errors():
        spark = await galaxy.add_spark(thought_id, body.persona_id)
    return thought_info(galaxy, spark)


@router.post("/thoughts/{thought_id}/select", response_model=NeighborhoodResponse)
async def select_thought(request: Request, thought_id: str) -> NeighborhoodResponse:
    """Select a thought and return the theme of its neighborhood."""
    galaxy = get_galaxy(request)
    with graph_errors():
        galaxy.select(thought_id)
        summary = await galaxy.neighborhood_summary(thought_id)
    return NeighborhoodResponse(
        thought_id=thought_id,
        summary=SummaryInfo(**summary.to_dict()) if summary else None,
    )


@router.post("/connections")
async def create_connection(request: Request, body: ConnectionRequest) -> dict:
    galaxy = get_galaxy(request)
    with graph_errors():
        galaxy.connect(body.source_id, body.target_id, body.weight, mutual=body.mutual)
    return {
        "status": "connected",
        "source_id": body.source_id,
        "target_id": body.target_id,
        "weight": body.weight,
    }


@router.get("/search", response_model=SearchResponse)
async def search(request: Request, q: str = "") -> SearchResponse:
    galaxy = get_galaxy(request)
    thoughts = await galaxy.search(q)
    return SearchResponse(query=q, results=[thought_info(galaxy, t) for t in thoughts])


# ============================================================================
# Physics and Drag
# ============================================================================


@router.get("/physics")
async def get_physics(request: Request) -> dict:
    return get_galaxy(request).engine.config.to_dict()


@router.patch("/physics")
async def update_physics(request: Request, body: PhysicsUpdateRequest) -> dict:
    galaxy = get_galaxy(request)
    changes = body.model_dump(exclude_none=True)
    try:
        config = galaxy.engine.update_config(**changes)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    logger.info(f"Physics updated: {changes}")
    return config.to_dict()


@router.post("/physics/reset")
async def reset_physics(request: Request) -> dict:
    return get_galaxy(request).engine.reset_config().to_dict()


@router.post("/drag/start")
async def drag_start(request: Request, body: DragStartRequest) -> dict:
    galaxy = get_galaxy(request)
    if not galaxy.engine.set_drag_target(body.thought_id):
        raise HTTPException(status_code=404, detail=f"Unknown thought: {body.thought_id}")
    return {"status": "dragging", "id": body.thought_id}


@router.post("/drag/move")
async def drag_move(request: Request, body: DragMoveRequest) -> dict:
    galaxy = get_galaxy(request)
    x, y = body.x, body.y
    if body.screen:
        x, y = galaxy.camera.screen_to_world(x, y, body.width, body.height)
    if not galaxy.engine.move_dragged(x, y):
        raise HTTPException(status_code=409, detail="No drag in progress")
    return {"id": galaxy.engine.drag_target, "x": x, "y": y}


@router.post("/drag/end")
async def drag_end(request: Request) -> dict:
    galaxy = get_galaxy(request)
    released = galaxy.engine.drag_target
    galaxy.engine.release_drag()
    return {"status": "released", "id": released}


# ============================================================================
# Camera
# ============================================================================


@router.get("/view", response_model=ViewResponse)
async def get_view(request: Request) -> ViewResponse:
    return view_response(get_galaxy(request))


@router.post("/view/pan", response_model=ViewResponse)
async def pan_view(request: Request, body: PanRequest) -> ViewResponse:
    galaxy = get_galaxy(request)
    galaxy.camera.pan(body.dx, body.dy)
    return view_response(galaxy)


@router.post("/view/zoom", response_model=ViewResponse)
async def zoom_view(request: Request, body: ZoomRequest) -> ViewResponse:
    galaxy = get_galaxy(request)
    galaxy.camera.zoom_at(body.factor, body.screen_x, body.screen_y, body.width, body.height)
    return view_response(galaxy)


@router.post("/view/rotate", response_model=ViewResponse)
async def rotate_view(request: Request, body: RotateRequest) -> ViewResponse:
    """One rotation gesture; the last delta keeps spinning and decays."""
    galaxy = get_galaxy(request)
    galaxy.camera.begin_drag()
    galaxy.camera.rotate_by(body.degrees)
    galaxy.camera.end_drag()
    return view_response(galaxy)


# ============================================================================
# Personas
# ============================================================================


@router.get("/personas", response_model=list[PersonaInfo])
async def list_personas() -> list[PersonaInfo]:
    return [PersonaInfo(**p.to_dict()) for p in THINKERS]
