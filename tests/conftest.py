"""Pytest configuration and fixtures."""

import random
from unittest.mock import AsyncMock, MagicMock

import pytest

from mindgalaxy.config import Settings, get_test_settings
from mindgalaxy.galaxy import Galaxy
from mindgalaxy.graph import ThoughtGraph
from mindgalaxy.models import ClusterSummary, Thought
from mindgalaxy.physics import PhysicsConfig
from mindgalaxy.services import LLMClient, LocalThoughtServices, ThoughtServices, Vibe


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with the offline backend and short timeouts."""
    return get_test_settings()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def quiet_config() -> PhysicsConfig:
    """Physics with repulsion and gravity off, for isolating springs."""
    return PhysicsConfig(repulsion=0.0, center_gravity=0.0)


@pytest.fixture
def triangle_thoughts() -> list[Thought]:
    """A-B strong, B-C strong (one direction only), D alone."""
    return [
        Thought(id="a", content="Quantum code and AI", x=0.0, y=0.0, connections={"b": 0.9}),
        Thought(id="b", content="Software is digital thought", x=50.0, y=0.0, connections={"a": 0.9}),
        Thought(id="c", content="Programming the future", x=100.0, y=0.0, connections={"b": 0.7}),
        Thought(id="d", content="Bread and coffee", x=0.0, y=300.0),
    ]


@pytest.fixture
def graph(triangle_thoughts) -> ThoughtGraph:
    return ThoughtGraph(triangle_thoughts)


@pytest.fixture
def local_services(rng) -> LocalThoughtServices:
    return LocalThoughtServices(max_connections=3, max_results=5, rng=rng)


@pytest.fixture
def mock_services() -> ThoughtServices:
    """Mock collaborators with fixed answers."""
    services = MagicMock(spec=ThoughtServices)
    services.assign_vibe = AsyncMock(
        return_value=Vibe(color="#e0f2fe", gradient="linear-gradient(135deg, #e0f2fe, #e0f2fe)")
    )
    services.propose_connections = AsyncMock(return_value={})
    services.react_as_persona = AsyncMock(return_value="Stay hungry.")
    services.summarize_cluster = AsyncMock(
        return_value=ClusterSummary(theme="Test Theme", description="Fixed summary")
    )
    services.search_semantic = AsyncMock(return_value=[])
    services.close = AsyncMock()
    return services


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Mock LLM client for testing without a running model."""
    client = MagicMock(spec=LLMClient)
    client.generate_json = AsyncMock(return_value={"connections": {}})
    client.generate = AsyncMock(return_value="Test response")
    client.close = AsyncMock()
    return client


@pytest.fixture
def galaxy(local_services, test_settings, rng) -> Galaxy:
    """Empty galaxy on offline collaborators."""
    return Galaxy(services=local_services, app_settings=test_settings, rng=rng)
