"""Configuration management using Pydantic Settings."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Collaborator services (remote OpenAI-compatible endpoint)
    services_backend: Literal["llm", "local"] = Field(
        default="local",
        description="'llm' talks to the chat endpoint, 'local' stays offline"
    )
    llm_base_url: str = "http://localhost:11434/v1"
    llm_model: str = "qwen3:8b"
    llm_api_key: str = "ollama"
    llm_max_concurrent: int = 8
    llm_timeout: float = 30.0

    # Physics defaults (live values are held by PhysicsConfig)
    physics_repulsion: float = 5000.0
    physics_spring_length: float = Field(
        default=40.0,
        description="Node diameter; spring targets scale from it"
    )
    physics_stiffness: float = 0.3
    physics_damping: float = 0.88
    physics_center_gravity: float = 0.0005
    physics_sleep_speed: float = Field(
        default=0.02,
        description="Speed below which a node stops and sleeps"
    )
    physics_repulsion_cutoff_sq: float = Field(
        default=1_000_000.0,
        description="Squared distance beyond which pairs do not repel"
    )

    # Frame loop
    frame_rate: float = 60.0
    centroid_refresh_frames: int = 30

    # Clustering
    cluster_threshold: float = Field(
        default=0.6,
        description="Minimum connection weight that joins two thoughts into a cluster"
    )
    max_major_clusters: int = 5
    summary_timeout: float = 20.0

    # Thought submission
    max_proposed_connections: int = 3
    max_search_results: int = 5

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False


def get_dev_settings() -> Settings:
    """Get development environment settings."""
    return Settings(
        services_backend="local",
        api_debug=True,
    )


def get_test_settings() -> Settings:
    """Get test environment settings."""
    return Settings(
        services_backend="local",
        frame_rate=1000.0,
        summary_timeout=1.0,
        llm_timeout=1.0,
    )


# Global settings instance
settings = Settings()
