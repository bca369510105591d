"""Mind Galaxy data models."""

from mindgalaxy.models.cluster import Cluster, ClusterLevel, ClusterSummary
from mindgalaxy.models.persona import THINKERS, Persona, get_persona
from mindgalaxy.models.thought import (
    Thought,
    effective_weight,
    normalize_connections,
    weight_band,
)

__all__ = [
    "Thought",
    "effective_weight",
    "normalize_connections",
    "weight_band",
    "Cluster",
    "ClusterLevel",
    "ClusterSummary",
    "Persona",
    "THINKERS",
    "get_persona",
]
