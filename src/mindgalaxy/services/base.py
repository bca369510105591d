"""Collaborator interface for the natural-language side of the galaxy.

The layout core only awaits these and never depends on how they work.
Implementations must not raise for collaborator failures: they return the
documented default instead.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from mindgalaxy.models import ClusterSummary, Persona, Thought

SILENT_REACTION = "The stars are silent."


@dataclass(frozen=True)
class Vibe:
    """Presentation attributes for a new thought."""

    color: str
    gradient: str


class ThoughtServices(ABC):
    """Async natural-language collaborators."""

    @abstractmethod
    async def assign_vibe(self, text: str) -> Vibe:
        """Color and gradient for new thought text."""

    @abstractmethod
    async def propose_connections(
        self, text: str, existing: Sequence[Thought]
    ) -> dict[str, float]:
        """Existing thought ids related to the text, with weights in (0, 1]. May be empty."""

    @abstractmethod
    async def react_as_persona(self, text: str, persona: Persona) -> str:
        """A short in-character reaction to the text."""

    @abstractmethod
    async def summarize_cluster(self, texts: Sequence[str]) -> ClusterSummary:
        """Theme and description for a group of thought texts."""

    @abstractmethod
    async def search_semantic(self, query: str, thoughts: Sequence[Thought]) -> list[str]:
        """Ranked ids of thoughts related to the query."""

    async def close(self) -> None:
        """Release any held resources."""
