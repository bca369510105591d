"""Offline collaborators: palette colors, word-overlap links, keyword themes."""

import logging
import random
import re
from collections.abc import Sequence

from mindgalaxy.config import settings
from mindgalaxy.graph.seed import MINDFUL_PALETTE, solid_gradient
from mindgalaxy.models import ClusterSummary, Persona, Thought
from mindgalaxy.services.base import ThoughtServices, Vibe
from mindgalaxy.services.themes import summarize_by_keywords

logger = logging.getLogger(__name__)

WORD_PATTERN = re.compile(r"[a-z0-9']+")

STOPWORDS = frozenset({
    "a", "an", "the", "and", "or", "but", "is", "are", "was", "be", "to", "of",
    "in", "on", "at", "for", "with", "it", "its", "it's", "i", "i'm", "my", "me",
    "we", "our", "you", "your", "that", "this", "than", "so", "if", "as", "by",
    "just", "not", "no", "all", "what", "why", "will", "can", "do", "does",
})


def content_words(text: str) -> set[str]:
    """Lowercase words with stopwords and one-letter tokens removed."""
    return {
        w for w in WORD_PATTERN.findall(text.lower())
        if len(w) > 1 and w not in STOPWORDS
    }


def overlap_score(a: set[str], b: set[str]) -> float:
    """Jaccard similarity of two word sets."""
    if not a or not b:
        return 0.0
    return len(a & b) / len(a | b)


class LocalThoughtServices(ThoughtServices):
    """Collaborators that never leave the process."""

    def __init__(
        self,
        max_connections: int | None = None,
        max_results: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.max_connections = max_connections or settings.max_proposed_connections
        self.max_results = max_results or settings.max_search_results
        self._rng = rng or random.Random()

    async def assign_vibe(self, text: str) -> Vibe:
        color = self._rng.choice(MINDFUL_PALETTE)
        return Vibe(color=color, gradient=solid_gradient(color))

    async def propose_connections(
        self, text: str, existing: Sequence[Thought]
    ) -> dict[str, float]:
        words = content_words(text)
        scored = []
        for thought in existing:
            score = overlap_score(words, content_words(thought.content))
            if score > 0:
                scored.append((score, thought.id))
        scored.sort(key=lambda item: item[0], reverse=True)

        # Map overlap into the 0.3-1.0 band the weights are read in
        return {
            thought_id: round(min(1.0, 0.3 + score * 1.4), 3)
            for score, thought_id in scored[: self.max_connections]
        }

    async def react_as_persona(self, text: str, persona: Persona) -> str:
        topic = " ".join(text.split()[:6])
        return f"{persona.name} ({persona.role}) ponders: \"{topic}...\" {persona.description}"

    async def summarize_cluster(self, texts: Sequence[str]) -> ClusterSummary:
        return summarize_by_keywords(texts)

    async def search_semantic(self, query: str, thoughts: Sequence[Thought]) -> list[str]:
        words = content_words(query)
        needle = query.strip().lower()
        scored = []
        for thought in thoughts:
            score = overlap_score(words, content_words(thought.content))
            if needle and needle in thought.content.lower():
                score += 1.0
            if score > 0:
                scored.append((score, thought.id))
        scored.sort(key=lambda item: item[0], reverse=True)
        return [thought_id for _, thought_id in scored[: self.max_results]]
