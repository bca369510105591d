"""Collaborators backed by an OpenAI-compatible chat model.

Vibe and cluster themes stay local (palette colors and the keyword table);
connections, persona reactions and search go to the model. Any failure is
logged and replaced by the default for that call.
"""

import json
import logging
import math
from collections.abc import Sequence

from mindgalaxy.config import settings
from mindgalaxy.models import ClusterSummary, Persona, Thought
from mindgalaxy.services.base import SILENT_REACTION, ThoughtServices, Vibe
from mindgalaxy.services.llm_client import LLMClient
from mindgalaxy.services.local import LocalThoughtServices

logger = logging.getLogger(__name__)

CONNECTIONS_PROMPT = """I am adding a new thought to a mind map.
New Thought: "{text}"

Existing Thoughts: {context}

Identify up to {limit} existing thoughts that are semantically related, thematically linked, or share a "vibe" with the new thought.
For each connection, assign a strength score:
- 0.9-1.0: Very strong semantic connection
- 0.7-0.8: Strong thematic link
- 0.5-0.6: Moderate connection
- 0.3-0.4: Weak but meaningful link

If nothing is related, return an empty object.

Return JSON: {{"connections": {{"id1": 0.8, "id2": 0.5}}}}"""

PERSONA_PROMPT = """Roleplay as {name} ({role}). {description}
React to: "{text}".
Keep it concise (max 80 words), profound, and strictly in character."""

SEARCH_PROMPT = """Query: "{query}"
Thoughts: {context}
Identify the top {limit} semantically related thoughts.
Return JSON: {{"relatedIds": ["id1", "id2"]}}"""


def thought_context(thoughts: Sequence[Thought]) -> str:
    """Compact JSON listing of ids and content to keep prompts small."""
    return json.dumps(
        [{"id": t.id, "content": t.content} for t in thoughts],
        ensure_ascii=False,
    )


def clean_connections(
    raw: object,
    known_ids: set[str],
    limit: int,
) -> dict[str, float]:
    """Keep known ids with numeric weights, clipped to (0, 1], strongest first."""
    if not isinstance(raw, dict):
        return {}
    cleaned: dict[str, float] = {}
    for thought_id, weight in raw.items():
        thought_id = str(thought_id)
        if thought_id not in known_ids:
            continue
        try:
            weight = float(weight)
        except (TypeError, ValueError):
            continue
        if not math.isfinite(weight) or weight <= 0:
            continue
        cleaned[thought_id] = min(weight, 1.0)

    strongest = sorted(cleaned.items(), key=lambda item: item[1], reverse=True)[:limit]
    return dict(strongest)


class LLMThoughtServices(ThoughtServices):
    """Chat-model collaborators with local fallbacks for vibe and themes."""

    def __init__(
        self,
        client: LLMClient | None = None,
        max_connections: int | None = None,
        max_results: int | None = None,
    ) -> None:
        self.client = client or LLMClient()
        self.max_connections = max_connections or settings.max_proposed_connections
        self.max_results = max_results or settings.max_search_results
        self._local = LocalThoughtServices(
            max_connections=self.max_connections,
            max_results=self.max_results,
        )

    async def close(self) -> None:
        await self.client.close()

    async def assign_vibe(self, text: str) -> Vibe:
        # Colors come from the shared palette to keep the galaxy cohesive
        return await self._local.assign_vibe(text)

    async def propose_connections(
        self, text: str, existing: Sequence[Thought]
    ) -> dict[str, float]:
        if not existing:
            return {}
        prompt = CONNECTIONS_PROMPT.format(
            text=text,
            context=thought_context(existing),
            limit=self.max_connections,
        )
        try:
            result = await self.client.generate_json(prompt)
        except Exception as e:
            logger.warning(f"Connection search failed, continuing unconnected: {e}")
            return {}

        raw = result.get("connections") if isinstance(result, dict) else None
        return clean_connections(raw, {t.id for t in existing}, self.max_connections)

    async def react_as_persona(self, text: str, persona: Persona) -> str:
        prompt = PERSONA_PROMPT.format(
            name=persona.name,
            role=persona.role,
            description=persona.description,
            text=text,
        )
        try:
            reaction = await self.client.generate(prompt, temperature=0.9)
        except Exception as e:
            logger.warning(f"Persona {persona.id} reaction failed: {e}")
            return SILENT_REACTION
        return reaction.strip() or SILENT_REACTION

    async def summarize_cluster(self, texts: Sequence[str]) -> ClusterSummary:
        return await self._local.summarize_cluster(texts)

    async def search_semantic(self, query: str, thoughts: Sequence[Thought]) -> list[str]:
        if not thoughts or not query.strip():
            return []
        prompt = SEARCH_PROMPT.format(
            query=query,
            context=thought_context(thoughts),
            limit=self.max_results,
        )
        try:
            result = await self.client.generate_json(prompt)
        except Exception as e:
            logger.warning(f"Semantic search failed: {e}")
            return []

        related = result.get("relatedIds") if isinstance(result, dict) else None
        if not isinstance(related, list):
            return []
        known = {t.id for t in thoughts}
        ranked: list[str] = []
        for thought_id in map(str, related):
            if thought_id in known and thought_id not in ranked:
                ranked.append(thought_id)
        return ranked[: self.max_results]
