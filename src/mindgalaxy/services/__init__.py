"""Natural-language collaborators: connections, reactions, themes, search."""

from mindgalaxy.config import Settings, settings
from mindgalaxy.services.base import SILENT_REACTION, ThoughtServices, Vibe
from mindgalaxy.services.llm import LLMThoughtServices
from mindgalaxy.services.llm_client import LLMClient
from mindgalaxy.services.local import LocalThoughtServices
from mindgalaxy.services.themes import MISCELLANEOUS, THEME_PATTERNS, summarize_by_keywords


def create_services(app_settings: Settings | None = None) -> ThoughtServices:
    """Build the collaborator backend named by `services_backend`."""
    s = app_settings or settings
    if s.services_backend == "llm":
        client = LLMClient(
            base_url=s.llm_base_url,
            model=s.llm_model,
            api_key=s.llm_api_key,
            timeout=s.llm_timeout,
            max_concurrent=s.llm_max_concurrent,
        )
        return LLMThoughtServices(
            client=client,
            max_connections=s.max_proposed_connections,
            max_results=s.max_search_results,
        )
    return LocalThoughtServices(
        max_connections=s.max_proposed_connections,
        max_results=s.max_search_results,
    )


__all__ = [
    "ThoughtServices",
    "Vibe",
    "SILENT_REACTION",
    "LLMClient",
    "LLMThoughtServices",
    "LocalThoughtServices",
    "MISCELLANEOUS",
    "THEME_PATTERNS",
    "summarize_by_keywords",
    "create_services",
]
