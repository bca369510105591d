"""Keyword-table theme detection for cluster summaries."""

from collections.abc import Iterable
from dataclasses import dataclass

from mindgalaxy.models import ClusterSummary


@dataclass(frozen=True)
class ThemePattern:
    keywords: tuple[str, ...]
    theme: str
    description: str


THEME_PATTERNS: tuple[ThemePattern, ...] = (
    ThemePattern(
        ("ai", "code", "tech", "programming", "software", "quantum", "digital"),
        "Technology & Innovation",
        "Digital frontiers and technical exploration",
    ),
    ThemePattern(
        ("meaning", "life", "exist", "conscious", "universe", "think", "philosophy"),
        "Philosophy & Existence",
        "Deep questions about reality and consciousness",
    ),
    ThemePattern(
        ("art", "music", "creat", "paint", "write", "photo", "dance"),
        "Creative Expression",
        "Artistic pursuits and creative flow",
    ),
    ThemePattern(
        ("nature", "tree", "ocean", "water", "star", "mountain", "climate", "earth"),
        "Nature & Environment",
        "Connection with the natural world",
    ),
    ThemePattern(
        ("friend", "love", "family", "social", "relationship", "empathy", "lonely"),
        "Relationships & Connection",
        "Human bonds and social experiences",
    ),
    ThemePattern(
        ("health", "sleep", "mental", "exercise", "meditat", "wellness", "therapy"),
        "Health & Wellness",
        "Mind and body care practices",
    ),
    ThemePattern(
        ("work", "job", "career", "skill", "mentor", "hustle", "remote"),
        "Career & Growth",
        "Professional development and work life",
    ),
    ThemePattern(
        ("travel", "japan", "hike", "adventure", "country", "explore", "journey"),
        "Travel & Adventure",
        "Exploration and wanderlust",
    ),
    ThemePattern(
        ("food", "cook", "coffee", "meal", "pasta", "bread", "spice", "chocolate"),
        "Food & Cooking",
        "Culinary experiences and gastronomy",
    ),
    ThemePattern(
        ("science", "universe", "brain", "learn", "crispr", "evolution", "math", "space"),
        "Science & Learning",
        "Scientific discovery and knowledge",
    ),
)

MISCELLANEOUS = ClusterSummary(theme="Miscellaneous", description="Diverse unconnected thoughts")
VOID = ClusterSummary(theme="Void", description="Empty space.")


def score_theme(text: str, pattern: ThemePattern) -> int:
    """Occurrences of the pattern's keywords in already-lowercased text.

    Keywords match as substrings, so "creat" counts "creative" and "create".
    """
    return sum(text.count(keyword) for keyword in pattern.keywords)


def summarize_by_keywords(texts: Iterable[str]) -> ClusterSummary:
    """Pick the best-scoring theme; table order breaks ties."""
    texts = list(texts)
    if not texts:
        return VOID

    content = " ".join(text.lower() for text in texts)
    best = MISCELLANEOUS
    best_score = 0
    for pattern in THEME_PATTERNS:
        score = score_theme(content, pattern)
        if score > best_score:
            best = ClusterSummary(theme=pattern.theme, description=pattern.description)
            best_score = score
    return best
