"""Parsing of free-form LLM output into JSON."""

import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

THINKING_PATTERNS = [
    re.compile(r"<think>[\s\S]*?</think>", re.IGNORECASE),
    re.compile(r"<thinking>[\s\S]*?</thinking>", re.IGNORECASE),
    re.compile(r"<reasoning>[\s\S]*?</reasoning>", re.IGNORECASE),
]
# Unclosed tag at the end of a truncated response
UNCLOSED_THINKING = re.compile(r"<(think|thinking|reasoning)>[\s\S]*$", re.IGNORECASE)

CODE_BLOCK_PATTERNS = [
    re.compile(r"```json\s*([\s\S]*?)\s*```", re.DOTALL),
    re.compile(r"```\s*([\s\S]*?)\s*```", re.DOTALL),
]
JSON_PATTERNS = [
    re.compile(r"(\{[\s\S]*\})", re.DOTALL),
    re.compile(r"(\[[\s\S]*\])", re.DOTALL),
]


def strip_thinking(text: str) -> str:
    """Remove reasoning blocks some models emit before the answer."""
    if not text:
        return ""
    for pattern in THINKING_PATTERNS:
        text = pattern.sub("", text)
    text = UNCLOSED_THINKING.sub("", text)
    return text.strip()


def parse_json(raw_output: str, fallback: Any = None) -> Any:
    """
    Parse JSON from LLM output.

    Handles:
    - Thinking tags before/around JSON
    - Markdown code blocks
    - JSON embedded in surrounding prose
    """
    if not raw_output:
        return fallback

    text = strip_thinking(raw_output)
    if not text:
        return fallback

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    for pattern in CODE_BLOCK_PATTERNS + JSON_PATTERNS:
        match = pattern.search(text)
        if match:
            try:
                return json.loads(match.group(1))
            except json.JSONDecodeError:
                continue

    logger.warning(f"Failed to parse JSON from output: {text[:200]}...")
    return fallback
