"""Unit tests for keyword theme detection and LLM output parsing."""

from mindgalaxy.services.output_parser import parse_json, strip_thinking
from mindgalaxy.services.themes import (
    MISCELLANEOUS,
    THEME_PATTERNS,
    VOID,
    summarize_by_keywords,
)


class TestSummarizeByKeywords:
    """Tests for the keyword table."""

    def test_ten_themes(self) -> None:
        """Test the theme table has ten rows."""
        assert len(THEME_PATTERNS) == 10

    def test_empty_is_void(self) -> None:
        """Test no texts give the Void summary."""
        assert summarize_by_keywords([]) == VOID

    def test_no_match_is_miscellaneous(self) -> None:
        """Test texts without keywords give Miscellaneous."""
        assert summarize_by_keywords(["xyz qqq"]) == MISCELLANEOUS

    def test_best_score_wins(self) -> None:
        """Test the theme with the most keyword hits wins."""
        summary = summarize_by_keywords(["I love cooking pasta"])
        assert summary.theme == "Food & Cooking"

    def test_case_insensitive(self) -> None:
        """Test keyword matching ignores case."""
        assert summarize_by_keywords(["QUANTUM"]).theme == "Technology & Innovation"

    def test_substring_counts(self) -> None:
        """'creat' matches both creative and create."""
        summary = summarize_by_keywords(["creative people create", "a tree"])
        assert summary.theme == "Creative Expression"

    def test_tie_goes_to_earlier_theme(self) -> None:
        """Test equal scores resolve to the earlier table row."""
        summary = summarize_by_keywords(["art", "tree"])
        assert summary.theme == "Creative Expression"

    def test_texts_are_joined(self) -> None:
        """Test keyword hits are counted across all texts."""
        summary = summarize_by_keywords(["sleep", "therapy", "coffee"])
        assert summary.theme == "Health & Wellness"


class TestOutputParser:
    """Tests for thinking removal and JSON extraction."""

    def test_strip_thinking(self) -> None:
        """Test a closed thinking block is removed."""
        assert strip_thinking("<think>hmm</think>Answer") == "Answer"

    def test_strip_unclosed_thinking(self) -> None:
        """Test an unterminated thinking block is cut off."""
        assert strip_thinking("Answer<think>cut off") == "Answer"

    def test_parse_plain_json(self) -> None:
        """Test parsing a bare JSON object."""
        assert parse_json('{"a": 1}') == {"a": 1}

    def test_parse_code_block(self) -> None:
        """Test parsing JSON inside a fenced code block."""
        assert parse_json('Here:\n```json\n{"relatedIds": ["1"]}\n```') == {"relatedIds": ["1"]}

    def test_parse_embedded(self) -> None:
        """Test parsing a JSON object surrounded by prose."""
        assert parse_json('<think>x</think>Sure! {"connections": {}} done') == {"connections": {}}

    def test_parse_failure_fallback(self) -> None:
        """Test unparseable output returns the fallback."""
        assert parse_json("not json at all", fallback={}) == {}
        assert parse_json("") is None
