# tests/unit/test_text_utils.py
"""Unit tests for text utilities."""

import pytest

from kitchenpress.utils.text_utils import (
    clean_whitespace,
    count_words,
    find_phrases,
    normalize_hashtag,
    truncate_text,
)


@pytest.mark.unit
class TestCleanWhitespace:
    def test_collapses_runs(self):
        """Should collapse whitespace and strip ends."""
        assert clean_whitespace("  Ghost \n kitchens\t are   back ") == "Ghost kitchens are back"


@pytest.mark.unit
class TestTruncateText:
    """Tests for truncate_text function."""

    def test_short_text_unchanged(self):
        """Should not modify text within the limit."""
        assert truncate_text("Short text", 100) == "Short text"

    def test_breaks_on_word(self):
        """Should cut at a word boundary and add the suffix."""
        result = truncate_text("Delivery fees are eating restaurant margins alive", 30)
        assert result == "Delivery fees are eating..."
        assert len(result) <= 30

    def test_custom_suffix(self):
        """Should use a custom suffix."""
        assert truncate_text("one two three four", 12, suffix="…") == "one two…"


@pytest.mark.unit
class TestCountWords:
    def test_counts_words(self):
        """Should count whitespace-separated words."""
        assert count_words("## Heading\n\nTwo words") == 4
        assert count_words("") == 0


@pytest.mark.unit
class TestNormalizeHashtag:
    """Tests for normalize_hashtag function."""

    @pytest.mark.parametrize(
        "tag,expected",
        [
            ("ghost kitchens", "#GhostKitchens"),
            ("#RestaurantTech", "#RestaurantTech"),
            ("ai-powered POS", "#AiPoweredPOS"),
            ("  ", ""),
            ("#", ""),
        ],
    )
    def test_normalize(self, tag, expected):
        """Should produce a single CamelCase hashtag."""
        assert normalize_hashtag(tag) == expected


@pytest.mark.unit
class TestFindPhrases:
    """Tests for find_phrases function."""

    def test_case_insensitive(self):
        """Should match regardless of case."""
        text = "This is a Game-Changing update for operators."
        assert find_phrases(text, ["game-changing", "delve into"]) == ["game-changing"]

    def test_ignores_trailing_ellipsis(self):
        """Should match guideline examples that end in dots."""
        text = "Honestly, this amazing breakthrough will not fix staffing."
        assert find_phrases(text, ["This amazing breakthrough..."]) == ["This amazing breakthrough..."]

    def test_blank_phrase_never_matches(self):
        """Should skip empty phrases."""
        assert find_phrases("anything", ["", "..."]) == []
