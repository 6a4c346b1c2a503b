# tests/unit/test_content_guard.py
"""Unit tests for the competitor and phrase guard."""

import pytest

from kitchenpress.core.content import BrandGuideline, CompetitorRestriction, StyleGuide
from kitchenpress.core.enums import RestrictionLevel
from kitchenpress.services.content_guard import ContentGuard


@pytest.fixture
def style_guide():
    return StyleGuide(
        voice="warm",
        audience="operators",
        banned_phrases=["Game-changing"],
        guidelines=[
            BrandGuideline(
                guideline_category="authenticity",
                guideline_name="Real Experience Over Hype",
                guideline_description="Honest assessments",
                dont_examples=["Industry leaders agree..."],
                applies_to=["blog_content"],
            )
        ],
    )


@pytest.fixture
def restrictions():
    return [
        CompetitorRestriction(
            company_name="Competitor Restaurant Tech Co",
            restriction_level=RestrictionLevel.FULL_BLACKLIST,
            alternative_references=["leading POS providers", "established platforms"],
        ),
        CompetitorRestriction(
            company_name="Another Competitor",
            restriction_level=RestrictionLevel.MENTION_ONLY_IF_NECESSARY,
        ),
        CompetitorRestriction(
            company_name="Retired Rival",
            restriction_level=RestrictionLevel.FULL_BLACKLIST,
            is_active=False,
        ),
    ]


@pytest.mark.unit
class TestContentGuard:
    """Tests for ContentGuard class."""

    def test_replaces_blacklisted_competitor(self, style_guide, restrictions):
        """Should swap a blacklisted name for its first alternative."""
        guard = ContentGuard(style_guide, restrictions)

        text, warnings = guard.apply(
            "We tried competitor restaurant tech co last year.", "blog_content"
        )

        assert text == "We tried leading POS providers last year."
        assert warnings == [
            "Replaced blacklisted competitor 'Competitor Restaurant Tech Co' with 'leading POS providers'"
        ]

    def test_blacklist_without_alternatives(self, style_guide):
        """Should fall back to a generic reference."""
        guard = ContentGuard(
            style_guide,
            [CompetitorRestriction(company_name="Acme", restriction_level=RestrictionLevel.FULL_BLACKLIST)],
        )
        text, _ = guard.apply("Acme and Acmeville", "blog_content")
        assert text == "other providers and Acmeville"

    def test_flags_restricted_competitor(self, style_guide, restrictions):
        """Should leave a mention-if-necessary name but warn about it."""
        guard = ContentGuard(style_guide, restrictions)

        text, warnings = guard.apply("Another Competitor raised prices.", "blog_content")

        assert text == "Another Competitor raised prices."
        assert warnings == ["Mentions restricted competitor 'Another Competitor'"]

    def test_drops_blacklisted_hashtags(self, style_guide, restrictions):
        """Should drop hashtags naming a blacklisted competitor and keep the rest."""
        guard = ContentGuard(style_guide, restrictions)

        kept, warnings = guard.filter_hashtags(
            ["#CompetitorRestaurantTechCo", "#POS", "#AnotherCompetitor", "#RetiredRival"]
        )

        assert kept == ["#POS", "#AnotherCompetitor", "#RetiredRival"]
        assert warnings == [
            "Dropped hashtag '#CompetitorRestaurantTechCo' naming blacklisted competitor "
            "'Competitor Restaurant Tech Co'"
        ]

    def test_ignores_inactive_restrictions(self, style_guide, restrictions):
        """Should not touch names whose restriction is inactive."""
        guard = ContentGuard(style_guide, restrictions)
        text, warnings = guard.apply("Retired Rival is gone.", "blog_content")
        assert text == "Retired Rival is gone."
        assert warnings == []

    def test_flags_phrases_for_scope(self, style_guide):
        """Should flag banned phrases and the scope's don't-examples."""
        guard = ContentGuard(style_guide, [])
        text = "A game-changing launch. Industry leaders agree it matters."

        _, blog_warnings = guard.apply(text, "blog_content")
        _, social_warnings = guard.apply(text, "social_posts")

        assert blog_warnings == [
            "Avoid phrase: 'Game-changing'",
            "Avoid phrase: 'Industry leaders agree...'",
        ]
        assert social_warnings == ["Avoid phrase: 'Game-changing'"]
