# tests/unit/test_generators.py
"""Unit tests for the blog and social generators."""

from pathlib import Path
from unittest.mock import Mock

import pytest

from kitchenpress.core.content import (
    BlogRequest,
    BrandGuideline,
    CompetitorRestriction,
    IndustryContext,
    IndustryTrend,
    KnowledgeEntity,
    SocialRequest,
    StyleGuide,
)
from kitchenpress.core.enums import ContentType, RestrictionLevel, SocialPlatform
from kitchenpress.pipeline.generators.blog_generator import BlogGenerator
from kitchenpress.pipeline.generators.social_generator import SocialGenerator, render_post
from kitchenpress.utils.exceptions import AIServiceError, ContentGenerationError

PROMPTS_DIR = Path(__file__).parent.parent.parent / "config" / "prompts"


@pytest.fixture
def style_guides():
    service = Mock()
    service.get_style_guide.return_value = StyleGuide(
        voice="Warm and observational",
        audience="Independent operators",
        formatting_rules=["Short paragraphs."],
        banned_phrases=["Game-changing"],
        guidelines=[
            BrandGuideline(
                guideline_category="financial_focus",
                guideline_name="ROI and Cost Impact",
                guideline_description="Lead with the money",
                do_examples=["Saves $2,400 a month"],
                dont_examples=["Revolutionary technology..."],
                applies_to=["blog_content", "social_posts"],
            )
        ],
    )
    return service


@pytest.fixture
def knowledge():
    repo = Mock()
    repo.get_industry_context.return_value = IndustryContext(
        trends=[
            IndustryTrend(
                topic="labor_shortage",
                trend_description="Chronic staffing challenges",
                significance_level=10,
                timeline="ongoing crisis",
            )
        ],
        entities=[
            KnowledgeEntity(
                name="Toast",
                type="company",
                description="Restaurant POS platform",
                key_facts=["Public company"],
            )
        ],
    )
    repo.get_active_restrictions.return_value = [
        CompetitorRestriction(
            company_name="Competitor Restaurant Tech Co",
            restriction_level=RestrictionLevel.FULL_BLACKLIST,
            alternative_references=["leading POS providers"],
        ),
        CompetitorRestriction(
            company_name="Another Competitor",
            restriction_level=RestrictionLevel.MENTION_ONLY_IF_NECESSARY,
        ),
    ]
    return repo


@pytest.fixture
def content_repository():
    repo = Mock()
    repo.save.return_value = 42
    return repo


@pytest.fixture
def blog_request():
    return BlogRequest(
        topic="restaurant_tech",
        articles=[
            {
                "title": "Kitchen Displays Fail During Peak Hours",
                "url": "https://nrn.com/kds-outage",
                "summary": "Outages cost operators thousands",
            }
        ],
        keywords=["kitchen display", "POS"],
    )


def build(generator_cls, llm, knowledge, content_repository, style_guides, prompts_dir):
    return generator_cls(
        llm_client=llm,
        knowledge=knowledge,
        content_repository=content_repository,
        style_guides=style_guides,
        prompt_config_dir=prompts_dir,
    )


@pytest.mark.unit
class TestBlogGenerator:
    """Tests for BlogGenerator class."""

    def test_falls_back_to_default_prompt(self, mock_llm_client, knowledge, content_repository, style_guides, tmp_path):
        """Should use the built-in prompt when no YAML file exists."""
        generator = build(BlogGenerator, mock_llm_client, knowledge, content_repository, style_guides, tmp_path)
        assert generator.prompt.system_prompt == BlogGenerator.default_system_prompt

    def test_loads_prompt_from_yaml(self, mock_llm_client, knowledge, content_repository, style_guides):
        """Should load the shipped prompt file."""
        generator = build(BlogGenerator, mock_llm_client, knowledge, content_repository, style_guides, PROMPTS_DIR)
        assert "Cite figures" in generator.prompt.user_prompt_template

    @pytest.mark.asyncio
    @pytest.mark.parametrize("use_yaml", [False, True])
    async def test_generate(
        self,
        use_yaml,
        mock_llm_client,
        knowledge,
        content_repository,
        style_guides,
        blog_request,
        sample_blog_response,
        tmp_path,
    ):
        """Should draft, clean, check and store a blog post."""
        mock_llm_client.create_completion.return_value = {
            "content": sample_blog_response,
            "provider": "gemini",
            "model": "gemini-2.0-flash",
        }
        generator = build(
            BlogGenerator,
            mock_llm_client,
            knowledge,
            content_repository,
            style_guides,
            PROMPTS_DIR if use_yaml else tmp_path,
        )

        draft = await generator.generate(blog_request)

        assert draft.id == 42
        assert "Competitor Restaurant Tech Co" not in draft.content
        assert "leading POS providers" in draft.content
        assert draft.tags == ["POS", "restaurant tech"]
        assert draft.word_count > 20
        assert "Avoid phrase: 'Game-changing'" in draft.style_warnings
        assert any("Replaced blacklisted competitor" in w for w in draft.style_warnings)

        messages = mock_llm_client.create_completion.call_args.kwargs["messages"]
        system, user = messages[0]["content"], messages[1]["content"]
        assert "Warm and observational" in system
        assert "Competitor Restaurant Tech Co" in system
        assert "Another Competitor" not in system
        assert "Kitchen Displays Fail During Peak Hours" in user
        assert "Chronic staffing challenges" in user
        assert "kitchen display, POS" in user

        saved = content_repository.save.call_args.args[0]
        assert saved.content_type == ContentType.BLOG
        assert saved.source_urls == ["https://nrn.com/kds-outage"]
        assert saved.model == "gemini-2.0-flash"

    @pytest.mark.asyncio
    async def test_invalid_output(self, mock_llm_client, knowledge, content_repository, style_guides, blog_request, tmp_path):
        """Should raise ContentGenerationError when output doesn't validate."""
        mock_llm_client.create_completion.return_value = {"content": {"title": "Only a title"}}
        generator = build(BlogGenerator, mock_llm_client, knowledge, content_repository, style_guides, tmp_path)

        with pytest.raises(ContentGenerationError):
            await generator.generate(blog_request)
        content_repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_provider_error(self, mock_llm_client, knowledge, content_repository, style_guides, blog_request, tmp_path):
        """Should wrap provider failures in ContentGenerationError."""
        mock_llm_client.create_completion.side_effect = AIServiceError("quota exceeded")
        generator = build(BlogGenerator, mock_llm_client, knowledge, content_repository, style_guides, tmp_path)

        with pytest.raises(ContentGenerationError, match="quota exceeded"):
            await generator.generate(blog_request)


@pytest.mark.unit
class TestSocialGenerator:
    """Tests for SocialGenerator class."""

    def test_render_post_appends_missing_hashtags(self):
        """Should only append hashtags that aren't already in the text."""
        assert render_post("Margins matter #Labor", ["#Labor", "#POS"]) == "Margins matter #Labor\n\n#POS"
        assert render_post("No tags", []) == "No tags"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("use_yaml", [False, True])
    async def test_generate(self, use_yaml, mock_llm_client, knowledge, content_repository, style_guides, tmp_path):
        """Should check each post against its platform and flag gaps."""
        mock_llm_client.create_completion.return_value = {
            "content": {
                "posts": [
                    {"platform": "Twitter ", "content": "x" * 300, "hashtags": ["restaurant tech", "#Labor", "#labor"]},
                    {"platform": "linkedin", "content": "Another Competitor just raised prices 8%.", "hashtags": []},
                    {"platform": "linkedin", "content": "Second linkedin draft", "hashtags": []},
                ]
            },
            "provider": "openai",
            "model": "gpt-4o-mini",
        }
        generator = build(
            SocialGenerator,
            mock_llm_client,
            knowledge,
            content_repository,
            style_guides,
            PROMPTS_DIR if use_yaml else tmp_path,
        )
        request = SocialRequest(
            topic="labor_shortage",
            source_text="Operators are short-staffed again.",
            source_url="https://nrn.com/staffing",
            platforms=["twitter", "linkedin", "instagram"],
        )

        draft = await generator.generate(request)

        assert draft.id == 42
        assert [p.platform for p in draft.posts] == [SocialPlatform.TWITTER, SocialPlatform.LINKEDIN]

        twitter, linkedin = draft.posts
        assert twitter.hashtags == ["#RestaurantTech", "#Labor"]
        assert twitter.character_count == len(render_post(twitter.content, twitter.hashtags))
        assert twitter.within_limit is False
        assert linkedin.content == "Another Competitor just raised prices 8%."
        assert linkedin.within_limit is True

        assert draft.style_warnings == [
            f"twitter post is {twitter.character_count} characters (limit 280)",
            "Mentions restricted competitor 'Another Competitor'",
            "No post drafted for instagram",
        ]

        user = mock_llm_client.create_completion.call_args.kwargs["messages"][1]["content"]
        assert "twitter: 280 characters" in user
        assert "Link: https://nrn.com/staffing" in user

        saved = content_repository.save.call_args.args[0]
        assert saved.content_type == ContentType.SOCIAL
        assert saved.source_urls == ["https://nrn.com/staffing"]

    @pytest.mark.asyncio
    async def test_drops_blacklisted_hashtags(self, mock_llm_client, knowledge, content_repository, style_guides, tmp_path):
        """Should not publish a hashtag naming a blacklisted competitor."""
        mock_llm_client.create_completion.return_value = {
            "content": {
                "posts": [
                    {
                        "platform": "linkedin",
                        "content": "POS costs are climbing.",
                        "hashtags": ["Competitor Restaurant Tech Co", "#POS"],
                    },
                ]
            },
            "provider": "openai",
            "model": "gpt-4o-mini",
        }
        generator = build(SocialGenerator, mock_llm_client, knowledge, content_repository, style_guides, tmp_path)
        request = SocialRequest(
            topic="labor_shortage",
            source_text="POS costs are climbing.",
            platforms=["linkedin"],
        )

        draft = await generator.generate(request)

        (linkedin,) = draft.posts
        assert linkedin.hashtags == ["#POS"]
        assert draft.style_warnings == [
            "Dropped hashtag '#CompetitorRestaurantTechCo' naming blacklisted competitor "
            "'Competitor Restaurant Tech Co'"
        ]
