"""Content and knowledge base domain models."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from kitchenpress.core.enums import (
    ContentType,
    EntityType,
    RestrictionLevel,
    SocialPlatform,
)
from kitchenpress.utils.date_utils import now_utc


class KnowledgeEntity(BaseModel):
    """Company or technology the writers should know about."""

    id: Optional[int] = None
    name: str
    type: EntityType
    description: str
    industry_relevance: Dict[str, str] = Field(default_factory=dict)
    key_facts: List[str] = Field(default_factory=list)
    strategic_importance: Optional[str] = None


class IndustryTrend(BaseModel):
    """Current restaurant-industry trend."""

    id: Optional[int] = None
    topic: str
    trend_description: str
    significance_level: int = Field(..., ge=1, le=10)
    timeline: Optional[str] = None
    impact_areas: List[str] = Field(default_factory=list)
    relevant_keywords: List[str] = Field(default_factory=list)


class BrandGuideline(BaseModel):
    """Writing rule with do/don't examples."""

    id: Optional[int] = None
    guideline_category: str
    guideline_name: str
    guideline_description: str
    do_examples: List[str] = Field(default_factory=list)
    dont_examples: List[str] = Field(default_factory=list)
    applies_to: List[str] = Field(default_factory=list)
    priority_level: int = 1


class CompetitorRestriction(BaseModel):
    """Competitor that should be avoided or played down in content."""

    id: Optional[int] = None
    company_name: str
    restriction_level: RestrictionLevel
    reasoning: Optional[str] = None
    alternative_references: List[str] = Field(default_factory=list)
    is_active: bool = True


class IndustryContext(BaseModel):
    """Trends and entities relevant to a topic."""

    trends: List[IndustryTrend] = Field(default_factory=list)
    entities: List[KnowledgeEntity] = Field(default_factory=list)


class StyleGuide(BaseModel):
    """Static house style merged with stored brand guidelines."""

    voice: str
    audience: str
    formatting_rules: List[str] = Field(default_factory=list)
    banned_phrases: List[str] = Field(default_factory=list)
    guidelines: List[BrandGuideline] = Field(default_factory=list)

    def rules_for(self, content_type: str) -> List[BrandGuideline]:
        """Guidelines that apply to a content type, highest priority first."""
        return sorted(
            (g for g in self.guidelines if content_type in g.applies_to),
            key=lambda g: g.priority_level,
        )

    def phrases_to_avoid(self, content_type: str) -> List[str]:
        """Banned phrases plus every don't-example for the content type."""
        phrases = list(self.banned_phrases)
        for guideline in self.rules_for(content_type):
            phrases.extend(p for p in guideline.dont_examples if p not in phrases)
        return phrases


# ---------------------------------------------------------------------------
# Blog drafting
# ---------------------------------------------------------------------------


class SourceArticle(BaseModel):
    """News article a draft is based on."""

    title: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    summary: Optional[str] = None


class BlogRequest(BaseModel):
    """Body of POST /generate-blog."""

    topic: str = Field(..., min_length=1)
    articles: List[SourceArticle] = Field(..., min_length=1)
    keywords: List[str] = Field(default_factory=list)
    target_word_count: int = Field(default=900, ge=300, le=3000)


class BlogDraftResponse(BaseModel):
    """Structured response from the model for a blog draft."""

    title: str = Field(..., max_length=150, description="Post headline")
    content: str = Field(..., min_length=100, description="Post body in Markdown")
    meta_description: str = Field(
        ..., max_length=300, description="SEO meta description"
    )
    tags: List[str] = Field(default_factory=list, description="3-6 topical tags")


class BlogDraft(BaseModel):
    """Blog draft returned to the caller."""

    id: Optional[int] = None
    title: str
    content: str
    meta_description: str
    tags: List[str] = Field(default_factory=list)
    word_count: int = 0
    style_warnings: List[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Social drafting
# ---------------------------------------------------------------------------


class SocialRequest(BaseModel):
    """Body of POST /generate-social."""

    topic: str = Field(..., min_length=1)
    source_text: str = Field(..., min_length=1)
    source_url: Optional[str] = None
    platforms: List[SocialPlatform] = Field(
        default_factory=lambda: list(SocialPlatform)
    )

    @field_validator("platforms")
    @classmethod
    def dedupe_platforms(cls, v: List[SocialPlatform]) -> List[SocialPlatform]:
        """Keep the first occurrence of each platform; empty means all."""
        if not v:
            return list(SocialPlatform)
        seen: List[SocialPlatform] = []
        for platform in v:
            if platform not in seen:
                seen.append(platform)
        return seen


class SocialPostDraft(BaseModel):
    """One post as drafted by the model."""

    platform: str
    content: str
    hashtags: List[str] = Field(default_factory=list)


class SocialPostsResponse(BaseModel):
    """Structured response from the model for social posts."""

    posts: List[SocialPostDraft]


class SocialPost(BaseModel):
    """Post returned to the caller, checked against the platform limit."""

    platform: SocialPlatform
    content: str
    hashtags: List[str] = Field(default_factory=list)
    character_count: int
    within_limit: bool


class SocialDraft(BaseModel):
    """Social drafts returned to the caller."""

    id: Optional[int] = None
    posts: List[SocialPost] = Field(default_factory=list)
    style_warnings: List[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Stored content
# ---------------------------------------------------------------------------


class GeneratedContent(BaseModel):
    """Row of the generated_content table."""

    id: Optional[int] = None
    content_type: ContentType
    topic: str
    title: Optional[str] = None
    body: str
    payload: Dict[str, Any] = Field(default_factory=dict)
    source_urls: List[str] = Field(default_factory=list)
    provider: Optional[str] = None
    model: Optional[str] = None
    created_at: datetime = Field(default_factory=now_utc)
