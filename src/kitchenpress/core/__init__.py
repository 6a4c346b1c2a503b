"""Core domain models and configurations."""

from kitchenpress.core.article import (
    ArticleToStore,
    CandidateArticle,
    DuplicateCheckRequest,
    DuplicateCheckResponse,
    DuplicateCheckResult,
    DuplicateStatistics,
    HistoricalArticle,
    RejectedArticle,
    SimilarTo,
    StoreArticlesRequest,
    StoreArticlesResponse,
)
from kitchenpress.core.config import Config, DetectorConfig, PromptConfig
from kitchenpress.core.content import (
    BlogDraft,
    BlogRequest,
    BrandGuideline,
    CompetitorRestriction,
    GeneratedContent,
    IndustryContext,
    IndustryTrend,
    KnowledgeEntity,
    SocialDraft,
    SocialPost,
    SocialRequest,
    SourceArticle,
    StyleGuide,
)
from kitchenpress.core.enums import (
    ContentType,
    EntityType,
    LLMProvider,
    RestrictionLevel,
    SocialPlatform,
    TieBreakPolicy,
)

__all__ = [
    # Article models
    "ArticleToStore",
    "CandidateArticle",
    "DuplicateCheckRequest",
    "DuplicateCheckResponse",
    "DuplicateCheckResult",
    "DuplicateStatistics",
    "HistoricalArticle",
    "RejectedArticle",
    "SimilarTo",
    "StoreArticlesRequest",
    "StoreArticlesResponse",
    # Content models
    "BlogDraft",
    "BlogRequest",
    "BrandGuideline",
    "CompetitorRestriction",
    "GeneratedContent",
    "IndustryContext",
    "IndustryTrend",
    "KnowledgeEntity",
    "SocialDraft",
    "SocialPost",
    "SocialRequest",
    "SourceArticle",
    "StyleGuide",
    # Configuration models
    "Config",
    "DetectorConfig",
    "PromptConfig",
    # Enums
    "ContentType",
    "EntityType",
    "LLMProvider",
    "RestrictionLevel",
    "SocialPlatform",
    "TieBreakPolicy",
]
