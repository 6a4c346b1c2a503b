"""Enums for KitchenPress."""

from enum import Enum


class LLMProvider(str, Enum):
    """Available AI providers."""

    GEMINI = "gemini"
    OPENAI = "openai"


class TieBreakPolicy(str, Enum):
    """Which historical record wins when similarity scores are equal."""

    EARLIEST_PROCESSED = "earliest_processed"
    LATEST_PROCESSED = "latest_processed"


class ContentType(str, Enum):
    """Kinds of generated content."""

    BLOG = "blog"
    SOCIAL = "social"


class SocialPlatform(str, Enum):
    """Social platforms we draft posts for."""

    LINKEDIN = "linkedin"
    TWITTER = "twitter"
    FACEBOOK = "facebook"
    INSTAGRAM = "instagram"


# Maximum post length per platform, in characters
PLATFORM_CHARACTER_LIMITS = {
    SocialPlatform.TWITTER: 280,
    SocialPlatform.INSTAGRAM: 2200,
    SocialPlatform.LINKEDIN: 3000,
    SocialPlatform.FACEBOOK: 5000,
}


class EntityType(str, Enum):
    """Knowledge base entity types."""

    COMPANY = "company"
    TECHNOLOGY = "technology"


class RestrictionLevel(str, Enum):
    """Competitor blacklist restriction levels."""

    FULL_BLACKLIST = "full_blacklist"
    MENTION_ONLY_IF_NECESSARY = "mention_only_if_necessary"
