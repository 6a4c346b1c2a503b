"""Custom exceptions for KitchenPress."""


class KitchenPressError(Exception):
    """Base exception for KitchenPress."""


class ConfigurationError(KitchenPressError):
    """Configuration error."""


class DatabaseError(KitchenPressError):
    """Database operation error."""


class APIError(KitchenPressError):
    """External API error."""


class AIServiceError(APIError):
    """AI service error."""


class EmbeddingError(AIServiceError):
    """Embedding computation error."""


class DuplicateDetectionError(KitchenPressError):
    """Duplicate detection could not produce a verdict."""


class ContentGenerationError(KitchenPressError):
    """Blog or social content generation error."""


class ValidationError(KitchenPressError):
    """Data validation error."""
