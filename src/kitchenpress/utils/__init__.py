"""Utility modules for KitchenPress."""

from kitchenpress.utils.date_utils import (
    lookback_cutoff,
    now_utc,
    parse_date,
    to_db_timestamp,
)
from kitchenpress.utils.exceptions import (
    AIServiceError,
    APIError,
    ConfigurationError,
    ContentGenerationError,
    DatabaseError,
    DuplicateDetectionError,
    EmbeddingError,
    KitchenPressError,
    ValidationError,
)
from kitchenpress.utils.logging import get_logger, setup_logging
from kitchenpress.utils.text_utils import (
    clean_whitespace,
    count_words,
    find_phrases,
    normalize_hashtag,
    truncate_text,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    # Exceptions
    "KitchenPressError",
    "ConfigurationError",
    "DatabaseError",
    "APIError",
    "AIServiceError",
    "EmbeddingError",
    "DuplicateDetectionError",
    "ContentGenerationError",
    "ValidationError",
    # Date utils
    "parse_date",
    "now_utc",
    "lookback_cutoff",
    "to_db_timestamp",
    # Text utils
    "clean_whitespace",
    "truncate_text",
    "count_words",
    "normalize_hashtag",
    "find_phrases",
]
