"""Duplicate detection against previously processed articles."""

from kitchenpress.pipeline.dedup.duplicate_detector import (
    DUPLICATE_URL_REASON,
    ArticleStore,
    DuplicateDetector,
    similarity_reason,
)
from kitchenpress.pipeline.dedup.similarity import cosine_similarity, safe_embed

__all__ = [
    "DUPLICATE_URL_REASON",
    "ArticleStore",
    "DuplicateDetector",
    "cosine_similarity",
    "safe_embed",
    "similarity_reason",
]
