"""Vector similarity and fail-open embedding helpers."""

import math
from typing import List, Optional, Sequence

from kitchenpress.integrations.provider_factory import EmbeddingClient
from kitchenpress.utils.logging import get_logger

logger = get_logger(__name__)


def cosine_similarity(
    a: Optional[Sequence[float]], b: Optional[Sequence[float]]
) -> float:
    """Cosine similarity of two vectors.

    Returns 0.0 instead of raising when either vector is missing or empty,
    the lengths differ, either norm is zero, or the arithmetic overflows
    to a non-finite value. The result is clamped to [-1, 1] to absorb
    floating point drift.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        Similarity in [-1, 1].
    """
    if not a or not b or len(a) != len(b):
        return 0.0

    # Plain sum: overflow and inf - inf become inf or nan instead of raising
    dot = sum(x * y for x, y in zip(a, b))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(y * y for y in b))

    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    similarity = dot / (norm_a * norm_b)
    if not math.isfinite(similarity):
        return 0.0
    return max(-1.0, min(1.0, similarity))


async def safe_embed(
    provider: Optional[EmbeddingClient], text: str
) -> Optional[List[float]]:
    """Embed text, turning any provider failure into "no embedding".

    Args:
        provider: Embedding client, or None when none is configured.
        text: Text to embed (may be empty; the provider decides).

    Returns:
        Embedding vector, or None on failure or empty result.
    """
    if provider is None:
        return None

    try:
        vector = await provider.embed(text)
    except Exception as e:
        logger.warning("embedding_failed", text=text[:60], error=str(e))
        return None

    if not vector:
        logger.warning("embedding_empty", text=text[:60])
        return None
    return list(vector)
