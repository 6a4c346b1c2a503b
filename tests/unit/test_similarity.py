# tests/unit/test_similarity.py
"""Unit tests for vector similarity and fail-open embedding."""

import math

import pytest

from conftest import FakeEmbeddingProvider
from kitchenpress.pipeline.dedup.similarity import cosine_similarity, safe_embed


@pytest.mark.unit
class TestCosineSimilarity:
    """Tests for cosine_similarity function."""

    def test_identical_vectors(self):
        """Should return 1 for identical direction."""
        assert cosine_similarity([1.0, 2.0, 3.0], [2.0, 4.0, 6.0]) == pytest.approx(1.0)

    def test_orthogonal_vectors(self):
        """Should return 0 for orthogonal vectors."""
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == 0.0

    def test_opposite_vectors(self):
        """Should return -1 for opposite vectors."""
        assert cosine_similarity([1.0, 1.0], [-1.0, -1.0]) == pytest.approx(-1.0)

    def test_known_angle(self):
        """Should match the cosine of the angle between vectors."""
        b = [0.9, math.sqrt(1 - 0.81)]
        assert cosine_similarity([1.0, 0.0], b) == pytest.approx(0.9)

    @pytest.mark.parametrize(
        "a,b",
        [
            ([0.3, -0.2, 0.9], [0.1, 0.8, -0.4]),
            ([1e-8, 2e-8], [3e8, -1e8]),
            ([0.5, 0.5, 0.5, 0.5], [0.1, 0.2, 0.3, 0.4]),
        ],
    )
    def test_symmetric(self, a, b):
        """Should not depend on argument order."""
        assert cosine_similarity(a, b) == cosine_similarity(b, a)

    @pytest.mark.parametrize(
        "a,b",
        [
            (None, [1.0, 2.0]),
            ([1.0, 2.0], None),
            ([], [1.0]),
            ([], []),
            ([1.0, 2.0], [1.0, 2.0, 3.0]),
            ([0.0, 0.0], [1.0, 2.0]),
            ([1.0, 2.0], [0.0, 0.0]),
            ([1e308, 1e308], [1.0, 1.0]),
            ([math.inf, 1.0], [1.0, -math.inf]),
            ([math.nan, 1.0], [1.0, 1.0]),
        ],
    )
    def test_degenerate_vectors_score_zero(self, a, b):
        """Should return 0 for missing, empty, mismatched, zero or non-finite vectors."""
        assert cosine_similarity(a, b) == 0.0

    def test_result_is_clamped(self):
        """Should never exceed 1 due to rounding."""
        v = [0.1] * 768
        assert cosine_similarity(v, v) <= 1.0


@pytest.mark.unit
class TestSafeEmbed:
    """Tests for safe_embed function."""

    @pytest.mark.asyncio
    async def test_returns_vector(self):
        """Should return the provider's vector."""
        provider = FakeEmbeddingProvider({"Toast raises prices": [0.1, 0.2]})
        assert await safe_embed(provider, "Toast raises prices") == [0.1, 0.2]

    @pytest.mark.asyncio
    async def test_provider_error_gives_none(self):
        """Should swallow provider errors and return None."""
        provider = FakeEmbeddingProvider(failing=["boom"])
        assert await safe_embed(provider, "boom") is None
        assert provider.calls == ["boom"]

    @pytest.mark.asyncio
    async def test_empty_vector_gives_none(self):
        """Should treat an empty vector as no embedding."""
        provider = FakeEmbeddingProvider({"x": []})
        assert await safe_embed(provider, "x") is None

    @pytest.mark.asyncio
    async def test_no_provider(self):
        """Should return None when no provider is configured."""
        assert await safe_embed(None, "anything") is None
