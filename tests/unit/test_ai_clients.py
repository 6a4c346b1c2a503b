# tests/unit/test_ai_clients.py
"""Unit tests for the AI clients and provider factory."""

import json
from unittest.mock import AsyncMock, Mock

import pytest
from google.genai import errors as genai_errors

from kitchenpress.core.config import Config
from kitchenpress.core.content import SocialPostsResponse
from kitchenpress.integrations.gemini_client import GeminiClient, _is_transient
from kitchenpress.integrations.openai_client import OpenAIClient
from kitchenpress.integrations.provider_factory import ProviderFactory
from kitchenpress.utils.exceptions import AIServiceError, ConfigurationError, EmbeddingError


def config(**kwargs) -> Config:
    values = {"google_api_key": None, "openai_api_key": None}
    values.update(kwargs)
    return Config(_env_file=None, **values)


@pytest.mark.unit
class TestProviderFactory:
    """Tests for ProviderFactory class."""

    def test_no_keys(self):
        """Should raise ConfigurationError when no provider is configured."""
        factory = ProviderFactory(config(), db=None, run_id="run-1")

        with pytest.raises(ConfigurationError):
            factory.get_embedding_client()
        assert factory.available_providers() == []

    def test_configured_provider(self):
        """Should build and cache the configured provider's client."""
        factory = ProviderFactory(config(google_api_key="g-key"), db=None, run_id="run-1")

        client = factory.get_embedding_client()

        assert isinstance(client, GeminiClient)
        assert factory.get_generation_client() is client
        assert factory.available_providers() == ["gemini"]

    def test_falls_back_to_other_provider(self):
        """Should use OpenAI when Gemini has no key."""
        factory = ProviderFactory(config(openai_api_key="o-key"), db=None, run_id="run-1")

        client = factory.get_generation_client()

        assert isinstance(client, OpenAIClient)
        assert client.embedding_model == "text-embedding-3-small"


@pytest.mark.unit
class TestGeminiClient:
    """Tests for GeminiClient class."""

    @pytest.fixture
    def client(self):
        client = GeminiClient(api_key="test-key", db=None, run_id="run-1")
        client.client = Mock()
        return client

    @pytest.mark.asyncio
    async def test_embed(self, client):
        """Should return the first embedding's values."""
        client.client.models.embed_content.return_value = Mock(embeddings=[Mock(values=[0.1, 0.2])])

        assert await client.embed("Toast IPO") == [0.1, 0.2]
        kwargs = client.client.models.embed_content.call_args.kwargs
        assert kwargs == {"model": "text-embedding-004", "contents": "Toast IPO"}

    @pytest.mark.asyncio
    async def test_embed_empty(self, client):
        """Should return None when no vector comes back."""
        client.client.models.embed_content.return_value = Mock(embeddings=[])
        assert await client.embed("Toast IPO") is None

    @pytest.mark.parametrize(
        "error,expected",
        [
            (genai_errors.ClientError(429, {"error": {"message": "Resource exhausted"}}), True),
            (genai_errors.ServerError(503, {"error": {"message": "Unavailable"}}), True),
            (genai_errors.ClientError(400, {"error": {"message": "Prompt over 1500 tokens"}}), False),
            (ValueError("rate of 500 per generate call"), False),
        ],
    )
    def test_is_transient(self, error, expected):
        """Should retry only rate limits and server errors by status code."""
        assert _is_transient(error) is expected

    @pytest.mark.asyncio
    async def test_embed_failure(self, client):
        """Should raise EmbeddingError on API errors."""
        client.client.models.embed_content.side_effect = ValueError("invalid argument")

        with pytest.raises(EmbeddingError):
            await client.embed("Toast IPO")
        assert client.client.models.embed_content.call_count == 1

    @pytest.mark.asyncio
    async def test_structured_completion(self, client):
        """Should parse JSON output against the response model."""
        payload = {"posts": [{"platform": "twitter", "content": "Hi", "hashtags": []}]}
        client.client.models.generate_content.return_value = Mock(
            text=json.dumps([payload]),
            usage_metadata=Mock(prompt_token_count=100, candidates_token_count=50),
        )

        response = await client.create_completion(
            messages=[
                {"role": "system", "content": "Be brief"},
                {"role": "user", "content": "Write"},
            ],
            module="social",
            request_type="social_posts",
            response_format=SocialPostsResponse,
        )

        assert response["content"] == payload
        assert response["provider"] == "gemini"
        assert response["usage"]["total_tokens"] == 150
        request_config = client.client.models.generate_content.call_args.kwargs["config"]
        assert request_config["system_instruction"] == "Be brief"
        assert request_config["response_mime_type"] == "application/json"

    @pytest.mark.asyncio
    async def test_empty_completion(self, client):
        """Should raise AIServiceError on an empty response."""
        client.client.models.generate_content.return_value = Mock(text="", usage_metadata=None)

        with pytest.raises(AIServiceError):
            await client.create_completion(
                messages=[{"role": "user", "content": "Write"}],
                module="blog",
                request_type="blog_draft",
            )


@pytest.mark.unit
class TestOpenAIClient:
    """Tests for OpenAIClient class."""

    @pytest.fixture
    def client(self):
        client = OpenAIClient(api_key="test-key", db=None, run_id="run-1")
        client.client = Mock()
        return client

    @pytest.mark.asyncio
    async def test_embed(self, client):
        """Should return the first vector."""
        client.client.embeddings.create = AsyncMock(
            return_value=Mock(data=[Mock(embedding=[0.3, 0.4])], usage=Mock(prompt_tokens=5))
        )

        assert await client.embed("Toast IPO") == [0.3, 0.4]

    @pytest.mark.asyncio
    async def test_embed_failure(self, client):
        """Should raise EmbeddingError on API errors."""
        client.client.embeddings.create = AsyncMock(side_effect=RuntimeError("timeout"))

        with pytest.raises(EmbeddingError):
            await client.embed("Toast IPO")
