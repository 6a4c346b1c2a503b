"""AI provider factory with fallback support."""

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Protocol, Union

from pydantic import BaseModel

from kitchenpress.core.config import Config
from kitchenpress.core.enums import LLMProvider
from kitchenpress.database.connection import DatabaseConnection
from kitchenpress.utils.exceptions import ConfigurationError
from kitchenpress.utils.logging import get_logger

logger = get_logger(__name__)


class LLMClient(Protocol):
    """Protocol for LLM clients - ensures consistent interface."""

    async def create_completion(
        self,
        messages: List[Dict[str, str]],
        module: str,
        request_type: str,
        model: Optional[str] = None,
        response_format: Optional[type[BaseModel]] = None,
        temperature: float = 0.0,
        max_tokens: Optional[int] = None,
    ) -> Dict[str, Any]: ...


class EmbeddingClient(Protocol):
    """Protocol for embedding providers.

    embed() returns None when the provider had nothing to return; callers
    that must stay available treat a raised exception the same way.
    """

    embedding_model: str

    async def embed(self, text: str) -> Optional[List[float]]: ...


if TYPE_CHECKING:
    from kitchenpress.integrations.gemini_client import GeminiClient
    from kitchenpress.integrations.openai_client import OpenAIClient


_FALLBACK = {
    LLMProvider.GEMINI: LLMProvider.OPENAI,
    LLMProvider.OPENAI: LLMProvider.GEMINI,
}


class ProviderFactory:
    """Factory for creating AI clients with fallback support.

    Both Gemini and OpenAI clients implement completion and embedding, so a
    single cached client per provider serves both roles.
    """

    def __init__(self, config: Config, db: Optional[DatabaseConnection], run_id: str):
        """Initialize factory.

        Args:
            config: Application configuration.
            db: Database connection for cost tracking.
            run_id: Service run ID.
        """
        self.config = config
        self.db = db
        self.run_id = run_id
        self._clients: Dict[LLMProvider, Any] = {}

        logger.info("provider_factory_initialized", run_id=run_id)

    def get_generation_client(self) -> LLMClient:
        """Get client for blog and social drafting.

        Uses the configured generation provider, falling back to the other
        provider if its API key is missing.

        Returns:
            LLM client instance.

        Raises:
            ConfigurationError: If no provider is configured.
        """
        provider = LLMProvider(self.config.generation_provider)
        return self._get_or_create_client(provider, fallback=_FALLBACK[provider])

    def get_embedding_client(self) -> EmbeddingClient:
        """Get client for title embeddings.

        Returns:
            Embedding client instance.

        Raises:
            ConfigurationError: If no provider is configured.
        """
        provider = LLMProvider(self.config.embedding_provider)
        return self._get_or_create_client(provider, fallback=_FALLBACK[provider])

    def available_providers(self) -> List[str]:
        """Providers with an API key configured."""
        available = []
        if self.config.google_api_key:
            available.append(LLMProvider.GEMINI.value)
        if self.config.openai_api_key:
            available.append(LLMProvider.OPENAI.value)
        return available

    def _get_or_create_client(
        self,
        provider: LLMProvider,
        fallback: Optional[LLMProvider] = None,
    ) -> Union["GeminiClient", "OpenAIClient"]:
        """Get or create client for provider with optional fallback.

        Args:
            provider: Requested provider.
            fallback: Fallback provider if requested one unavailable.

        Returns:
            Client instance.

        Raises:
            ConfigurationError: If no client available for provider.
        """
        if provider in self._clients:
            return self._clients[provider]

        client = self._create_client(provider)

        if client is None and fallback:
            logger.warning(
                "provider_unavailable_using_fallback",
                requested=provider.value,
                fallback=fallback.value,
            )
            client = self._create_client(fallback)

        if client is None:
            raise ConfigurationError(
                f"No AI client available for {provider.value}: "
                "set GOOGLE_API_KEY or OPENAI_API_KEY"
            )

        self._clients[provider] = client
        return client

    def _create_client(self, provider: LLMProvider) -> Any:
        """Create client for specific provider.

        Args:
            provider: Provider to create client for.

        Returns:
            Client instance or None if unavailable.
        """
        if provider == LLMProvider.GEMINI:
            if not self.config.google_api_key:
                logger.warning("google_api_key_not_configured")
                return None

            from kitchenpress.integrations.gemini_client import GeminiClient

            return GeminiClient(
                api_key=self.config.google_api_key,
                db=self.db,
                run_id=self.run_id,
                default_model=self.config.gemini_model,
                embedding_model=self.config.gemini_embedding_model,
            )

        elif provider == LLMProvider.OPENAI:
            if not self.config.openai_api_key:
                logger.warning("openai_api_key_not_configured")
                return None

            from kitchenpress.integrations.openai_client import OpenAIClient

            return OpenAIClient(
                api_key=self.config.openai_api_key,
                db=self.db,
                run_id=self.run_id,
                default_model=self.config.openai_model,
                embedding_model=self.config.openai_embedding_model,
            )

        return None
