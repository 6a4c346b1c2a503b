"""AI provider integrations."""

from kitchenpress.integrations.provider_factory import (
    EmbeddingClient,
    LLMClient,
    ProviderFactory,
)

__all__ = ["EmbeddingClient", "LLMClient", "ProviderFactory"]
