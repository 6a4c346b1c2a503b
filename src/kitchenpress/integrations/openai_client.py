"""OpenAI API client with cost tracking."""

from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI
from pydantic import BaseModel

from kitchenpress.database.connection import DatabaseConnection
from kitchenpress.integrations.cost_tracking import track_api_call
from kitchenpress.utils.date_utils import now_utc
from kitchenpress.utils.exceptions import AIServiceError, EmbeddingError
from kitchenpress.utils.logging import get_logger

logger = get_logger(__name__)


# OpenAI Pricing (October 2026)
# https://openai.com/api/pricing/
PRICING = {
    "gpt-4o-mini": {
        "input": 0.150 / 1_000_000,
        "output": 0.600 / 1_000_000,
    },
    "gpt-4o": {
        "input": 2.50 / 1_000_000,
        "output": 10.00 / 1_000_000,
    },
}

EMBEDDING_PRICING = {
    "text-embedding-3-small": 0.02 / 1_000_000,
    "text-embedding-3-large": 0.13 / 1_000_000,
}


class OpenAIClient:
    """Wrapper for OpenAI API with cost tracking and structured outputs."""

    provider = "openai"

    def __init__(
        self,
        api_key: str,
        db: Optional[DatabaseConnection],
        run_id: str,
        default_model: str = "gpt-4o-mini",
        embedding_model: str = "text-embedding-3-small",
        timeout: float = 30.0,
    ):
        """Initialize OpenAI client.

        Args:
            api_key: OpenAI API key.
            db: Database connection for cost tracking (None disables tracking).
            run_id: Current service run ID.
            default_model: Default chat model.
            embedding_model: Model used for text embeddings.
            timeout: Request timeout in seconds.
        """
        self.client = AsyncOpenAI(api_key=api_key, timeout=timeout, max_retries=2)
        self.db = db
        self.run_id = run_id
        self.default_model = default_model
        self.embedding_model = embedding_model

    async def create_completion(
        self,
        messages: List[Dict[str, str]],
        module: str,
        request_type: str,
        model: Optional[str] = None,
        response_format: Optional[type[BaseModel]] = None,
        temperature: float = 0.0,
        max_tokens: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Create a chat completion with cost tracking.

        Args:
            messages: List of message dicts with 'role' and 'content'.
            module: Module name for tracking (e.g., "blog", "social").
            request_type: Type of request (e.g., "blog_draft").
            model: Model to use (defaults to default_model).
            response_format: Pydantic model for structured outputs.
            temperature: Sampling temperature (0.0-2.0).
            max_tokens: Maximum tokens in response.

        Returns:
            Dict with 'content' and 'usage' keys.

        Raises:
            AIServiceError: If API call fails.
        """
        model = model or self.default_model
        started_at = now_utc()

        logger.info(
            "openai_request",
            model=model,
            module=module,
            request_type=request_type,
        )

        try:
            params: Dict[str, Any] = {
                "model": model,
                "messages": messages,
                "temperature": temperature,
            }
            if max_tokens:
                params["max_tokens"] = max_tokens

            if response_format:
                params["response_format"] = response_format
                response = await self.client.chat.completions.parse(**params)
                parsed = response.choices[0].message.parsed
                content_dict = parsed.model_dump() if parsed else {}
            else:
                response = await self.client.chat.completions.create(**params)
                content_dict = {"text": response.choices[0].message.content}

            usage = response.usage
            if not usage:
                raise AIServiceError("No usage information in response")

            input_tokens = usage.prompt_tokens
            output_tokens = usage.completion_tokens
            cost = self._calculate_cost(model, input_tokens, output_tokens)

            track_api_call(
                self.db,
                self.run_id,
                module=module,
                model=model,
                request_type=request_type,
                input_tokens=input_tokens,
                output_tokens=output_tokens,
                cost=cost,
                success=True,
                started_at=started_at,
            )

            logger.info(
                "openai_response_success",
                model=model,
                input_tokens=input_tokens,
                output_tokens=output_tokens,
                cost=cost,
            )

            return {
                "content": content_dict,
                "usage": {
                    "input_tokens": input_tokens,
                    "output_tokens": output_tokens,
                    "total_tokens": usage.total_tokens,
                    "cost": cost,
                },
                "model": model,
                "provider": self.provider,
            }

        except Exception as e:
            logger.error(
                "openai_request_failed",
                model=model,
                module=module,
                error=str(e),
            )
            track_api_call(
                self.db,
                self.run_id,
                module=module,
                model=model,
                request_type=request_type,
                input_tokens=0,
                output_tokens=0,
                cost=0.0,
                success=False,
                started_at=started_at,
                error_message=str(e),
            )
            raise AIServiceError(f"OpenAI API call failed: {e}") from e

    async def embed(self, text: str) -> Optional[List[float]]:
        """Compute a text embedding.

        Args:
            text: Text to embed.

        Returns:
            Embedding vector, or None if the API returned no vector.

        Raises:
            EmbeddingError: If the API call fails.
        """
        started_at = now_utc()
        try:
            response = await self.client.embeddings.create(
                model=self.embedding_model,
                input=text,
            )
        except Exception as e:
            track_api_call(
                self.db,
                self.run_id,
                module="embeddings",
                model=self.embedding_model,
                request_type="embedding",
                input_tokens=0,
                output_tokens=0,
                cost=0.0,
                success=False,
                started_at=started_at,
                error_message=str(e),
            )
            raise EmbeddingError(f"OpenAI embedding failed: {e}") from e

        input_tokens = response.usage.prompt_tokens if response.usage else 0
        price = EMBEDDING_PRICING.get(
            self.embedding_model, EMBEDDING_PRICING["text-embedding-3-small"]
        )
        track_api_call(
            self.db,
            self.run_id,
            module="embeddings",
            model=self.embedding_model,
            request_type="embedding",
            input_tokens=input_tokens,
            output_tokens=0,
            cost=round(input_tokens * price, 8),
            success=True,
            started_at=started_at,
        )

        if not response.data:
            return None
        return list(response.data[0].embedding)

    def _calculate_cost(self, model: str, input_tokens: int, output_tokens: int) -> float:
        """Calculate cost of API call.

        Args:
            model: Model name.
            input_tokens: Number of input tokens.
            output_tokens: Number of output tokens.

        Returns:
            Cost in USD.
        """
        if model not in PRICING:
            logger.warning("unknown_model_pricing", model=model)
            model = "gpt-4o-mini"

        pricing = PRICING[model]
        cost = (input_tokens * pricing["input"]) + (output_tokens * pricing["output"])

        return round(cost, 6)
