"""Google Gemini API client with cost tracking."""

import asyncio
import json
from typing import Any, Dict, List, Optional

from google import genai
from google.genai import errors as genai_errors
from pydantic import BaseModel
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from kitchenpress.database.connection import DatabaseConnection
from kitchenpress.integrations.cost_tracking import track_api_call
from kitchenpress.utils.date_utils import now_utc
from kitchenpress.utils.exceptions import AIServiceError, EmbeddingError
from kitchenpress.utils.logging import get_logger

logger = get_logger(__name__)

MAX_RETRIES = 3
TRANSIENT_STATUS_CODES = {429, 500, 502, 503, 504}

# Gemini Pricing (October 2026)
# https://ai.google.dev/gemini-api/docs/pricing
GEMINI_PRICING = {
    "gemini-2.0-flash": {
        "input": 0.10 / 1_000_000,
        "output": 0.40 / 1_000_000,
    },
    "gemini-2.0-flash-lite": {
        "input": 0.075 / 1_000_000,
        "output": 0.30 / 1_000_000,
    },
    "gemini-2.5-flash": {
        "input": 0.30 / 1_000_000,
        "output": 2.50 / 1_000_000,
    },
}


def _is_transient(error: BaseException) -> bool:
    """Rate limits and server errors are worth retrying."""
    return (
        isinstance(error, genai_errors.APIError)
        and error.code in TRANSIENT_STATUS_CODES
    )


class GeminiClient:
    """Google Gemini API client with cost tracking."""

    provider = "gemini"

    def __init__(
        self,
        api_key: str,
        db: Optional[DatabaseConnection],
        run_id: str,
        default_model: str = "gemini-2.0-flash",
        embedding_model: str = "text-embedding-004",
    ):
        """Initialize Gemini client.

        Args:
            api_key: Google API key.
            db: Database connection for cost tracking (None disables tracking).
            run_id: Current service run ID.
            default_model: Default generation model.
            embedding_model: Model used for text embeddings.
        """
        self.client = genai.Client(api_key=api_key)
        self.db = db
        self.run_id = run_id
        self.default_model = default_model
        self.embedding_model = embedding_model

        logger.info(
            "gemini_client_initialized",
            model=default_model,
            embedding_model=embedding_model,
        )

    async def _call_with_retry(self, func: Any, **kwargs: Any) -> Any:
        """Run a blocking SDK call in a thread, retrying transient failures."""
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(MAX_RETRIES),
            wait=wait_exponential(multiplier=1.0, min=1, max=8),
            retry=retry_if_exception(_is_transient),
            reraise=True,
        ):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.warning(
                        "gemini_retry",
                        attempt=attempt.retry_state.attempt_number,
                    )
                return await asyncio.to_thread(func, **kwargs)

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
        """Create completion with Gemini.

        Converts OpenAI-style messages to Gemini format for compatibility.

        Args:
            messages: List of message dicts with 'role' and 'content'.
            module: Module name for tracking.
            request_type: Type of request.
            model: Model to use (defaults to default_model).
            response_format: Pydantic model for structured outputs.
            temperature: Sampling temperature.
            max_tokens: Maximum tokens in response.

        Returns:
            Dict with 'content' and 'usage' keys.

        Raises:
            AIServiceError: If API call fails.
        """
        model_name = model or self.default_model
        started_at = now_utc()

        logger.info(
            "gemini_request",
            model=model_name,
            module=module,
            request_type=request_type,
        )

        try:
            system_instruction, contents = self._convert_messages(messages)

            config_dict: Dict[str, Any] = {
                "temperature": temperature,
                "max_output_tokens": max_tokens or 4096,
            }
            if system_instruction:
                config_dict["system_instruction"] = system_instruction
            if response_format:
                config_dict["response_mime_type"] = "application/json"
                config_dict["response_schema"] = response_format

            response = await self._call_with_retry(
                self.client.models.generate_content,
                model=model_name,
                contents=contents,
                config=config_dict,
            )

            if not response.text:
                raise AIServiceError("Empty response from Gemini API")

            if response_format:
                content_dict = json.loads(response.text)
                # Gemini sometimes wraps response in a list - extract first element
                if isinstance(content_dict, list) and content_dict:
                    content_dict = content_dict[0]
                content_dict = response_format.model_validate(content_dict).model_dump()
            else:
                content_dict = {"text": response.text}

            usage = response.usage_metadata
            input_tokens = (usage.prompt_token_count or 0) if usage else 0
            output_tokens = (usage.candidates_token_count or 0) if usage else 0
            cost = self._calculate_cost(model_name, input_tokens, output_tokens)

            track_api_call(
                self.db,
                self.run_id,
                module=module,
                model=f"gemini:{model_name}",
                request_type=request_type,
                input_tokens=input_tokens,
                output_tokens=output_tokens,
                cost=cost,
                success=True,
                started_at=started_at,
            )

            logger.info(
                "gemini_response_success",
                model=model_name,
                input_tokens=input_tokens,
                output_tokens=output_tokens,
                cost=cost,
            )

            return {
                "content": content_dict,
                "usage": {
                    "input_tokens": input_tokens,
                    "output_tokens": output_tokens,
                    "total_tokens": input_tokens + output_tokens,
                    "cost": cost,
                },
                "model": model_name,
                "provider": self.provider,
            }

        except Exception as e:
            logger.error("gemini_request_failed", model=model_name, error=str(e))
            track_api_call(
                self.db,
                self.run_id,
                module=module,
                model=f"gemini:{model_name}",
                request_type=request_type,
                input_tokens=0,
                output_tokens=0,
                cost=0.0,
                success=False,
                started_at=started_at,
                error_message=str(e),
            )
            raise AIServiceError(f"Gemini API call failed: {e}") from e

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
            response = await self._call_with_retry(
                self.client.models.embed_content,
                model=self.embedding_model,
                contents=text,
            )
        except Exception as e:
            track_api_call(
                self.db,
                self.run_id,
                module="embeddings",
                model=f"gemini:{self.embedding_model}",
                request_type="embedding",
                input_tokens=0,
                output_tokens=0,
                cost=0.0,
                success=False,
                started_at=started_at,
                error_message=str(e),
            )
            raise EmbeddingError(f"Gemini embedding failed: {e}") from e

        track_api_call(
            self.db,
            self.run_id,
            module="embeddings",
            model=f"gemini:{self.embedding_model}",
            request_type="embedding",
            input_tokens=0,
            output_tokens=0,
            cost=0.0,
            success=True,
            started_at=started_at,
        )

        if not response.embeddings or not response.embeddings[0].values:
            return None
        return list(response.embeddings[0].values)

    def _convert_messages(
        self, messages: List[Dict[str, str]]
    ) -> tuple[Optional[str], List[Dict[str, Any]]]:
        """Convert OpenAI message format to Gemini format.

        Args:
            messages: OpenAI-style messages.

        Returns:
            Tuple of (system_instruction, contents).
        """
        system_instruction = None
        contents = []

        for msg in messages:
            role = msg["role"]
            if role == "system":
                system_instruction = msg["content"]
            elif role == "user":
                contents.append({"role": "user", "parts": [{"text": msg["content"]}]})
            elif role == "assistant":
                contents.append({"role": "model", "parts": [{"text": msg["content"]}]})

        return system_instruction, contents

    def _calculate_cost(self, model: str, input_tokens: int, output_tokens: int) -> float:
        """Calculate cost of API call in USD."""
        pricing = GEMINI_PRICING.get(model, GEMINI_PRICING["gemini-2.0-flash"])
        cost = (input_tokens * pricing["input"]) + (output_tokens * pricing["output"])
        return round(cost, 8)
