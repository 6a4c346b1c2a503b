"""Shared plumbing for the content generators."""

from pathlib import Path
from typing import Any, Dict, List, Optional, Type

from jinja2 import Environment, StrictUndefined, TemplateError
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from kitchenpress.core.config import PromptConfig
from kitchenpress.core.content import GeneratedContent
from kitchenpress.database.content_repository import ContentRepository
from kitchenpress.database.knowledge_repository import KnowledgeRepository
from kitchenpress.integrations.provider_factory import LLMClient
from kitchenpress.services.config_loader import load_prompt_config
from kitchenpress.services.content_guard import ContentGuard
from kitchenpress.services.style_guide import StyleGuideService
from kitchenpress.utils.exceptions import (
    AIServiceError,
    ConfigurationError,
    ContentGenerationError,
)
from kitchenpress.utils.logging import get_logger

logger = get_logger(__name__)

# Prompts are plain text, never HTML
_env = Environment(
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
    undefined=StrictUndefined,
)


class BaseGenerator:
    """Loads a prompt, calls the model for structured output and stores the result.

    Subclasses set prompt_name, module and the default prompt used when the
    YAML prompt file is missing.
    """

    prompt_name: str = ""
    module: str = ""
    default_system_prompt: str = ""
    default_user_prompt_template: str = ""

    def __init__(
        self,
        llm_client: LLMClient,
        knowledge: KnowledgeRepository,
        content_repository: ContentRepository,
        style_guides: StyleGuideService,
        prompt_config_dir: Path = Path("config/prompts"),
        temperature: float = 0.7,
    ):
        """Initialize generator.

        Args:
            llm_client: Client used for drafting.
            knowledge: Knowledge base for trends, entities and the blacklist.
            content_repository: Where drafts are persisted.
            style_guides: Source of the house style guide.
            prompt_config_dir: Directory holding <prompt_name>.yaml.
            temperature: Sampling temperature for drafting.
        """
        self.llm_client = llm_client
        self.knowledge = knowledge
        self.content_repository = content_repository
        self.style_guides = style_guides
        self.temperature = temperature
        self.prompt = self._load_prompt(prompt_config_dir)

    def _load_prompt(self, prompt_config_dir: Path) -> PromptConfig:
        try:
            return load_prompt_config(self.prompt_name, prompt_config_dir)
        except ConfigurationError as e:
            logger.warning(
                "prompt_config_not_found_using_defaults",
                prompt=self.prompt_name,
                error=str(e),
            )
            return PromptConfig(
                system_prompt=self.default_system_prompt,
                user_prompt_template=self.default_user_prompt_template,
            )

    def render_messages(self, **context: Any) -> List[Dict[str, str]]:
        """Render system and user prompts with the given context.

        Raises:
            ContentGenerationError: If a template can't be rendered.
        """
        try:
            system = _env.from_string(self.prompt.system_prompt).render(**context)
            user = _env.from_string(self.prompt.user_prompt_template).render(**context)
        except TemplateError as e:
            raise ContentGenerationError(
                f"Prompt '{self.prompt_name}' failed to render: {e}"
            ) from e

        return [
            {"role": "system", "content": system.strip()},
            {"role": "user", "content": user.strip()},
        ]

    async def complete(
        self,
        messages: List[Dict[str, str]],
        request_type: str,
        response_format: Type[BaseModel],
    ) -> Dict[str, Any]:
        """Call the model and validate its structured response.

        Returns:
            The client response with 'content' replaced by the validated model.

        Raises:
            ContentGenerationError: If the call fails or the output is invalid.
        """
        try:
            response = await self.llm_client.create_completion(
                messages=messages,
                module=self.module,
                request_type=request_type,
                response_format=response_format,
                temperature=self.temperature,
            )
            parsed = response_format.model_validate(response["content"])
        except AIServiceError as e:
            raise ContentGenerationError(f"{self.module} generation failed: {e}") from e
        except (PydanticValidationError, KeyError, TypeError) as e:
            logger.error("generation_output_invalid", module=self.module, error=str(e))
            raise ContentGenerationError(
                f"{self.module} generation returned invalid output: {e}"
            ) from e

        return {**response, "content": parsed}

    def build_guard(self, style_guide: Any) -> ContentGuard:
        return ContentGuard(style_guide, self.knowledge.get_active_restrictions())

    def persist(self, content: GeneratedContent) -> Optional[int]:
        return self.content_repository.save(content)
