"""House style guide: static voice rules plus stored brand guidelines."""

from pathlib import Path
from typing import Any, Dict

from kitchenpress.core.content import StyleGuide
from kitchenpress.database.knowledge_repository import KnowledgeRepository
from kitchenpress.services.config_loader import load_yaml
from kitchenpress.utils.exceptions import ConfigurationError
from kitchenpress.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_STYLE: Dict[str, Any] = {
    "voice": (
        "First person, warm and observational, with a little self-deprecating "
        "humor. Sounds like someone who has actually stood in a restaurant "
        "kitchen during the Friday rush."
    ),
    "audience": (
        "Independent restaurant owners and operators running on thin margins "
        "who want practical, numbers-first takes on industry news."
    ),
    "formatting_rules": [
        "Short paragraphs, two to four sentences.",
        "Lead with the financial impact before the technology.",
        "Use concrete figures with units ($, %, months) instead of adjectives.",
        "Use Markdown headings (##) to break up posts longer than 500 words.",
        "End blog posts with a practical takeaway, not a sales pitch.",
    ],
    "banned_phrases": [
        "Delve into",
        "At its core",
        "Game-changing",
        "Cutting-edge",
        "In today's fast-paced world",
    ],
}


class StyleGuideService:
    """Builds the style guide served to writers and used by the generators."""

    def __init__(self, knowledge: KnowledgeRepository, style_guide_path: Path):
        self.knowledge = knowledge
        self.style_guide_path = style_guide_path

    def _static_style(self) -> Dict[str, Any]:
        try:
            data = load_yaml(self.style_guide_path)
        except ConfigurationError as e:
            logger.warning(
                "style_guide_config_not_found_using_defaults",
                path=str(self.style_guide_path),
                error=str(e),
            )
            return dict(DEFAULT_STYLE)
        return {**DEFAULT_STYLE, **data}

    def get_style_guide(self) -> StyleGuide:
        """Get the static style merged with brand guidelines from the database.

        Returns:
            StyleGuide object.

        Raises:
            DatabaseError: If guidelines can't be read.
        """
        static = self._static_style()
        return StyleGuide(
            voice=static["voice"],
            audience=static["audience"],
            formatting_rules=list(static.get("formatting_rules", [])),
            banned_phrases=list(static.get("banned_phrases", [])),
            guidelines=self.knowledge.get_brand_guidelines(),
        )
