"""Services layer for KitchenPress."""

from kitchenpress.services.article_ingest import ArticleIngestService
from kitchenpress.services.config_loader import load_prompt_config, load_yaml
from kitchenpress.services.content_guard import ContentGuard
from kitchenpress.services.style_guide import StyleGuideService

__all__ = [
    "ArticleIngestService",
    "ContentGuard",
    "StyleGuideService",
    "load_prompt_config",
    "load_yaml",
]
