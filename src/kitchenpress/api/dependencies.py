"""FastAPI dependencies resolving collaborators from app state."""

from typing import Optional

from fastapi import Request

from kitchenpress.core.config import Config
from kitchenpress.database.connection import DatabaseConnection
from kitchenpress.database.content_repository import ContentRepository
from kitchenpress.database.knowledge_repository import KnowledgeRepository
from kitchenpress.database.repository import ArticleRepository
from kitchenpress.integrations.provider_factory import EmbeddingClient, ProviderFactory
from kitchenpress.pipeline.dedup.duplicate_detector import DuplicateDetector
from kitchenpress.pipeline.generators.blog_generator import BlogGenerator
from kitchenpress.pipeline.generators.social_generator import SocialGenerator
from kitchenpress.services.article_ingest import ArticleIngestService
from kitchenpress.services.style_guide import StyleGuideService
from kitchenpress.utils.exceptions import ConfigurationError
from kitchenpress.utils.logging import get_logger

logger = get_logger(__name__)


def get_config(request: Request) -> Config:
    return request.app.state.config


def get_db(request: Request) -> DatabaseConnection:
    return request.app.state.db


def get_provider_factory(request: Request) -> ProviderFactory:
    return request.app.state.provider_factory


def get_embedding_provider(request: Request) -> Optional[EmbeddingClient]:
    """Embedding client, or None if no provider is configured.

    Without a provider, duplicate checks fall back to URL matching only and
    stored articles get no embedding.
    """
    try:
        return get_provider_factory(request).get_embedding_client()
    except ConfigurationError as e:
        logger.warning("embedding_provider_unconfigured", error=str(e))
        return None


def get_style_guide_service(request: Request) -> StyleGuideService:
    return StyleGuideService(
        KnowledgeRepository(get_db(request)),
        get_config(request).style_guide_path,
    )


def get_duplicate_detector(request: Request) -> DuplicateDetector:
    return DuplicateDetector.from_config(
        get_config(request).detector,
        article_store=ArticleRepository(get_db(request)),
        embedding_provider=get_embedding_provider(request),
    )


def get_article_ingest_service(request: Request) -> ArticleIngestService:
    return ArticleIngestService(
        ArticleRepository(get_db(request)),
        get_embedding_provider(request),
    )


def get_blog_generator(request: Request) -> BlogGenerator:
    db = get_db(request)
    return BlogGenerator(
        llm_client=get_provider_factory(request).get_generation_client(),
        knowledge=KnowledgeRepository(db),
        content_repository=ContentRepository(db),
        style_guides=get_style_guide_service(request),
        prompt_config_dir=get_config(request).prompt_config_dir,
    )


def get_social_generator(request: Request) -> SocialGenerator:
    db = get_db(request)
    return SocialGenerator(
        llm_client=get_provider_factory(request).get_generation_client(),
        knowledge=KnowledgeRepository(db),
        content_repository=ContentRepository(db),
        style_guides=get_style_guide_service(request),
        prompt_config_dir=get_config(request).prompt_config_dir,
    )
