"""Database layer."""

from kitchenpress.database.connection import (
    DatabaseConnection,
    init_database,
    seed_knowledge_base,
)
from kitchenpress.database.content_repository import ContentRepository
from kitchenpress.database.knowledge_repository import KnowledgeRepository
from kitchenpress.database.repository import ArticleRepository

__all__ = [
    "DatabaseConnection",
    "init_database",
    "seed_knowledge_base",
    "ArticleRepository",
    "ContentRepository",
    "KnowledgeRepository",
]
