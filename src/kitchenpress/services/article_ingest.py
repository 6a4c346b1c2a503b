"""Stores processed articles with their title embeddings."""

from typing import List, Optional, Set

from kitchenpress.core.article import ArticleToStore, StoreArticlesResponse
from kitchenpress.database.repository import ArticleRepository
from kitchenpress.integrations.provider_factory import EmbeddingClient
from kitchenpress.pipeline.dedup.similarity import safe_embed
from kitchenpress.utils.logging import get_logger

logger = get_logger(__name__)


class ArticleIngestService:
    """Writes the history that duplicate detection reads.

    Embeddings are best effort: an article whose title can't be embedded is
    stored without one and only takes part in exact URL matching later.
    """

    def __init__(
        self,
        repository: ArticleRepository,
        embedding_provider: Optional[EmbeddingClient],
    ):
        self.repository = repository
        self.embedding_provider = embedding_provider

    async def store(self, articles: List[ArticleToStore], topic: str) -> StoreArticlesResponse:
        """Store articles for a topic, skipping URLs already on record.

        Args:
            articles: Articles to store.
            topic: Topic key to file them under.

        Returns:
            Counts of stored, skipped and embedding failures.

        Raises:
            DatabaseError: If a lookup or insert fails.
        """
        stored = skipped = embedding_failures = 0
        seen: Set[str] = set()
        embedding_model = getattr(self.embedding_provider, "embedding_model", None)

        for article in articles:
            if article.url in seen or self.repository.url_exists(topic, article.url):
                skipped += 1
                continue
            seen.add(article.url)

            embedding = await safe_embed(self.embedding_provider, article.title)
            if embedding is None:
                embedding_failures += 1

            self.repository.save_processed_article(
                article,
                topic=topic,
                title_embedding=embedding,
                embedding_model=embedding_model,
            )
            stored += 1

        logger.info(
            "articles_stored",
            topic=topic,
            stored=stored,
            skipped=skipped,
            embedding_failures=embedding_failures,
        )

        return StoreArticlesResponse(
            stored=stored,
            skipped=skipped,
            embedding_failures=embedding_failures,
        )
