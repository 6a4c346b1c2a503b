"""Article repository for database operations."""

import json
import sqlite3
from datetime import datetime
from typing import List, Optional

from kitchenpress.core.article import ArticleToStore, HistoricalArticle
from kitchenpress.database.connection import DatabaseConnection
from kitchenpress.utils.date_utils import now_utc, parse_date, to_db_timestamp
from kitchenpress.utils.exceptions import DatabaseError
from kitchenpress.utils.logging import get_logger

logger = get_logger(__name__)


def _decode_embedding(value: Optional[str]) -> Optional[List[float]]:
    """Decode a stored embedding; unreadable values count as missing."""
    if not value:
        return None
    try:
        decoded = json.loads(value)
    except (ValueError, TypeError):
        logger.warning("stored_embedding_unreadable")
        return None
    if not isinstance(decoded, list) or not decoded:
        return None
    try:
        return [float(x) for x in decoded]
    except (ValueError, TypeError):
        logger.warning("stored_embedding_unreadable", value=value[:60])
        return None


class ArticleRepository:
    """Repository for processed articles, the history duplicates are checked against."""

    def __init__(self, db: DatabaseConnection):
        """Initialize repository.

        Args:
            db: Database connection instance.
        """
        self.db = db

    def query_recent(self, topic: str, since: datetime) -> List[HistoricalArticle]:
        """Get articles for a topic processed after a cutoff.

        Rows come back oldest first (processed_date, then id), which is the
        order duplicate detection relies on for tie-breaking.

        Args:
            topic: Exact topic key. An empty topic matches nothing.
            since: Exclusive lower bound on processed_date.

        Returns:
            Historical articles in the window.

        Raises:
            DatabaseError: If the query fails.
        """
        if not topic:
            return []

        try:
            cursor = self.db.execute(
                """
                SELECT id, title, url, title_embedding, published_date,
                       processed_date, topic, source, summary
                FROM processed_articles
                WHERE topic = ? AND processed_date > ?
                ORDER BY processed_date ASC, id ASC
                """,
                (topic, to_db_timestamp(since)),
            )
            rows = cursor.fetchall()
        except sqlite3.Error as e:
            logger.error("query_recent_failed", topic=topic, error=str(e))
            raise DatabaseError(f"Failed to query recent articles: {e}") from e

        return [self._row_to_article(row) for row in rows]

    def url_exists(self, topic: str, url: str) -> bool:
        """Check whether a URL was already stored for a topic.

        Args:
            topic: Topic key.
            url: Exact article URL.

        Returns:
            True if a row exists.
        """
        try:
            cursor = self.db.execute(
                "SELECT 1 FROM processed_articles WHERE topic = ? AND url = ? LIMIT 1",
                (topic, url),
            )
            return cursor.fetchone() is not None
        except sqlite3.Error as e:
            raise DatabaseError(f"Failed to look up article URL: {e}") from e

    def save_processed_article(
        self,
        article: ArticleToStore,
        topic: str,
        title_embedding: Optional[List[float]] = None,
        embedding_model: Optional[str] = None,
        processed_date: Optional[datetime] = None,
    ) -> int:
        """Insert a processed article.

        Args:
            article: Article to store.
            topic: Topic key the article was processed under.
            title_embedding: Title embedding, or None if it couldn't be computed.
            embedding_model: Model that produced the embedding.
            processed_date: Processing time (defaults to now).

        Returns:
            Row id of the new article.

        Raises:
            DatabaseError: If database operation fails.
        """
        try:
            cursor = self.db.execute(
                """
                INSERT INTO processed_articles (
                    title, url, title_embedding, embedding_model,
                    published_date, processed_date, topic, source, summary
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    article.title,
                    article.url,
                    json.dumps(title_embedding) if title_embedding else None,
                    embedding_model if title_embedding else None,
                    to_db_timestamp(article.published_date),
                    to_db_timestamp(processed_date or now_utc()),
                    topic,
                    article.source,
                    article.summary,
                ),
            )
            self.db.commit()
            return int(cursor.lastrowid)

        except sqlite3.Error as e:
            self.db.rollback()
            logger.error("save_processed_article_failed", url=article.url, error=str(e))
            raise DatabaseError(f"Failed to save article: {e}") from e

    def count(self, topic: Optional[str] = None) -> int:
        """Count stored articles, optionally for one topic."""
        if topic is None:
            cursor = self.db.execute("SELECT COUNT(*) FROM processed_articles")
        else:
            cursor = self.db.execute(
                "SELECT COUNT(*) FROM processed_articles WHERE topic = ?", (topic,)
            )
        return cursor.fetchone()[0]

    def _row_to_article(self, row: sqlite3.Row) -> HistoricalArticle:
        return HistoricalArticle(
            id=row["id"],
            title=row["title"],
            url=row["url"],
            title_embedding=_decode_embedding(row["title_embedding"]),
            published_date=parse_date(row["published_date"]),
            processed_date=parse_date(row["processed_date"]),
            topic=row["topic"],
            source=row["source"],
            summary=row["summary"],
        )
