"""Repository for generated blog and social content."""

import json
import sqlite3
from typing import List, Optional

from kitchenpress.core.content import GeneratedContent
from kitchenpress.core.enums import ContentType
from kitchenpress.database.connection import DatabaseConnection
from kitchenpress.utils.date_utils import parse_date, to_db_timestamp
from kitchenpress.utils.exceptions import DatabaseError
from kitchenpress.utils.logging import get_logger

logger = get_logger(__name__)


class ContentRepository:
    """Repository for generated content."""

    def __init__(self, db: DatabaseConnection):
        """Initialize repository.

        Args:
            db: Database connection instance.
        """
        self.db = db

    def save(self, content: GeneratedContent) -> int:
        """Save generated content.

        Args:
            content: Content to save.

        Returns:
            Row id of the saved content.

        Raises:
            DatabaseError: If database operation fails.
        """
        try:
            cursor = self.db.execute(
                """
                INSERT INTO generated_content (
                    content_type, topic, title, body, payload,
                    source_urls, provider, model, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    content.content_type.value,
                    content.topic,
                    content.title,
                    content.body,
                    json.dumps(content.payload, default=str),
                    json.dumps(content.source_urls),
                    content.provider,
                    content.model,
                    to_db_timestamp(content.created_at),
                ),
            )
            self.db.commit()

            content_id = int(cursor.lastrowid)
            logger.info(
                "generated_content_saved",
                content_id=content_id,
                content_type=content.content_type.value,
                topic=content.topic,
            )
            return content_id

        except sqlite3.Error as e:
            self.db.rollback()
            logger.error("save_generated_content_failed", error=str(e))
            raise DatabaseError(f"Failed to save generated content: {e}") from e

    def list_recent(
        self,
        content_type: Optional[ContentType] = None,
        limit: int = 20,
    ) -> List[GeneratedContent]:
        """List generated content, newest first.

        Args:
            content_type: Only this kind of content.
            limit: Maximum rows returned.

        Returns:
            List of generated content.
        """
        query = "SELECT * FROM generated_content"
        params: tuple = ()
        if content_type:
            query += " WHERE content_type = ?"
            params = (content_type.value,)
        query += " ORDER BY created_at DESC, id DESC LIMIT ?"
        params += (limit,)

        try:
            rows = self.db.execute(query, params).fetchall()
        except sqlite3.Error as e:
            raise DatabaseError(f"Failed to list generated content: {e}") from e

        return [
            GeneratedContent(
                id=row["id"],
                content_type=row["content_type"],
                topic=row["topic"],
                title=row["title"],
                body=row["body"],
                payload=json.loads(row["payload"] or "{}"),
                source_urls=json.loads(row["source_urls"] or "[]"),
                provider=row["provider"],
                model=row["model"],
                created_at=parse_date(row["created_at"]),
            )
            for row in rows
        ]
