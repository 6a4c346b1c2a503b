"""Knowledge base repository: industry entities, trends, brand rules, blacklist."""

import json
import sqlite3
from typing import Any, List, Optional

from kitchenpress.core.content import (
    BrandGuideline,
    CompetitorRestriction,
    IndustryContext,
    IndustryTrend,
    KnowledgeEntity,
)
from kitchenpress.database.connection import DatabaseConnection
from kitchenpress.utils.exceptions import DatabaseError
from kitchenpress.utils.logging import get_logger

logger = get_logger(__name__)


def _json_column(value: Optional[str], default: Any) -> Any:
    if not value:
        return default
    try:
        return json.loads(value)
    except ValueError:
        logger.warning("json_column_unreadable", value=value[:60])
        return default


class KnowledgeRepository:
    """Read access to the restaurant-industry knowledge base."""

    def __init__(self, db: DatabaseConnection):
        self.db = db

    def _fetch(self, query: str, params: tuple = ()) -> List[sqlite3.Row]:
        try:
            return self.db.execute(query, params).fetchall()
        except sqlite3.Error as e:
            logger.error("knowledge_query_failed", error=str(e))
            raise DatabaseError(f"Knowledge base query failed: {e}") from e

    def get_brand_guidelines(self, applies_to: Optional[str] = None) -> List[BrandGuideline]:
        """Get brand guidelines, highest priority first.

        Args:
            applies_to: Only guidelines for this content kind (e.g. "blog_content").

        Returns:
            List of guidelines.
        """
        rows = self._fetch(
            "SELECT * FROM brand_guidelines ORDER BY priority_level ASC, id ASC"
        )
        guidelines = [
            BrandGuideline(
                id=row["id"],
                guideline_category=row["guideline_category"],
                guideline_name=row["guideline_name"],
                guideline_description=row["guideline_description"],
                do_examples=_json_column(row["do_examples"], []),
                dont_examples=_json_column(row["dont_examples"], []),
                applies_to=_json_column(row["applies_to"], []),
                priority_level=row["priority_level"],
            )
            for row in rows
        ]
        if applies_to:
            guidelines = [g for g in guidelines if applies_to in g.applies_to]
        return guidelines

    def get_active_restrictions(self) -> List[CompetitorRestriction]:
        """Get active competitor blacklist entries."""
        rows = self._fetch(
            "SELECT * FROM competitor_blacklist WHERE is_active = 1 ORDER BY id ASC"
        )
        return [
            CompetitorRestriction(
                id=row["id"],
                company_name=row["company_name"],
                restriction_level=row["restriction_level"],
                reasoning=row["reasoning"],
                alternative_references=_json_column(row["alternative_references"], []),
                is_active=bool(row["is_active"]),
            )
            for row in rows
        ]

    def get_trends(self, topic: Optional[str] = None, limit: int = 5) -> List[IndustryTrend]:
        """Get industry trends, most significant first.

        A topic matches a trend's key or any of its keywords, case-insensitively.
        Without a topic all trends are candidates.

        Args:
            topic: Free-text topic to match.
            limit: Maximum trends returned.

        Returns:
            List of trends.
        """
        rows = self._fetch(
            "SELECT * FROM industry_trends ORDER BY significance_level DESC, id ASC"
        )
        trends = [
            IndustryTrend(
                id=row["id"],
                topic=row["topic"],
                trend_description=row["trend_description"],
                significance_level=row["significance_level"],
                timeline=row["timeline"],
                impact_areas=_json_column(row["impact_areas"], []),
                relevant_keywords=_json_column(row["relevant_keywords"], []),
            )
            for row in rows
        ]
        if topic:
            needle = topic.lower().replace("_", " ")
            trends = [t for t in trends if _trend_matches(t, needle)]
        return trends[:limit]

    def get_entities(self, topic: Optional[str] = None, limit: int = 10) -> List[KnowledgeEntity]:
        """Get knowledge entities, optionally those mentioned alongside a topic.

        Args:
            topic: Free-text topic; entities whose name or description shares a
                word with it are returned.
            limit: Maximum entities returned.

        Returns:
            List of entities.
        """
        rows = self._fetch("SELECT * FROM knowledge_entities ORDER BY id ASC")
        entities = [
            KnowledgeEntity(
                id=row["id"],
                name=row["name"],
                type=row["type"],
                description=row["description"],
                industry_relevance=_json_column(row["industry_relevance"], {}),
                key_facts=_json_column(row["key_facts"], []),
                strategic_importance=row["strategic_importance"],
            )
            for row in rows
        ]
        if topic:
            words = {w for w in topic.lower().replace("_", " ").split() if len(w) > 2}
            entities = [
                e
                for e in entities
                if words & set(f"{e.name} {e.description}".lower().split())
            ]
        return entities[:limit]

    def get_industry_context(self, topic: Optional[str] = None) -> IndustryContext:
        """Trends and entities for a topic in one call."""
        return IndustryContext(
            trends=self.get_trends(topic),
            entities=self.get_entities(topic),
        )


def _trend_matches(trend: IndustryTrend, needle: str) -> bool:
    if needle in trend.topic.replace("_", " ") or trend.topic.replace("_", " ") in needle:
        return True
    return any(
        keyword.lower() in needle or needle in keyword.lower()
        for keyword in trend.relevant_keywords
    )
