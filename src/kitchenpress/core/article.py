"""Article domain models for duplicate detection and the article store."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kitchenpress.utils.date_utils import parse_date


def _lenient_date(value: Any) -> Optional[datetime]:
    """Accept any date a feed might hand us; unparseable values become None."""
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return parse_date(value)
    return None


class CandidateArticle(BaseModel):
    """Incoming article to check against previously processed ones.

    Fields other than title, url and published_date are kept and returned
    untouched in the accepted list.
    """

    title: str
    url: str
    published_date: Optional[datetime] = None

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "title": "Toast Adds AI Menu Pricing to Its POS Platform",
                "url": "https://www.nrn.com/technology/toast-ai-menu-pricing",
                "published_date": "2026-10-18T09:30:00Z",
            }
        },
    )

    @field_validator("published_date", mode="before")
    @classmethod
    def normalize_published_date(cls, v: Any) -> Optional[datetime]:
        return _lenient_date(v)


class HistoricalArticle(BaseModel):
    """Previously processed article read from the article store."""

    id: Optional[int] = None
    title: str
    url: str
    title_embedding: Optional[List[float]] = None
    published_date: Optional[datetime] = None
    processed_date: datetime
    topic: str
    source: Optional[str] = None
    summary: Optional[str] = None


class SimilarTo(BaseModel):
    """Pointer to the historical article a candidate duplicates."""

    title: str
    published_date: Optional[datetime] = None


class RejectedArticle(BaseModel):
    """Duplicate verdict for a rejected candidate."""

    title: str
    url: str
    reason: str
    similar_to: SimilarTo


class DuplicateStatistics(BaseModel):
    """Per-call counts."""

    total_input: int = 0
    duplicates_removed: int = 0
    unique_articles: int = 0


class DuplicateCheckResult(BaseModel):
    """Partition of a candidate batch into accepted and rejected."""

    accepted: List[CandidateArticle] = Field(default_factory=list)
    rejected: List[RejectedArticle] = Field(default_factory=list)
    statistics: DuplicateStatistics = Field(default_factory=DuplicateStatistics)


class DuplicateCheckRequest(BaseModel):
    """Body of POST /check-duplicates."""

    articles: List[CandidateArticle]
    topic: str = ""
    lookback_days: Optional[int] = None

    @field_validator("lookback_days", mode="before")
    @classmethod
    def coerce_lookback_days(cls, v: Any) -> Optional[int]:
        """Anything but a positive integer falls back to the default window."""
        if isinstance(v, bool):
            return None
        if isinstance(v, str) and v.strip().isdigit():
            v = int(v.strip())
        if isinstance(v, int) and v > 0:
            return v
        return None


class DuplicateCheckResponse(BaseModel):
    """Body returned by POST /check-duplicates."""

    filtered_articles: List[dict]
    filtered_out: List[RejectedArticle]
    statistics: DuplicateStatistics

    @classmethod
    def from_result(cls, result: DuplicateCheckResult) -> "DuplicateCheckResponse":
        return cls(
            filtered_articles=[a.model_dump(mode="json") for a in result.accepted],
            filtered_out=result.rejected,
            statistics=result.statistics,
        )


class ArticleToStore(BaseModel):
    """Processed article submitted for storage."""

    title: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    published_date: Optional[datetime] = None
    source: Optional[str] = None
    summary: Optional[str] = None

    @field_validator("published_date", mode="before")
    @classmethod
    def normalize_published_date(cls, v: Any) -> Optional[datetime]:
        return _lenient_date(v)


class StoreArticlesRequest(BaseModel):
    """Body of POST /store-articles."""

    articles: List[ArticleToStore]
    topic: str = Field(..., min_length=1)


class StoreArticlesResponse(BaseModel):
    """Body returned by POST /store-articles."""

    stored: int
    skipped: int
    embedding_failures: int
