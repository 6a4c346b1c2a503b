"""Article endpoints: duplicate checks and the processed-article store."""

from typing import Annotated

from fastapi import APIRouter, Depends

from kitchenpress.api.dependencies import (
    get_article_ingest_service,
    get_duplicate_detector,
)
from kitchenpress.core.article import (
    DuplicateCheckRequest,
    DuplicateCheckResponse,
    StoreArticlesRequest,
    StoreArticlesResponse,
)
from kitchenpress.pipeline.dedup.duplicate_detector import DuplicateDetector
from kitchenpress.services.article_ingest import ArticleIngestService

router = APIRouter(tags=["articles"])


@router.post("/check-duplicates", response_model=DuplicateCheckResponse)
async def check_duplicates(
    body: DuplicateCheckRequest,
    detector: Annotated[DuplicateDetector, Depends(get_duplicate_detector)],
):
    """Split candidate articles into new ones and duplicates of recent history.

    A candidate is a duplicate when its URL was already processed for the
    topic inside the lookback window, or when its title is more similar than
    the threshold to one of those articles.
    """
    result = await detector.detect(
        body.articles,
        topic=body.topic,
        lookback_days=body.lookback_days,
    )
    return DuplicateCheckResponse.from_result(result)


@router.post("/store-articles", response_model=StoreArticlesResponse)
async def store_articles(
    body: StoreArticlesRequest,
    service: Annotated[ArticleIngestService, Depends(get_article_ingest_service)],
):
    """Record processed articles so later checks can match against them."""
    return await service.store(body.articles, topic=body.topic)
