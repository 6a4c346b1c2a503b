"""Duplicate detector: exact URL and title-embedding matching against history."""

import asyncio
import math
from datetime import datetime
from typing import Callable, Dict, List, Optional, Protocol, Sequence, Tuple

from kitchenpress.core.article import (
    CandidateArticle,
    DuplicateCheckResult,
    DuplicateStatistics,
    HistoricalArticle,
    RejectedArticle,
    SimilarTo,
)
from kitchenpress.core.config import DetectorConfig
from kitchenpress.core.enums import TieBreakPolicy
from kitchenpress.integrations.provider_factory import EmbeddingClient
from kitchenpress.pipeline.dedup.similarity import cosine_similarity, safe_embed
from kitchenpress.utils.date_utils import lookback_cutoff
from kitchenpress.utils.exceptions import DatabaseError, DuplicateDetectionError
from kitchenpress.utils.logging import get_logger

logger = get_logger(__name__)

DUPLICATE_URL_REASON = "Duplicate URL found"


class ArticleStore(Protocol):
    """Read-only view of previously processed articles."""

    def query_recent(self, topic: str, since: datetime) -> List[HistoricalArticle]: ...


def similarity_reason(score: float) -> str:
    """Rejection reason for a similarity match, e.g. "90% similar to existing article"."""
    percent = int(math.floor(score * 100 + 0.5))
    return f"{percent}% similar to existing article"


class DuplicateDetector:
    """Partitions candidate articles into novel and already-covered.

    For each candidate, in input order:
    1. Reject if its URL exactly equals a URL in the topic's history window.
    2. Otherwise embed its title and compare against every stored title
       embedding; reject if the best cosine similarity is strictly above the
       threshold.
    3. Otherwise accept.

    The history window is read once per call. Embedding failures are
    fail-open: the candidate is treated as having no embedding and is
    accepted unless its URL matched. With a long lookback and a flaky
    provider this lets real duplicates through; that trade is intentional,
    the endpoint stays available.
    """

    def __init__(
        self,
        article_store: ArticleStore,
        embedding_provider: Optional[EmbeddingClient],
        similarity_threshold: float = 0.85,
        default_lookback_days: int = 30,
        tie_break_policy: TieBreakPolicy = TieBreakPolicy.EARLIEST_PROCESSED,
        max_concurrent_embeddings: int = 5,
        similarity: Callable[[Sequence[float], Sequence[float]], float] = cosine_similarity,
    ):
        """Initialize duplicate detector.

        Args:
            article_store: Source of the history window.
            embedding_provider: Title embedding client. None disables the
                similarity check (URL matching still applies).
            similarity_threshold: Best score must be strictly greater to reject.
            default_lookback_days: Window used when the caller gives none or
                an invalid one.
            tie_break_policy: Which record is reported when several share the
                best score.
            max_concurrent_embeddings: Embedding calls issued at once; 1 makes
                them strictly sequential.
            similarity: Vector similarity function.
        """
        self.article_store = article_store
        self.embedding_provider = embedding_provider
        self.similarity_threshold = similarity_threshold
        self.default_lookback_days = default_lookback_days
        self.tie_break_policy = TieBreakPolicy(tie_break_policy)
        self.max_concurrent_embeddings = max(1, max_concurrent_embeddings)
        self.similarity = similarity

    @classmethod
    def from_config(
        cls,
        config: DetectorConfig,
        article_store: ArticleStore,
        embedding_provider: Optional[EmbeddingClient],
    ) -> "DuplicateDetector":
        return cls(
            article_store=article_store,
            embedding_provider=embedding_provider,
            similarity_threshold=config.similarity_threshold,
            default_lookback_days=config.default_lookback_days,
            tie_break_policy=config.tie_break_policy,
            max_concurrent_embeddings=config.max_concurrent_embeddings,
        )

    async def detect(
        self,
        candidates: Sequence[CandidateArticle],
        topic: str,
        lookback_days: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> DuplicateCheckResult:
        """Split candidates into accepted and rejected.

        Args:
            candidates: Articles to check, in the order results should keep.
            topic: Exact topic key; an empty topic has no history.
            lookback_days: History window in days (positive int, else default).
            now: Reference time for the window (defaults to current UTC time).

        Returns:
            Accepted candidates, rejection verdicts and counts.

        Raises:
            DuplicateDetectionError: If the history window can't be read.
        """
        days = self._resolve_lookback(lookback_days)
        since = lookback_cutoff(days, now)

        try:
            history = self.article_store.query_recent(topic, since)
        except DatabaseError as e:
            logger.error("history_window_query_failed", topic=topic, error=str(e))
            raise DuplicateDetectionError(
                f"Could not read article history for topic '{topic}': {e}"
            ) from e

        logger.info(
            "duplicate_check_started",
            topic=topic,
            candidates=len(candidates),
            history_size=len(history),
            lookback_days=days,
        )

        url_index = self._index_urls(history)

        # URL matches are decided without embeddings
        url_matches: Dict[int, HistoricalArticle] = {}
        to_embed: List[int] = []
        for i, candidate in enumerate(candidates):
            match = url_index.get(candidate.url)
            if match is not None:
                url_matches[i] = match
            else:
                to_embed.append(i)

        embeddings = await self._embed_titles([candidates[i].title for i in to_embed])
        candidate_embeddings = dict(zip(to_embed, embeddings))

        result = DuplicateCheckResult()
        for i, candidate in enumerate(candidates):
            rejection = self._verdict(
                candidate,
                url_matches.get(i),
                candidate_embeddings.get(i),
                history,
            )
            if rejection is None:
                result.accepted.append(candidate)
            else:
                result.rejected.append(rejection)

        result.statistics = DuplicateStatistics(
            total_input=len(candidates),
            duplicates_removed=len(result.rejected),
            unique_articles=len(result.accepted),
        )

        logger.info(
            "duplicate_check_complete",
            topic=topic,
            total_input=result.statistics.total_input,
            duplicates_removed=result.statistics.duplicates_removed,
            unique_articles=result.statistics.unique_articles,
        )

        return result

    def _resolve_lookback(self, lookback_days: Optional[int]) -> int:
        if isinstance(lookback_days, int) and not isinstance(lookback_days, bool):
            if lookback_days > 0:
                return lookback_days
        return self.default_lookback_days

    def _index_urls(self, history: List[HistoricalArticle]) -> Dict[str, HistoricalArticle]:
        """Map URL to the record reported for it under the tie-break policy."""
        index: Dict[str, HistoricalArticle] = {}
        for record in history:
            if self.tie_break_policy == TieBreakPolicy.LATEST_PROCESSED:
                index[record.url] = record
            else:
                index.setdefault(record.url, record)
        return index

    async def _embed_titles(self, titles: List[str]) -> List[Optional[List[float]]]:
        """Embed titles in bounded concurrent chunks, preserving order."""
        vectors: List[Optional[List[float]]] = []
        step = self.max_concurrent_embeddings
        for start in range(0, len(titles), step):
            chunk = titles[start : start + step]
            vectors.extend(
                await asyncio.gather(
                    *(safe_embed(self.embedding_provider, title) for title in chunk)
                )
            )
        return vectors

    def _best_match(
        self,
        embedding: Optional[List[float]],
        history: List[HistoricalArticle],
    ) -> Tuple[float, Optional[HistoricalArticle]]:
        """Highest similarity in the window and the record it belongs to.

        History is ordered oldest first, so keeping the first record on a tie
        reports the earliest processed one.
        """
        best_score = 0.0
        best: Optional[HistoricalArticle] = None
        if not embedding:
            return best_score, best

        prefer_latest = self.tie_break_policy == TieBreakPolicy.LATEST_PROCESSED
        for record in history:
            if not record.title_embedding:
                continue
            score = self.similarity(embedding, record.title_embedding)
            if score > best_score or (prefer_latest and best is not None and score == best_score):
                best_score = score
                best = record
        return best_score, best

    def _verdict(
        self,
        candidate: CandidateArticle,
        url_match: Optional[HistoricalArticle],
        embedding: Optional[List[float]],
        history: List[HistoricalArticle],
    ) -> Optional[RejectedArticle]:
        """Rejection for a candidate, or None if it is novel."""
        if url_match is not None:
            logger.debug("duplicate_url", url=candidate.url)
            return self._reject(candidate, DUPLICATE_URL_REASON, url_match)

        score, best = self._best_match(embedding, history)
        if best is not None and score > self.similarity_threshold:
            logger.debug(
                "duplicate_title",
                title=candidate.title[:60],
                similar_to=best.title[:60],
                similarity=round(score, 4),
            )
            return self._reject(candidate, similarity_reason(score), best)

        return None

    @staticmethod
    def _reject(
        candidate: CandidateArticle, reason: str, record: HistoricalArticle
    ) -> RejectedArticle:
        return RejectedArticle(
            title=candidate.title,
            url=candidate.url,
            reason=reason,
            similar_to=SimilarTo(title=record.title, published_date=record.published_date),
        )
