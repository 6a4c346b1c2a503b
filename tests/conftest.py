# tests/conftest.py
"""Shared test fixtures and configuration."""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Dict, Generator, List, Optional, Sequence
from unittest.mock import AsyncMock, Mock

import pytest

from kitchenpress.core.article import CandidateArticle, HistoricalArticle
from kitchenpress.core.config import Config
from kitchenpress.database.connection import DatabaseConnection, init_database
from kitchenpress.utils.exceptions import DatabaseError, EmbeddingError

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class FakeEmbeddingProvider:
    """Embedding client returning fixed vectors per text.

    Texts listed in ``failing`` raise EmbeddingError; unknown texts get no
    embedding.
    """

    provider = "fake"
    embedding_model = "fake-embedding-1"

    def __init__(
        self,
        vectors: Optional[Dict[str, List[float]]] = None,
        failing: Sequence[str] = (),
    ):
        self.vectors = dict(vectors or {})
        self.failing = set(failing)
        self.calls: List[str] = []

    async def embed(self, text: str) -> Optional[List[float]]:
        self.calls.append(text)
        if text in self.failing:
            raise EmbeddingError(f"provider unavailable for {text!r}")
        return self.vectors.get(text)


class FakeArticleStore:
    """In-memory history window with the same filtering as the SQLite store."""

    def __init__(self, history: Optional[List[HistoricalArticle]] = None, error: Exception = None):
        self.history = list(history or [])
        self.error = error
        self.calls: List[tuple] = []

    def query_recent(self, topic: str, since: datetime) -> List[HistoricalArticle]:
        self.calls.append((topic, since))
        if self.error is not None:
            raise self.error
        if not topic:
            return []
        rows = [h for h in self.history if h.topic == topic and h.processed_date > since]
        return sorted(rows, key=lambda h: (h.processed_date, h.id or 0))


def make_historical(
    id: int,
    title: str,
    url: str,
    embedding: Optional[List[float]] = None,
    topic: str = "restaurant_tech",
    days_ago: float = 1,
) -> HistoricalArticle:
    return HistoricalArticle(
        id=id,
        title=title,
        url=url,
        title_embedding=embedding,
        published_date=NOW - timedelta(days=days_ago, hours=2),
        processed_date=NOW - timedelta(days=days_ago),
        topic=topic,
    )


def make_candidate(title: str, url: str, **extra) -> CandidateArticle:
    return CandidateArticle(title=title, url=url, **extra)


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Test configuration with temporary paths and no provider keys."""
    return Config(
        _env_file=None,
        google_api_key=None,
        openai_api_key=None,
        db_path=tmp_path / "test.db",
        prompt_config_dir=tmp_path / "prompts",
        style_guide_path=tmp_path / "style_guide.yaml",
        log_format="console",
    )


@pytest.fixture
def test_db(tmp_path: Path) -> Generator[DatabaseConnection, None, None]:
    """SQLite database with schema initialized."""
    db = init_database(tmp_path / "test.db")
    yield db
    db.close()


@pytest.fixture
def seeded_db(tmp_path: Path) -> Generator[DatabaseConnection, None, None]:
    """SQLite database with schema and knowledge base seed."""
    db = init_database(tmp_path / "seeded.db", seed=True)
    yield db
    db.close()


@pytest.fixture
def fake_embeddings() -> FakeEmbeddingProvider:
    return FakeEmbeddingProvider()


@pytest.fixture
def failing_store() -> FakeArticleStore:
    return FakeArticleStore(error=DatabaseError("database is locked"))


@pytest.fixture
def mock_llm_client() -> Mock:
    """Mock generation client for testing."""
    mock = Mock()
    mock.provider = "gemini"
    mock.create_completion = AsyncMock()
    return mock


@pytest.fixture
def sample_blog_response() -> dict:
    """Structured blog output as a model would return it."""
    return {
        "title": "Why Your POS Might Be Quietly Eating Your Margins",
        "content": (
            "## The real cost\n\n"
            "I once spent a Friday night watching a line cook fight a frozen "
            "kitchen display. Competitor Restaurant Tech Co promised it would "
            "never happen. This game-changing system cost us $4,200 in comped "
            "meals that month, which is a lot of margin for a place running on 3%."
        ),
        "meta_description": "What a frozen kitchen display taught me about POS total cost of ownership.",
        "tags": ["POS", "restaurant tech", " "],
    }


# Pytest configuration
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
