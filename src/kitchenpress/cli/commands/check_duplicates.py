"""Run a duplicate check from the command line."""

import asyncio
import json
import sys
import uuid
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError as PydanticValidationError

from kitchenpress.core.article import DuplicateCheckRequest, DuplicateCheckResponse
from kitchenpress.core.config import Config
from kitchenpress.database.connection import init_database
from kitchenpress.database.repository import ArticleRepository
from kitchenpress.integrations.provider_factory import ProviderFactory
from kitchenpress.pipeline.dedup.duplicate_detector import DuplicateDetector
from kitchenpress.utils.exceptions import (
    ConfigurationError,
    DuplicateDetectionError,
    ValidationError,
)
from kitchenpress.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def load_request(path: Path, topic: Optional[str], lookback_days: Optional[int]) -> DuplicateCheckRequest:
    """Read a request from JSON: either a request object or a bare list of articles.

    Raises:
        ValidationError: If the file doesn't hold a valid request.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValidationError(f"{path} is not valid JSON: {e}") from e

    if isinstance(data, list):
        data = {"articles": data}
    if not isinstance(data, dict):
        raise ValidationError(f"{path} must hold a JSON object or an array of articles")
    if topic is not None:
        data["topic"] = topic
    if lookback_days is not None:
        data["lookback_days"] = lookback_days
    try:
        return DuplicateCheckRequest.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(str(e)) from e


@click.command("check-duplicates")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--topic", default=None, help="Topic key (overrides the file)")
@click.option("--lookback-days", type=int, default=None, help="History window in days")
def check_duplicates(file: Path, topic: Optional[str], lookback_days: Optional[int]) -> None:
    """Check articles in FILE against recent history and print the result as JSON.

    Examples:
        kitchenpress check-duplicates candidates.json --topic restaurant_tech
    """
    try:
        config = Config()  # type: ignore
        config.validate_paths()
    except Exception as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        raise click.Abort()

    # Results go to stdout, so keep logs off it
    setup_logging("ERROR", config.log_format, config.log_dir)

    try:
        request = load_request(file, topic, lookback_days)
    except ValidationError as e:
        click.echo(f"Invalid input file: {e}", err=True)
        raise click.Abort()

    db = init_database(config.db_path)
    try:
        factory = ProviderFactory(config, db, run_id=str(uuid.uuid4()))
        try:
            embedding_provider = factory.get_embedding_client()
        except ConfigurationError as e:
            click.echo(f"Warning: {e}; checking URLs only", err=True)
            embedding_provider = None

        detector = DuplicateDetector.from_config(
            config.detector,
            article_store=ArticleRepository(db),
            embedding_provider=embedding_provider,
        )
        result = asyncio.run(
            detector.detect(
                request.articles,
                topic=request.topic,
                lookback_days=request.lookback_days,
            )
        )
    except DuplicateDetectionError as e:
        logger.error("check_duplicates_failed", error=str(e))
        click.echo(f"Duplicate check failed: {e}", err=True)
        sys.exit(1)
    finally:
        db.close()

    response = DuplicateCheckResponse.from_result(result)
    click.echo(response.model_dump_json(indent=2))
