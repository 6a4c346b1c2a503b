"""FastAPI application factory."""

import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request

from kitchenpress import __version__
from kitchenpress.api.errors import register_error_handlers
from kitchenpress.api.routes import articles, content, health, knowledge
from kitchenpress.core.config import Config
from kitchenpress.database.connection import DatabaseConnection, init_database
from kitchenpress.integrations.provider_factory import ProviderFactory
from kitchenpress.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def create_app(
    config: Optional[Config] = None,
    db: Optional[DatabaseConnection] = None,
    provider_factory: Optional[ProviderFactory] = None,
) -> FastAPI:
    """Build the application.

    Collaborators that aren't passed in are built from the configuration.
    A database created here is closed on shutdown; one passed in is left to
    its owner.

    Args:
        config: Application configuration, read from the environment if omitted.
        db: Open database connection.
        provider_factory: Source of generation and embedding clients.

    Returns:
        FastAPI application.
    """
    if config is None:
        config = Config()
        setup_logging(config.log_level, config.log_format, config.log_dir)
        config.validate_paths()

    owns_db = db is None
    if db is None:
        db = init_database(config.db_path)

    run_id = str(uuid.uuid4())
    if provider_factory is None:
        provider_factory = ProviderFactory(config, db, run_id)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "service_started",
            run_id=run_id,
            version=__version__,
            environment=config.environment,
            db_path=str(config.db_path),
        )
        yield
        if owns_db:
            db.close()
        logger.info("service_stopped", run_id=run_id)

    app = FastAPI(
        title="KitchenPress",
        description="Duplicate detection and content drafting for restaurant-industry news",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.db = db
    app.state.provider_factory = provider_factory
    app.state.run_id = run_id

    @app.middleware("http")
    async def bind_request_context(request: Request, call_next):
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id, run_id=run_id)

        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        response.headers["x-request-id"] = request_id
        return response

    register_error_handlers(app)
    app.include_router(articles.router)
    app.include_router(content.router)
    app.include_router(knowledge.router)
    app.include_router(health.router)

    return app
