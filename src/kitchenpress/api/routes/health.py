"""Liveness and dependency status."""

import sqlite3
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from kitchenpress import __version__
from kitchenpress.api.dependencies import get_db, get_provider_factory
from kitchenpress.database.connection import DatabaseConnection
from kitchenpress.integrations.cost_tracking import daily_cost
from kitchenpress.integrations.provider_factory import ProviderFactory
from kitchenpress.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    version: str
    database: str
    providers: List[str]
    daily_cost: Optional[float] = None


@router.get("/health", response_model=HealthResponse)
async def health(
    db: Annotated[DatabaseConnection, Depends(get_db)],
    factory: Annotated[ProviderFactory, Depends(get_provider_factory)],
):
    """Report database reachability, configured providers and today's API spend."""
    database = "ok"
    cost = None
    try:
        db.execute("SELECT 1").fetchone()
        cost = daily_cost(db)
    except sqlite3.Error as e:
        logger.error("health_check_database_failed", error=str(e))
        database = "error"

    providers = factory.available_providers()
    status = "ok" if database == "ok" and providers else "degraded"

    return HealthResponse(
        status=status,
        version=__version__,
        database=database,
        providers=providers,
        daily_cost=cost,
    )
