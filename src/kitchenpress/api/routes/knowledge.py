"""Read-only views of the style guide and industry knowledge base."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from kitchenpress.api.dependencies import get_db, get_style_guide_service
from kitchenpress.core.content import IndustryContext, StyleGuide
from kitchenpress.database.connection import DatabaseConnection
from kitchenpress.database.knowledge_repository import KnowledgeRepository
from kitchenpress.services.style_guide import StyleGuideService

router = APIRouter(tags=["knowledge"])


@router.get("/style-guide", response_model=StyleGuide)
async def style_guide(
    service: Annotated[StyleGuideService, Depends(get_style_guide_service)],
):
    return service.get_style_guide()


@router.get("/industry-context", response_model=IndustryContext)
async def industry_context(
    db: Annotated[DatabaseConnection, Depends(get_db)],
    topic: Annotated[
        Optional[str], Query(description="Filter trends and entities by topic")
    ] = None,
):
    """Trends and companies relevant to a topic, or the top ones overall."""
    return KnowledgeRepository(db).get_industry_context(topic)
