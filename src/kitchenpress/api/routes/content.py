"""Content endpoints: blog and social drafting, and stored drafts."""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query

from kitchenpress.api.dependencies import (
    get_blog_generator,
    get_db,
    get_social_generator,
)
from kitchenpress.core.content import (
    BlogDraft,
    BlogRequest,
    GeneratedContent,
    SocialDraft,
    SocialRequest,
)
from kitchenpress.core.enums import ContentType
from kitchenpress.database.connection import DatabaseConnection
from kitchenpress.database.content_repository import ContentRepository
from kitchenpress.pipeline.generators.blog_generator import BlogGenerator
from kitchenpress.pipeline.generators.social_generator import SocialGenerator

router = APIRouter(tags=["content"])


@router.post("/generate-blog", response_model=BlogDraft)
async def generate_blog(
    body: BlogRequest,
    generator: Annotated[BlogGenerator, Depends(get_blog_generator)],
):
    """Draft a blog post in the house voice from recent articles."""
    return await generator.generate(body)


@router.post("/generate-social", response_model=SocialDraft)
async def generate_social(
    body: SocialRequest,
    generator: Annotated[SocialGenerator, Depends(get_social_generator)],
):
    """Draft one social post per requested platform."""
    return await generator.generate(body)


@router.get("/content", response_model=List[GeneratedContent])
async def list_content(
    db: Annotated[DatabaseConnection, Depends(get_db)],
    content_type: Annotated[
        Optional[ContentType], Query(description="Only blog or social drafts")
    ] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Max results")] = 20,
):
    """List stored drafts, newest first."""
    return ContentRepository(db).list_recent(content_type=content_type, limit=limit)
