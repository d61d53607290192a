"""
Help Center Backend — Article Route
=====================================

    GET /api/articles/{slug} → 200 article + sections (display_order ascending)
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from helpcenter.database import get_db_session
from helpcenter.schemas.article import ArticleResponse
from helpcenter.schemas.common import ErrorResponse
from helpcenter.services.article_service import article_service

router = APIRouter(prefix="/api", tags=["Articles"])


@router.get(
    "/articles/{slug}",
    response_model=ArticleResponse,
    responses={
        404: {"description": "Article not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a help article with its sections",
)
async def get_article(
    slug: str,
    db: AsyncSession = Depends(get_db_session),
) -> ArticleResponse:
    return await article_service.get_article(db, slug)
