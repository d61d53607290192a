"""
Help Center Backend — Article Service
=======================================

What:  Read-only lookup of an article by slug together with its sections.

Query plan:
    SELECT ... FROM Articles WHERE slug = :slug                 (unique index)
    SELECT ... FROM ArticleSections WHERE article_id = :id
        ORDER BY display_order ASC, section_id ASC              (idx_article_sections_order)

section_id breaks ties between equal display_order values so repeated
requests return the same sequence.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from helpcenter.exceptions import DatabaseError, NotFoundError
from helpcenter.messages import msg
from helpcenter.models.article import Article, ArticleSection
from helpcenter.schemas.article import ArticleResponse, ArticleSectionResponse

logger = logging.getLogger(__name__)


class ArticleService:

    async def get_article(self, db: AsyncSession, slug: str) -> ArticleResponse:
        """
        Raises:
            NotFoundError: no article has this slug (→ 404, no sections)
            DatabaseError: either query failed (→ 500)
        """
        try:
            result = await db.execute(select(Article).where(Article.slug == slug))
            article = result.scalar_one_or_none()
            if article is None:
                raise NotFoundError(message=msg("article_not_found"), resource="article", resource_id=slug)

            sections_result = await db.execute(
                select(ArticleSection)
                .where(ArticleSection.article_id == article.article_id)
                .order_by(ArticleSection.display_order.asc(), ArticleSection.section_id.asc())
            )
            sections = list(sections_result.scalars().all())

        except SQLAlchemyError as e:
            logger.error("Database error fetching article '%s': %s", slug, str(e), exc_info=True)
            raise DatabaseError(message=msg("article_failed"), context={"slug": slug})

        return ArticleResponse(
            article_id=article.article_id,
            slug=article.slug,
            title=article.title,
            summary=article.summary,
            sections=[ArticleSectionResponse.model_validate(s) for s in sections],
        )


article_service = ArticleService()
