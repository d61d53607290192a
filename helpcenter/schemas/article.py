"""Help Center Backend — Article Schemas."""

from typing import List, Optional

from pydantic import BaseModel, Field


class ArticleSectionResponse(BaseModel):
    section_id: int
    article_id: int
    display_order: int
    heading: Optional[str] = None
    body: str

    model_config = {"from_attributes": True}


class ArticleResponse(BaseModel):
    """
    GET /api/articles/{slug}: the article row plus its sections.

    `sections` is always sorted ascending by display_order.
    """
    article_id: int
    slug: str
    title: str
    summary: Optional[str] = None
    sections: List[ArticleSectionResponse] = Field(default_factory=list)

    model_config = {"from_attributes": True}
