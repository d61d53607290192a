"""
Help Center Backend — Article Models
======================================

What:  ORM models for `Articles` and `ArticleSections`.
Who:   ArticleService (GET /api/articles/{slug}).

Read-only from this service's point of view: content is loaded by editors
directly in the database. Sections are presented in ascending display_order;
the composite index serves exactly that query.
"""

from typing import List, Optional

from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from helpcenter.database import Base


class Article(Base):
    """A help article addressed by its URL slug."""

    __tablename__ = "Articles"

    article_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    summary: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Never loaded implicitly; ArticleService queries sections explicitly so
    # the ordering is part of the statement.
    sections: Mapped[List["ArticleSection"]] = relationship(
        back_populates="article",
        lazy="raise",
        order_by="ArticleSection.display_order",
    )

    def __repr__(self) -> str:
        return f"<Article(article_id={self.article_id}, slug='{self.slug}')>"


class ArticleSection(Base):
    """One section of an article body."""

    __tablename__ = "ArticleSections"

    section_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    article_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("Articles.article_id", ondelete="CASCADE"),
        nullable=False,
    )
    display_order: Mapped[int] = mapped_column(Integer, nullable=False)
    heading: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    body: Mapped[str] = mapped_column(Text, nullable=False)

    article: Mapped[Article] = relationship(back_populates="sections", lazy="raise")

    __table_args__ = (
        Index("idx_article_sections_order", "article_id", "display_order"),
    )

    def __repr__(self) -> str:
        return (
            f"<ArticleSection(section_id={self.section_id}, article_id={self.article_id}, "
            f"display_order={self.display_order})>"
        )
