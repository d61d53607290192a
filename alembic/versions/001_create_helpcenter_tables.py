"""Create Users, Reports, Articles and ArticleSections

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

Users.email carries the UNIQUE constraint that identity resolution and
registration rely on. ArticleSections gets a composite index matching the
"sections of an article by display_order" query.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "Users",
        sa.Column("user_id", sa.Integer(), autoincrement=True, nullable=False,
                  comment="Store-assigned identifier"),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False,
                  comment="Unique natural key for identity resolution"),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.PrimaryKeyConstraint("user_id"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_table(
        "Reports",
        sa.Column("report_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("incident_type", sa.String(100), nullable=False),
        sa.Column("severity", sa.String(50), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("wants_follow_up", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("contact_method", sa.String(255), nullable=True),
        sa.PrimaryKeyConstraint("report_id"),
    )

    op.create_table(
        "Articles",
        sa.Column("article_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("summary", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("article_id"),
        sa.UniqueConstraint("slug", name="uq_articles_slug"),
    )

    op.create_table(
        "ArticleSections",
        sa.Column("section_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("article_id", sa.Integer(), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.Column("heading", sa.String(255), nullable=True),
        sa.Column("body", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("section_id"),
        sa.ForeignKeyConstraint(
            ["article_id"], ["Articles.article_id"], ondelete="CASCADE",
        ),
    )
    op.create_index(
        "idx_article_sections_order",
        "ArticleSections",
        ["article_id", "display_order"],
    )


def downgrade() -> None:
    """Drops every table. Destructive: all users and reports are lost."""
    op.drop_index("idx_article_sections_order", table_name="ArticleSections")
    op.drop_table("ArticleSections")
    op.drop_table("Articles")
    op.drop_table("Reports")
    op.drop_table("Users")
