"""create_multilingual_content

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19

Languages, users, articles with per-language translations, tags with
per-language names, and the article/tag join table.
"""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "a1b2c3d4e5f6"
down_revision: str | None = None
branch_labels = None
depends_on = None

article_status = sa.Enum("DRAFT", "PUBLISHED", name="articlestatus")
user_role = sa.Enum("ADMIN", "EDITOR", "AUTHOR", name="userrole")


def upgrade() -> None:
    op.create_table(
        "languages",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("code", sa.String(10), nullable=False),
        sa.Column("name", sa.String, nullable=False),
        sa.Column("native_name", sa.String, nullable=False),
        sa.Column("is_rtl", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("is_default", sa.Boolean, nullable=False, server_default=sa.false()),
    )
    op.create_index("ix_languages_id", "languages", ["id"])
    op.create_index("ix_languages_code", "languages", ["code"], unique=True)

    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String, nullable=True),
        sa.Column("email", sa.String, nullable=False, unique=True),
        sa.Column("role", user_role, nullable=False, server_default="AUTHOR"),
    )
    op.create_index("ix_users_id", "users", ["id"])

    op.create_table(
        "articles",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("title", sa.String, nullable=False),
        sa.Column("slug", sa.String, nullable=False),
        sa.Column("excerpt", sa.Text, nullable=True),
        sa.Column("content", sa.Text, nullable=True),
        sa.Column("cover_url", sa.String, nullable=True),
        sa.Column("status", article_status, nullable=False, server_default="DRAFT"),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "author_id",
            sa.Integer,
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "original_language_id",
            sa.Integer,
            sa.ForeignKey("languages.id"),
            nullable=False,
        ),
        sa.Column("meta_title", sa.Text, nullable=True),
        sa.Column("meta_description", sa.Text, nullable=True),
        sa.Column("keywords", sa.Text, nullable=True),
        sa.UniqueConstraint("original_language_id", "slug", name="uq_article_language_slug"),
    )
    op.create_index("ix_articles_id", "articles", ["id"])
    op.create_index("ix_articles_slug", "articles", ["slug"])
    op.create_index("ix_articles_author_id", "articles", ["author_id"])
    op.create_index("ix_articles_original_language_id", "articles", ["original_language_id"])
    op.create_index("idx_article_status", "articles", ["status"])

    op.create_table(
        "article_translations",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "article_id",
            sa.Integer,
            sa.ForeignKey("articles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "language_id",
            sa.Integer,
            sa.ForeignKey("languages.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String, nullable=False),
        sa.Column("slug", sa.String, nullable=False),
        sa.Column("excerpt", sa.Text, nullable=True),
        sa.Column("content", sa.Text, nullable=True),
        sa.Column("meta_title", sa.Text, nullable=True),
        sa.Column("meta_description", sa.Text, nullable=True),
        sa.Column("keywords", sa.Text, nullable=True),
        sa.Column("status", article_status, nullable=False, server_default="DRAFT"),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "translator_id",
            sa.Integer,
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("article_id", "language_id", name="uq_article_translation_language"),
    )
    op.create_index("ix_article_translations_id", "article_translations", ["id"])
    op.create_index("ix_article_translations_article_id", "article_translations", ["article_id"])
    op.create_index("ix_article_translations_language_id", "article_translations", ["language_id"])
    op.create_index("idx_at_language_status", "article_translations", ["language_id", "status"])
    # Translation slugs are not unique within a language
    op.create_index("idx_at_slug", "article_translations", ["language_id", "slug"])

    op.create_table(
        "tags",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String, nullable=False),
        sa.Column("slug", sa.String, nullable=False),
        sa.Column("color", sa.String(20), nullable=True),
    )
    op.create_index("ix_tags_id", "tags", ["id"])
    op.create_index("ix_tags_name", "tags", ["name"], unique=True)
    op.create_index("ix_tags_slug", "tags", ["slug"], unique=True)

    op.create_table(
        "tag_translations",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "tag_id",
            sa.Integer,
            sa.ForeignKey("tags.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("language_code", sa.String(10), nullable=False),
        sa.Column("name", sa.String, nullable=False),
        sa.UniqueConstraint("tag_id", "language_code", name="uq_tag_translation_language"),
    )
    op.create_index("ix_tag_translations_id", "tag_translations", ["id"])
    op.create_index("ix_tag_translations_tag_id", "tag_translations", ["tag_id"])

    op.create_table(
        "article_tags",
        sa.Column(
            "article_id",
            sa.Integer,
            sa.ForeignKey("articles.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "tag_id",
            sa.Integer,
            sa.ForeignKey("tags.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )


def downgrade() -> None:
    op.drop_table("article_tags")
    op.drop_table("tag_translations")
    op.drop_table("tags")
    op.drop_table("article_translations")
    op.drop_table("articles")
    op.drop_table("users")
    op.drop_table("languages")
    article_status.drop(op.get_bind(), checkfirst=True)
    user_role.drop(op.get_bind(), checkfirst=True)
