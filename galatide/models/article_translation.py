"""
ArticleTranslation model

Per-language translation of an Article using the translation-table pattern.
One canonical Article row (in its original language) + zero or many
ArticleTranslation rows, each with its own slug, status and published_at,
independent of the parent Article's status.
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from galatide.database import Base
from galatide.models.article import ArticleStatus, utcnow


class ArticleTranslation(Base):
    __tablename__ = "article_translations"

    id = Column(Integer, primary_key=True, index=True)
    article_id = Column(
        Integer,
        ForeignKey("articles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    language_id = Column(
        Integer,
        ForeignKey("languages.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # ── Translatable fields (mirrors Article) ─────────────────────────────────
    title = Column(String, nullable=False)
    slug = Column(String, nullable=False)  # localized slug (no global uniqueness)
    excerpt = Column(Text, nullable=True)
    content = Column(Text, nullable=True)
    meta_title = Column(Text, nullable=True)
    meta_description = Column(Text, nullable=True)
    keywords = Column(Text, nullable=True)

    # ── Translation lifecycle ─────────────────────────────────────────────────
    status = Column(Enum(ArticleStatus), nullable=False, default=ArticleStatus.DRAFT)
    published_at = Column(DateTime(timezone=True), nullable=True)

    # ── Audit ─────────────────────────────────────────────────────────────────
    translator_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    # ── Relationships ─────────────────────────────────────────────────────────
    article = relationship("Article", back_populates="translations")
    language = relationship("Language", lazy="selectin")
    translator = relationship("User", foreign_keys=[translator_id], lazy="selectin")

    __table_args__ = (
        # One translation per (article, language) pair
        UniqueConstraint("article_id", "language_id", name="uq_article_translation_language"),
        Index("idx_at_language_status", "language_id", "status"),
        Index("idx_at_slug", "language_id", "slug"),
    )
