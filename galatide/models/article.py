from sqlalchemy import Column, Integer, String, Text, ForeignKey, UniqueConstraint, DateTime, Enum, Index
from sqlalchemy.orm import relationship
from galatide.database import Base
from datetime import datetime, timezone
from galatide.models.article_tags import article_tags
import enum


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ArticleStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"


class Article(Base):
    __tablename__ = "articles"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    title = Column(String, nullable=False)
    slug = Column(String, index=True, nullable=False)
    excerpt = Column(Text, nullable=True)
    content = Column(Text, nullable=True)  # HTML
    cover_url = Column(String, nullable=True)
    status = Column(Enum(ArticleStatus), default=ArticleStatus.DRAFT, nullable=False)
    published_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    author_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    original_language_id = Column(Integer, ForeignKey("languages.id"), nullable=False, index=True)

    # Metadata fields
    meta_title = Column(Text, nullable=True)
    meta_description = Column(Text, nullable=True)
    keywords = Column(Text, nullable=True)

    # Relationships
    author = relationship("User", back_populates="articles", lazy="selectin")
    original_language = relationship("Language", lazy="selectin")
    tags = relationship("Tag", secondary=article_tags, back_populates="articles", lazy="selectin")
    translations = relationship(
        "ArticleTranslation",
        back_populates="article",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    # Slugs are unique within the original language only
    __table_args__ = (
        UniqueConstraint("original_language_id", "slug", name="uq_article_language_slug"),
        Index("idx_article_status", "status"),
    )
