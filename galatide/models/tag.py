from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from galatide.database import Base
from galatide.models.article_tags import article_tags

DEFAULT_TAG_COLOR = "#6366f1"


class Tag(Base):
    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, index=True, nullable=False)
    slug = Column(String, unique=True, index=True, nullable=False)
    color = Column(String(20), nullable=True)

    articles = relationship("Article", secondary=article_tags, back_populates="tags", passive_deletes=True)
    translations = relationship(
        "TagTranslation",
        back_populates="tag",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class TagTranslation(Base):
    """Per-language display name for a tag."""

    __tablename__ = "tag_translations"

    id = Column(Integer, primary_key=True, index=True)
    tag_id = Column(Integer, ForeignKey("tags.id", ondelete="CASCADE"), nullable=False, index=True)
    language_code = Column(String(10), nullable=False)
    name = Column(String, nullable=False)

    tag = relationship("Tag", back_populates="translations")

    __table_args__ = (
        UniqueConstraint("tag_id", "language_code", name="uq_tag_translation_language"),
    )
