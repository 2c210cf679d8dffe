# blog_search/models/blog.py
"""
Blog post model and its association tables.

Posts are written by the blog service; the search service queries them
read-only. Only ``published`` posts are ever searchable.
"""

from datetime import datetime, timezone
from enum import Enum

import ulid
from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Table, Text, func, select
from sqlalchemy.orm import column_property, relationship

from ..database import Base


class BlogStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


blog_tags = Table(
    "blog_tags",
    Base.metadata,
    Column("blog_id", String(26), ForeignKey("blogs.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", String(26), ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)

blog_likes = Table(
    "blog_likes",
    Base.metadata,
    Column("blog_id", String(26), ForeignKey("blogs.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", String(26), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Blog(Base):
    __tablename__ = "blogs"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    title = Column(String(200), nullable=False)
    slug = Column(String(220), nullable=False, unique=True)
    content = Column(Text, nullable=False)
    excerpt = Column(String(500), nullable=False)

    author_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    category_id = Column(String(26), ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False)

    status = Column(String(20), nullable=False, default=BlogStatus.DRAFT.value)
    views = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
    published_at = Column(DateTime(timezone=True), nullable=True)

    # Count of blog_likes rows, usable in ORDER BY
    like_count = column_property(
        select(func.count(blog_likes.c.user_id))
        .where(blog_likes.c.blog_id == id)
        .correlate_except(blog_likes)
        .scalar_subquery()
    )

    author = relationship("User", back_populates="blogs")
    category = relationship("Category")
    tags = relationship("Tag", secondary=blog_tags, order_by="Tag.name")

    __table_args__ = (
        Index("ix_blogs_status_created_at", "status", "created_at"),
        Index("ix_blogs_category_status", "category_id", "status"),
        Index("ix_blogs_author_status", "author_id", "status"),
    )

    def __repr__(self) -> str:
        return f"<Blog {self.id} {self.status} {self.title!r}>"
