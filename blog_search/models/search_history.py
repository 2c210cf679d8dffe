# blog_search/models/search_history.py
"""
Search History model for tracking user searches.

One row per executed search by an authenticated user. Rows are never
updated; users can only clear their whole history. Retention is bounded by
a per-user cap and an optional age-based purge.

``user_id`` references the shared ``users`` table that also holds blog
authors; access token subjects are ids from that table.
"""

from datetime import datetime, timezone

import ulid
from sqlalchemy import JSON, Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from ..database import Base


class SearchHistory(Base):
    """
    A single search performed by a user.

    ``filters`` is a snapshot of the facet values used (category, tags,
    author, dateRange, sortBy) without pagination.
    """

    __tablename__ = "search_history"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    user_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    query_text = Column(Text, nullable=False)
    filters = Column(JSON, nullable=False, default=dict)
    result_count = Column(Integer, nullable=False, default=0)

    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )

    user = relationship("User", back_populates="search_history")

    __table_args__ = (Index("ix_search_history_user_created", "user_id", "created_at"),)
