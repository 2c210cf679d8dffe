# blog_search/models/user.py
"""
User model.

Accounts are managed by the auth service; search only reads display
fields for author filtering and author suggestions.
"""

from datetime import datetime, timezone

import ulid
from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship

from ..database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    name = Column(String(100), nullable=False, index=True)
    email = Column(String(255), nullable=False, unique=True)
    avatar = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    blogs = relationship("Blog", back_populates="author")
    search_history = relationship(
        "SearchHistory", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<User {self.id} {self.name!r}>"
