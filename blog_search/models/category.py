# blog_search/models/category.py
import ulid
from sqlalchemy import Column, String, Text

from ..database import Base


class Category(Base):
    """Blog category. Read-only from the search service's point of view."""

    __tablename__ = "categories"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    name = Column(String(50), nullable=False, unique=True)
    slug = Column(String(60), nullable=False, unique=True)
    description = Column(Text, nullable=False, default="")

    def __repr__(self) -> str:
        return f"<Category {self.slug}>"
