# blog_search/models/tag.py
import ulid
from sqlalchemy import Column, String

from ..database import Base


class Tag(Base):
    """
    Blog tag.

    ``name`` is the unique machine name (e.g. ``react``), ``display_name`` the
    label shown to readers (e.g. ``React``). Tag filters accept id, name or slug.
    """

    __tablename__ = "tags"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    name = Column(String(30), nullable=False, unique=True)
    display_name = Column(String(50), nullable=False)
    slug = Column(String(40), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<Tag {self.name}>"
