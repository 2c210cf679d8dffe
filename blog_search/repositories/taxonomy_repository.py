# blog_search/repositories/taxonomy_repository.py
"""Tag and category lookups used by autocomplete."""

from typing import List

from ..models.category import Category
from ..models.tag import Tag
from .base_repository import BaseRepository


class TagRepository(BaseRepository[Tag]):
    def __init__(self, db):
        super().__init__(db, Tag)

    def suggest(self, text: str, limit: int) -> List[Tag]:
        """Tags whose name or display name contains ``text``."""
        return self._containment_lookup([Tag.name, Tag.display_name], text, limit)


class CategoryRepository(BaseRepository[Category]):
    def __init__(self, db):
        super().__init__(db, Category)

    def suggest(self, text: str, limit: int) -> List[Category]:
        return self._containment_lookup([Category.name], text, limit)
