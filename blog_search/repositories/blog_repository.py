# blog_search/repositories/blog_repository.py
"""
Blog Repository for search data access.

The search service builds a predicate once and hands the same object to
``find_matching`` and ``count_matching`` so the page and the total can never
disagree about what matches.
"""

from typing import List, Sequence

from sqlalchemy import func
from sqlalchemy.orm import Query, selectinload
from sqlalchemy.sql import ColumnElement

from ..models.blog import Blog, BlogStatus
from .base_repository import BaseRepository


class BlogRepository(BaseRepository[Blog]):
    """Read-only queries over the blogs table."""

    def __init__(self, db):
        super().__init__(db, Blog)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(
            selectinload(Blog.author),
            selectinload(Blog.category),
            selectinload(Blog.tags),
        )

    def find_matching(
        self,
        predicate: ColumnElement[bool],
        order_by: Sequence[ColumnElement],
        skip: int,
        limit: int,
    ) -> List[Blog]:
        """Return one page of blogs matching ``predicate`` in ``order_by`` order."""
        query = self._apply_eager_loading(self._build_query().filter(predicate))
        query = query.order_by(*order_by).offset(skip).limit(limit)
        return self._execute_query(query)

    def count_matching(self, predicate: ColumnElement[bool]) -> int:
        """Count all blogs matching ``predicate``, ignoring pagination."""
        query = self.db.query(func.count(Blog.id)).filter(predicate)
        return int(self._execute_scalar(query) or 0)

    def suggest_titles(self, text: str, limit: int) -> List[Blog]:
        """Published blogs whose title contains ``text`` (case-insensitive)."""
        return self._containment_lookup(
            [Blog.title], text, limit, Blog.status == BlogStatus.PUBLISHED.value
        )
