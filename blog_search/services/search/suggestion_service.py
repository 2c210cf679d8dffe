# blog_search/services/search/suggestion_service.py
"""
Autocomplete suggestions across blogs, tags, categories and authors.

The four lookups are independent, so they run concurrently on worker
threads, each with its own short-lived session. Each group has its own
time budget: a slow group comes back empty instead of stalling the others.
"""

import asyncio
from typing import Callable, List, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy.orm import Session, sessionmaker

from ...core.config import settings
from ...database import session_scope
from ...monitoring.prometheus_metrics import prometheus_metrics
from ...repositories.factory import RepositoryFactory
from ...schemas.suggestions import (
    AuthorSuggestion,
    BlogSuggestion,
    CategorySuggestion,
    SuggestionSet,
    TagSuggestion,
)
from ..base import BaseService

S = TypeVar("S", bound=BaseModel)


class SearchSuggestionService(BaseService):
    """Bounded, concurrent prefix lookups for the search box."""

    def __init__(
        self,
        session_factory: sessionmaker,
        min_chars: Optional[int] = None,
        timeout_s: Optional[float] = None,
    ):
        super().__init__(db=None)
        self.session_factory = session_factory
        self.min_chars = min_chars if min_chars is not None else settings.search_suggestion_min_chars
        self.timeout_s = timeout_s if timeout_s is not None else settings.search_suggestion_timeout_s

    @BaseService.measure_operation("suggest")
    async def suggest(self, prefix: Optional[str], limit_per_type: Optional[int] = None) -> SuggestionSet:
        """
        Suggestions grouped by entity type, each list capped at ``limit_per_type``.

        A trimmed prefix shorter than ``min_chars`` returns empty groups
        without touching the database.
        """
        text = (prefix or "").strip()
        limit = limit_per_type or settings.search_suggestion_limit
        if len(text) < self.min_chars:
            return SuggestionSet()

        blogs, tags, categories, authors = await asyncio.gather(
            self._lookup(
                "blogs",
                lambda db: RepositoryFactory.create_blog_repository(db).suggest_titles(text, limit),
                BlogSuggestion,
            ),
            self._lookup(
                "tags",
                lambda db: RepositoryFactory.create_tag_repository(db).suggest(text, limit),
                TagSuggestion,
            ),
            self._lookup(
                "categories",
                lambda db: RepositoryFactory.create_category_repository(db).suggest(text, limit),
                CategorySuggestion,
            ),
            self._lookup(
                "authors",
                lambda db: RepositoryFactory.create_user_repository(db).suggest(text, limit),
                AuthorSuggestion,
            ),
        )
        return SuggestionSet(blogs=blogs, tags=tags, categories=categories, authors=authors)

    async def _lookup(
        self,
        group: str,
        fetch: Callable[[Session], list],
        schema: Type[S],
    ) -> List[S]:
        def _run() -> List[S]:
            with session_scope(self.session_factory) as db:
                return [schema.model_validate(row) for row in fetch(db)]

        try:
            return await asyncio.wait_for(asyncio.to_thread(_run), timeout=self.timeout_s)
        except asyncio.TimeoutError:
            self.logger.warning(f"Suggestion lookup for {group} timed out after {self.timeout_s}s")
            prometheus_metrics.inc_suggestion_timeout(group)
            return []
