# blog_search/services/search/sort_policy.py
"""Sort token resolution for search results."""

from enum import Enum
import logging
from typing import List, Optional

from sqlalchemy.sql import ColumnElement

from ...core.exceptions import ValidationException
from ...models.blog import Blog

logger = logging.getLogger(__name__)


class SortMode(str, Enum):
    RECENT = "recent"
    OLDEST = "oldest"
    POPULAR = "popular"
    LIKES = "likes"


DEFAULT_SORT = SortMode.RECENT


def resolve_sort_mode(token: Optional[str], strict: bool = False) -> SortMode:
    """
    Map a user supplied token to a SortMode.

    Unknown tokens fall back to ``recent``; with ``strict`` they are rejected.
    """
    if not token:
        return DEFAULT_SORT
    try:
        return SortMode(token.strip().lower())
    except ValueError:
        if strict:
            allowed = ", ".join(mode.value for mode in SortMode)
            raise ValidationException(f"Unknown sort '{token}'. Use one of: {allowed}", field="sort")
        logger.debug(f"Unknown sort token {token!r}, using {DEFAULT_SORT.value}")
        return DEFAULT_SORT


def order_by_for(mode: SortMode) -> List[ColumnElement]:
    """ORDER BY clauses for ``mode``, ending with an id tiebreaker."""
    if mode is SortMode.OLDEST:
        return [Blog.created_at.asc(), Blog.id.asc()]
    if mode is SortMode.POPULAR:
        return [Blog.views.desc(), Blog.id.desc()]
    if mode is SortMode.LIKES:
        return [Blog.like_count.desc(), Blog.id.desc()]
    return [Blog.created_at.desc(), Blog.id.desc()]
