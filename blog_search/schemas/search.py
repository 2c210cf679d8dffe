# blog_search/schemas/search.py
"""
Schemas for the search endpoint.

``SearchCriteria`` is the parsed, request-scoped form of the query string.
Everything is optional; an empty criteria object browses all published posts.
"""

from datetime import date, datetime, time, timezone
from typing import Any, Dict, List, Optional

from pydantic import Field

from ..core.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE
from ..core.exceptions import ValidationException
from ._strict_base import CamelResponseModel, StrictModel


def parse_tag_list(raw: Optional[str]) -> List[str]:
    """Split a comma-separated tag parameter, dropping blank entries."""
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def parse_date_param(raw: Optional[str], field: str) -> Optional[datetime]:
    """
    Parse an ISO-8601 date or datetime query parameter.

    A bare date means midnight at the start of that day. Naive values are
    taken as UTC; aware values are converted to UTC. Blank means "not provided".

    Raises:
        ValidationException: if the value is not a valid date
    """
    if raw is None or not raw.strip():
        return None
    value = raw.strip()
    try:
        if len(value) == 10:
            parsed = datetime.combine(date.fromisoformat(value), time.min)
        else:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise ValidationException(f"Invalid date for '{field}': {raw!r}", field=field)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class DateRange(StrictModel):
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def snapshot(self) -> Dict[str, Optional[str]]:
        return {
            "startDate": self.start.isoformat() if self.start else None,
            "endDate": self.end.isoformat() if self.end else None,
        }


class SearchCriteria(StrictModel):
    """Parsed search request. Pagination values are clamped later, not here."""

    text: str = ""
    category: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    author: Optional[str] = None
    date_range: DateRange = Field(default_factory=DateRange)
    sort: str = "recent"
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def from_query_params(
        cls,
        q: Optional[str] = None,
        category: Optional[str] = None,
        tags: Optional[str] = None,
        author: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        sort: Optional[str] = None,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> "SearchCriteria":
        return cls(
            text=(q or "").strip(),
            category=category or None,
            tags=parse_tag_list(tags),
            author=author or None,
            date_range=DateRange(
                start=parse_date_param(start_date, "startDate"),
                end=parse_date_param(end_date, "endDate"),
            ),
            sort=(sort or "recent").strip() or "recent",
            page=page,
            page_size=limit,
        )

    def filters_snapshot(self) -> Dict[str, Any]:
        """Facet values as stored on a search history record (no pagination)."""
        return {
            "category": self.category,
            "tags": list(self.tags),
            "author": self.author,
            "dateRange": self.date_range.snapshot(),
            "sortBy": self.sort,
        }


class AuthorRef(CamelResponseModel):
    id: str
    name: str
    avatar: Optional[str] = None


class CategoryRef(CamelResponseModel):
    id: str
    name: str
    slug: str


class TagRef(CamelResponseModel):
    id: str
    name: str
    display_name: str


class ContentSummary(CamelResponseModel):
    """One blog post in a result page."""

    id: str
    title: str
    slug: str
    excerpt: str
    author: Optional[AuthorRef] = None
    category: Optional[CategoryRef] = None
    tags: List[TagRef] = Field(default_factory=list)
    status: str
    views: int
    like_count: int = 0
    created_at: datetime
    updated_at: datetime
    published_at: Optional[datetime] = None


class SearchResponse(CamelResponseModel):
    blogs: List[ContentSummary]
    total_pages: int = Field(..., ge=0)
    current_page: int = Field(..., ge=1)
    total: int = Field(..., ge=0)
