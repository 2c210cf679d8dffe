# blog_search/services/search_service.py
"""
Blog Search Service.

Runs a faceted search over published blog posts: one predicate built from
the criteria, one ordering from the sort token, and two queries sharing
that predicate (the page of items and the total count).
"""

from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.config import settings
from ..models.blog import Blog
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.factory import RepositoryFactory
from ..schemas.search import SearchCriteria
from .base import BaseService
from .search.filter_builder import build_filter
from .search.pagination import PageRequest
from .search.sort_policy import SortMode, order_by_for, resolve_sort_mode


@dataclass
class SearchResultPage:
    items: List[Blog]
    total_count: int
    page: int
    page_size: int
    total_pages: int
    sort: SortMode


class BlogSearchService(BaseService):
    """Executes searches against the blog repository."""

    def __init__(
        self,
        db: Session,
        strict_sort: Optional[bool] = None,
        max_page_size: Optional[int] = None,
    ):
        super().__init__(db)
        self.blog_repository = RepositoryFactory.create_blog_repository(db)
        self.strict_sort = settings.search_strict_sort if strict_sort is None else strict_sort
        self.max_page_size = max_page_size or settings.search_max_page_size

    @BaseService.measure_operation("search")
    def search(self, criteria: SearchCriteria) -> SearchResultPage:
        """
        Run ``criteria`` and return one page of results with totals.

        Raises:
            ValidationException: unknown sort token in strict mode
            RepositoryException: if either query fails
        """
        sort_mode = resolve_sort_mode(criteria.sort, strict=self.strict_sort)
        page_request = PageRequest.clamp(criteria.page, criteria.page_size, self.max_page_size)
        predicate = build_filter(criteria)

        items = self.blog_repository.find_matching(
            predicate,
            order_by_for(sort_mode),
            skip=page_request.skip,
            limit=page_request.limit,
        )
        total_count = self.blog_repository.count_matching(predicate)

        self.logger.debug(
            f"Search text={criteria.text!r} sort={sort_mode.value} page={page_request.page} "
            f"returned {len(items)} of {total_count}"
        )
        prometheus_metrics.observe_search_total(sort_mode.value, total_count)

        return SearchResultPage(
            items=items,
            total_count=total_count,
            page=page_request.page,
            page_size=page_request.page_size,
            total_pages=page_request.total_pages(total_count),
            sort=sort_mode,
        )
