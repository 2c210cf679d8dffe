"""Building blocks of blog search: predicate, ordering, paging, autocomplete."""

from .filter_builder import build_filter
from .pagination import PageRequest
from .sort_policy import SortMode, order_by_for, resolve_sort_mode
from .suggestion_service import SearchSuggestionService

__all__ = [
    "PageRequest",
    "SearchSuggestionService",
    "SortMode",
    "build_filter",
    "order_by_for",
    "resolve_sort_mode",
]
