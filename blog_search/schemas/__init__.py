from .search import ContentSummary, DateRange, SearchCriteria, SearchResponse
from .search_history import ClearHistoryResponse, SearchHistoryEntry, SearchHistoryPage
from .suggestions import SuggestionSet, SuggestionsResponse

__all__ = [
    "ClearHistoryResponse",
    "ContentSummary",
    "DateRange",
    "SearchCriteria",
    "SearchHistoryEntry",
    "SearchHistoryPage",
    "SearchResponse",
    "SuggestionSet",
    "SuggestionsResponse",
]
