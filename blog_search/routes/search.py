# blog_search/routes/search.py
"""
Blog search API endpoints.

Endpoints:
- GET    /              faceted search (optional auth; records history when authenticated)
- GET    /suggestions   autocomplete across blogs, tags, categories and authors
- GET    /history       the caller's own search history (auth required)
- DELETE /history       clear the caller's search history (auth required)
"""

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..api.dependencies import (
    get_current_actor_id,
    get_current_actor_id_optional,
    get_search_history_recorder,
    get_search_history_service,
    get_search_service,
    get_suggestion_service,
)
from ..core.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_QUERY_LENGTH, MAX_SUGGESTION_LIMIT
from ..schemas.search import ContentSummary, SearchCriteria, SearchResponse
from ..schemas.search_history import ClearHistoryResponse, SearchHistoryEntry, SearchHistoryPage
from ..schemas.suggestions import SuggestionsResponse
from ..services.search.suggestion_service import SearchSuggestionService
from ..services.search_history_service import SearchHistoryRecorder, SearchHistoryService
from ..services.search_service import BlogSearchService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["search"])


@router.get("/", response_model=SearchResponse)
async def search_blogs(
    q: str = Query("", max_length=MAX_QUERY_LENGTH, description="Text contained in title, content or excerpt"),
    category: Optional[str] = Query(None, description="Category id"),
    tags: Optional[str] = Query(None, description="Comma-separated tag ids, names or slugs (match any)"),
    author: Optional[str] = Query(None, description="Author user id"),
    start_date: Optional[str] = Query(None, alias="startDate", description="ISO-8601 lower bound on creation"),
    end_date: Optional[str] = Query(None, alias="endDate", description="ISO-8601 upper bound on creation"),
    sort: str = Query("recent", description="recent | oldest | popular | likes"),
    page: int = Query(DEFAULT_PAGE),
    limit: int = Query(DEFAULT_PAGE_SIZE),
    actor_id: Optional[str] = Depends(get_current_actor_id_optional),
    search_service: BlogSearchService = Depends(get_search_service),
    recorder: SearchHistoryRecorder = Depends(get_search_history_recorder),
) -> SearchResponse:
    """
    Search published blog posts.

    All filters are optional and combined with AND. For authenticated
    callers the search is recorded in the background; the response never
    waits for that write.
    """
    criteria = SearchCriteria.from_query_params(
        q=q,
        category=category,
        tags=tags,
        author=author,
        start_date=start_date,
        end_date=end_date,
        sort=sort,
        page=page,
        limit=limit,
    )

    result = await asyncio.to_thread(search_service.search, criteria)

    if actor_id:
        recorder.spawn(
            user_id=actor_id,
            query_text=criteria.text,
            filters=criteria.filters_snapshot(),
            result_count=result.total_count,
        )

    return SearchResponse(
        blogs=[ContentSummary.model_validate(blog) for blog in result.items],
        total_pages=result.total_pages,
        current_page=result.page,
        total=result.total_count,
    )


@router.get("/suggestions", response_model=SuggestionsResponse)
async def get_suggestions(
    q: str = Query("", max_length=MAX_QUERY_LENGTH),
    limit: Optional[int] = Query(None, ge=1, le=MAX_SUGGESTION_LIMIT, description="Maximum per type"),
    suggestion_service: SearchSuggestionService = Depends(get_suggestion_service),
) -> SuggestionsResponse:
    """Autocomplete. Queries shorter than two characters return empty groups."""
    suggestions = await suggestion_service.suggest(q, limit_per_type=limit)
    return SuggestionsResponse(suggestions=suggestions)


@router.get("/history", response_model=SearchHistoryPage)
async def get_search_history(
    page: int = Query(DEFAULT_PAGE),
    limit: int = Query(DEFAULT_PAGE_SIZE),
    actor_id: str = Depends(get_current_actor_id),
    history_service: SearchHistoryService = Depends(get_search_history_service),
) -> SearchHistoryPage:
    """The caller's own searches, newest first."""
    listing = await asyncio.to_thread(history_service.list_history, actor_id, page, limit)
    return SearchHistoryPage(
        search_history=[SearchHistoryEntry.model_validate(entry) for entry in listing.items],
        total_pages=listing.total_pages,
        current_page=listing.page,
        total=listing.total_count,
    )


@router.delete("/history", response_model=ClearHistoryResponse)
async def clear_search_history(
    actor_id: str = Depends(get_current_actor_id),
    history_service: SearchHistoryService = Depends(get_search_history_service),
) -> ClearHistoryResponse:
    """Delete every search the caller has made."""
    deleted = await asyncio.to_thread(history_service.clear_history, actor_id)
    return ClearHistoryResponse(message="Search history cleared", deleted_count=deleted)
