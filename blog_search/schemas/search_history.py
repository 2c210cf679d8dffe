# blog_search/schemas/search_history.py
"""
Pydantic schemas for Search History.

Defines response models for the search history endpoints.
"""

from datetime import datetime
from typing import Any, Dict, List

from pydantic import Field

from ._strict_base import CamelResponseModel


class SearchHistoryEntry(CamelResponseModel):
    """A single recorded search."""

    id: str = Field(..., description="Unique identifier for the search history entry")
    query: str = Field(
        ...,
        validation_alias="query_text",
        serialization_alias="query",
        description="The search text as entered",
    )
    filters: Dict[str, Any] = Field(
        default_factory=dict,
        description="Facets used: category, tags, author, dateRange, sortBy",
    )
    result_count: int = Field(..., ge=0, description="Total matches at the time of the search")
    created_at: datetime = Field(..., description="When the search was performed")


class SearchHistoryPage(CamelResponseModel):
    search_history: List[SearchHistoryEntry]
    total_pages: int = Field(..., ge=0)
    current_page: int = Field(..., ge=1)
    total: int = Field(..., ge=0)


class ClearHistoryResponse(CamelResponseModel):
    message: str
    deleted_count: int = Field(..., ge=0)
