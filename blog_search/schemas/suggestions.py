# blog_search/schemas/suggestions.py
"""Autocomplete response schemas, one list per entity type."""

from typing import List, Optional

from pydantic import Field

from ._strict_base import CamelResponseModel


class BlogSuggestion(CamelResponseModel):
    id: str
    title: str
    slug: str


class TagSuggestion(CamelResponseModel):
    id: str
    name: str
    display_name: str


class CategorySuggestion(CamelResponseModel):
    id: str
    name: str
    slug: str


class AuthorSuggestion(CamelResponseModel):
    id: str
    name: str
    avatar: Optional[str] = None


class SuggestionSet(CamelResponseModel):
    blogs: List[BlogSuggestion] = Field(default_factory=list)
    tags: List[TagSuggestion] = Field(default_factory=list)
    categories: List[CategorySuggestion] = Field(default_factory=list)
    authors: List[AuthorSuggestion] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.blogs or self.tags or self.categories or self.authors)


class SuggestionsResponse(CamelResponseModel):
    suggestions: SuggestionSet
