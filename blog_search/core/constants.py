"""Application-wide constants for the blog search service."""

from __future__ import annotations

BRAND_NAME = "Inkwell"

API_TITLE = f"{BRAND_NAME} Search API"
API_DESCRIPTION = "Faceted search, autocomplete suggestions and per-user search history for blog posts"
API_VERSION = "1.0.0"

SEARCH_ROUTE_PREFIX = "/api/search"

# Query limits
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Autocomplete
SUGGESTION_MIN_CHARS = 2
SUGGESTION_LIMIT_PER_TYPE = 5
MAX_SUGGESTION_LIMIT = 20

# Text constraints
MAX_QUERY_LENGTH = 500
