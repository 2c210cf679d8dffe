"""Faceted blog search API: search, autocomplete suggestions and search history."""

__version__ = "1.0.0"
