# blog_search/repositories/__init__.py
"""
Repository layer for the blog search service.

Repositories own all SQLAlchemy query construction; services never build
queries themselves.
"""

from .base_repository import BaseRepository
from .blog_repository import BlogRepository
from .factory import RepositoryFactory
from .search_history_repository import SearchHistoryRepository
from .taxonomy_repository import CategoryRepository, TagRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "BlogRepository",
    "CategoryRepository",
    "RepositoryFactory",
    "SearchHistoryRepository",
    "TagRepository",
    "UserRepository",
]
