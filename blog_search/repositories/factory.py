# blog_search/repositories/factory.py
"""
Repository Factory for the blog search service.

Provides centralized creation of repository instances,
ensuring consistent initialization and dependency injection.
"""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

# Avoid circular imports
if TYPE_CHECKING:
    from .blog_repository import BlogRepository
    from .search_history_repository import SearchHistoryRepository
    from .taxonomy_repository import CategoryRepository, TagRepository
    from .user_repository import UserRepository


class RepositoryFactory:
    """
    Factory class for creating repository instances.

    Centralizes repository creation to ensure consistent initialization
    and makes it easy to swap implementations if needed.
    """

    @staticmethod
    def create_blog_repository(db: Session) -> "BlogRepository":
        """Create repository for blog search queries."""
        from .blog_repository import BlogRepository

        return BlogRepository(db)

    @staticmethod
    def create_tag_repository(db: Session) -> "TagRepository":
        from .taxonomy_repository import TagRepository

        return TagRepository(db)

    @staticmethod
    def create_category_repository(db: Session) -> "CategoryRepository":
        from .taxonomy_repository import CategoryRepository

        return CategoryRepository(db)

    @staticmethod
    def create_user_repository(db: Session) -> "UserRepository":
        from .user_repository import UserRepository

        return UserRepository(db)

    @staticmethod
    def create_search_history_repository(db: Session) -> "SearchHistoryRepository":
        """Create repository for search history operations."""
        from .search_history_repository import SearchHistoryRepository

        return SearchHistoryRepository(db)
