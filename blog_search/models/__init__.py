"""
Database models for the blog search service.

- Collaborator tables read by search: User, Category, Tag, Blog
- Owned by search: SearchHistory
"""

from .blog import Blog, BlogStatus, blog_likes, blog_tags
from .category import Category
from .search_history import SearchHistory
from .tag import Tag
from .user import User

__all__ = [
    "Blog",
    "BlogStatus",
    "Category",
    "SearchHistory",
    "Tag",
    "User",
    "blog_likes",
    "blog_tags",
]
