# blog_search/services/search/filter_builder.py
"""
Translate SearchCriteria into a single SQLAlchemy predicate over ``blogs``.

The predicate always restricts to published posts. Every other facet is
optional and the present ones are AND-ed together.
"""

from typing import List

from sqlalchemy import and_, or_
from sqlalchemy.sql import ColumnElement

from ...models.blog import Blog, BlogStatus
from ...models.tag import Tag
from ...schemas.search import SearchCriteria


def text_clause(text: str) -> ColumnElement[bool]:
    """Case-insensitive literal containment in title, content or excerpt."""
    return or_(
        Blog.title.icontains(text, autoescape=True),
        Blog.content.icontains(text, autoescape=True),
        Blog.excerpt.icontains(text, autoescape=True),
    )


def tags_clause(tags: List[str]) -> ColumnElement[bool]:
    """Match-any: the post carries at least one tag whose id, name or slug is listed."""
    return Blog.tags.any(or_(Tag.id.in_(tags), Tag.name.in_(tags), Tag.slug.in_(tags)))


def build_filter(criteria: SearchCriteria) -> ColumnElement[bool]:
    clauses: List[ColumnElement[bool]] = [Blog.status == BlogStatus.PUBLISHED.value]

    text = criteria.text.strip()
    if text:
        clauses.append(text_clause(text))
    if criteria.category:
        clauses.append(Blog.category_id == criteria.category)
    if criteria.author:
        clauses.append(Blog.author_id == criteria.author)
    if criteria.tags:
        clauses.append(tags_clause(criteria.tags))
    if criteria.date_range.start is not None:
        clauses.append(Blog.created_at >= criteria.date_range.start)
    if criteria.date_range.end is not None:
        clauses.append(Blog.created_at <= criteria.date_range.end)

    return and_(*clauses)
