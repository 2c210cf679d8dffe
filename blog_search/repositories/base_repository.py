# blog_search/repositories/base_repository.py
"""
Base repository for the blog search service.

Repositories never commit; services own the transaction. Every query goes
through ``_execute_query``/``_execute_scalar`` so driver errors reach the
service layer as ``RepositoryException``.
"""

import logging
from typing import Any, Generic, List, Type, TypeVar

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import InstrumentedAttribute, Query, Session
from sqlalchemy.sql import ColumnElement

from ..core.exceptions import RepositoryException

T = TypeVar("T")

logger = logging.getLogger(__name__)


class BaseRepository(Generic[T]):
    """
    Data access for a single model.

    Attributes:
        db: SQLAlchemy session owned by the calling service
        model: SQLAlchemy model class
    """

    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    def create(self, **kwargs) -> T:
        """Add and flush a new row so its id is available before commit."""
        try:
            entity = self.model(**kwargs)
            self.db.add(entity)
            self.db.flush()
            return entity
        except IntegrityError as exc:
            self.logger.error(f"Integrity error creating {self.model.__name__}: {exc}", exc_info=True)
            self.db.rollback()
            raise RepositoryException(f"Integrity constraint violated: {exc}") from exc
        except SQLAlchemyError as e:
            self.logger.error(f"Error creating {self.model.__name__}: {str(e)}")
            self.db.rollback()
            raise RepositoryException(f"Failed to create {self.model.__name__}: {str(e)}")

    def _build_query(self) -> Query:
        return self.db.query(self.model)

    def _containment_lookup(
        self,
        columns: List[InstrumentedAttribute],
        text: str,
        limit: int,
        *criteria: ColumnElement[bool],
    ) -> List[T]:
        """
        Rows where any of ``columns`` contains ``text`` case-insensitively.

        LIKE wildcards in ``text`` match literally. Extra ``criteria`` are
        AND-ed in. Results come back in id order, capped at ``limit``.
        """
        matches = or_(*(column.icontains(text, autoescape=True) for column in columns))
        query = (
            self._build_query()
            .filter(matches, *criteria)
            .order_by(self.model.id)
            .limit(limit)
        )
        return self._execute_query(query)

    def _execute_query(self, query: Query) -> List[T]:
        try:
            return query.all()
        except SQLAlchemyError as e:
            self.logger.error(f"Query execution error: {str(e)}")
            raise RepositoryException(f"Query failed: {str(e)}")

    def _execute_scalar(self, query: Query) -> Any:
        try:
            return query.scalar()
        except SQLAlchemyError as e:
            self.logger.error(f"Scalar query error: {str(e)}")
            raise RepositoryException(f"Scalar query failed: {str(e)}")
