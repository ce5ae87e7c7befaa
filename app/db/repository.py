"""
Narrow persistence interface used by the service layer.

Services only need CRUD, filtered queries, counts and conditional updates,
so they talk to a Repository instead of building queries against the
session directly. Keeping the surface this small leaves the core free of any
particular database product.
"""
import logging
from typing import Any, Generic, Iterable, List, Optional, Type, TypeVar

from sqlalchemy import asc, desc
from sqlalchemy.orm import Query, Session

from app.db.base import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """SQLAlchemy-backed repository for a single model."""

    def __init__(self, db: Session, model: Type[ModelT]):
        self.db = db
        self.model = model

    def query(self, **criteria: Any) -> Query:
        """Return a query filtered by column equality, skipping None values."""
        query = self.db.query(self.model)
        for column, value in criteria.items():
            if value is None:
                continue
            query = query.filter(getattr(self.model, column) == value)
        return query

    def get(self, entity_id: int) -> Optional[ModelT]:
        return self.db.get(self.model, entity_id)

    def find_one(self, **criteria: Any) -> Optional[ModelT]:
        return self.query(**criteria).first()

    def list(
        self,
        query: Optional[Query] = None,
        order_by: Optional[str] = None,
        descending: bool = True,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> List[ModelT]:
        query = query if query is not None else self.query()
        if order_by:
            direction = desc if descending else asc
            query = query.order_by(direction(getattr(self.model, order_by)), direction(self.model.id))
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def count(self, query: Optional[Query] = None, **criteria: Any) -> int:
        query = query if query is not None else self.query(**criteria)
        return query.count()

    def add(self, entity: ModelT) -> ModelT:
        """Stage a new row and flush so generated ids are available."""
        self.db.add(entity)
        self.db.flush()
        return entity

    def add_all(self, entities: Iterable[ModelT]) -> None:
        self.db.add_all(list(entities))
        self.db.flush()

    def delete(self, entity: ModelT) -> None:
        self.db.delete(entity)
        self.db.flush()

    def update_where(self, values: dict, **criteria: Any) -> int:
        """
        Conditional UPDATE ... WHERE <criteria>; returns the affected row count.

        Used as a compare-and-set: include the expected current value in
        criteria and treat 0 as "someone else got there first".
        """
        query = self.db.query(self.model)
        for column, value in criteria.items():
            query = query.filter(getattr(self.model, column) == value)
        affected = query.update(values, synchronize_session=False)
        logger.debug(f"{self.model.__tablename__}: update_where {criteria} -> {affected} row(s)")
        return affected
