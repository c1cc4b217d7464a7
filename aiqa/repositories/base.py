"""
Record Store Base Repository

Generic create / find / update / aggregate operations over one SQLAlchemy
model. Every call runs in its own unit of work, so a single-record write is
atomic and nothing spans records.
"""

from typing import Any, Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import func

from aiqa.errors import NotFoundError
from aiqa.utils.database import SessionFactory, session_scope

ModelT = TypeVar("ModelT")


class RecordRepository(Generic[ModelT]):
    """
    Durable record store for one entity type.

    Subclasses set ``model`` and ``entity_name`` and add named queries.
    """

    model: Type[ModelT]
    entity_name: str = "record"

    def __init__(self, session_factory: SessionFactory):
        """
        Initialize repository.

        Args:
            session_factory: Callable returning a new SQLAlchemy Session
        """
        self.session_factory = session_factory

    def create(self, **fields: Any) -> ModelT:
        """Insert a record and return it with generated id/timestamps populated."""
        record = self.model(**fields)
        with session_scope(self.session_factory) as session:
            session.add(record)
            session.flush()
        return record

    def find_by_id(self, record_id: str) -> Optional[ModelT]:
        """Return the record or None if not found."""
        with session_scope(self.session_factory) as session:
            return session.get(self.model, record_id)

    def find_many(
        self,
        *criteria: Any,
        order_by: Sequence[Any] = (),
        **filters: Any
    ) -> List[ModelT]:
        """
        Return records matching all criteria.

        Args:
            *criteria: SQLAlchemy boolean expressions
            order_by: Column ordering expressions
            **filters: Equality filters by attribute name
        """
        with session_scope(self.session_factory) as session:
            query = session.query(self.model)
            if criteria:
                query = query.filter(*criteria)
            if filters:
                query = query.filter_by(**filters)
            if order_by:
                query = query.order_by(*order_by)
            return query.all()

    def update_by_id(self, record_id: str, **fields: Any) -> ModelT:
        """Set fields on an existing record; NotFoundError if it does not exist."""
        with session_scope(self.session_factory) as session:
            record = session.get(self.model, record_id)
            if record is None:
                raise NotFoundError(self.entity_name, record_id)
            for name, value in fields.items():
                setattr(record, name, value)
            session.flush()
            return record

    def count(self, *criteria: Any, **filters: Any) -> int:
        """Count records matching criteria."""
        with session_scope(self.session_factory) as session:
            query = session.query(self.model)
            if criteria:
                query = query.filter(*criteria)
            if filters:
                query = query.filter_by(**filters)
            return query.count()

    def average(self, column: Any, *criteria: Any, **filters: Any) -> Optional[float]:
        """Mean of a column over matching records, None when there are none."""
        return self._aggregate(func.avg(column), *criteria, **filters)

    def sum(self, column: Any, *criteria: Any, **filters: Any) -> Optional[float]:
        """Sum of a column over matching records, None when there are none."""
        return self._aggregate(func.sum(column), *criteria, **filters)

    def _aggregate(self, expression: Any, *criteria: Any, **filters: Any) -> Optional[float]:
        with session_scope(self.session_factory) as session:
            query = session.query(expression).select_from(self.model)
            if criteria:
                query = query.filter(*criteria)
            if filters:
                query = query.filter_by(**filters)
            return query.scalar()
