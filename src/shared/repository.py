"""Base repository over a SQLAlchemy session.

Concrete repositories set ``model`` and ``label`` and add their own query
methods.
"""

from typing import Any, Generic, TypeVar

from protean.exceptions import ObjectNotFoundError
from sqlalchemy import func, select
from sqlalchemy.orm import Session


T = TypeVar("T")


class Repository(Generic[T]):
    model: type[T]
    label: str = "Object"

    def __init__(self, session: Session):
        self.session = session

    def add(self, obj: T) -> T:
        """Persist ``obj`` and flush so generated ids are available."""
        self.session.add(obj)
        self.session.flush()
        return obj

    def get(self, identifier: Any) -> T:
        obj = self.session.get(self.model, identifier)
        if obj is None:
            raise ObjectNotFoundError({"_entity": f"{self.label} not found"})
        return obj

    def find(self, identifier: Any) -> T | None:
        return self.session.get(self.model, identifier)

    def find_by(self, **filters) -> T | None:
        return self.session.scalars(select(self.model).filter_by(**filters).limit(1)).first()

    def exists(self, **filters) -> bool:
        return self.find_by(**filters) is not None

    def count(self, *criteria) -> int:
        stmt = select(func.count()).select_from(self.model)
        if criteria:
            stmt = stmt.where(*criteria)
        return self.session.scalar(stmt) or 0

    def all(self) -> list[T]:
        return list(self.session.scalars(select(self.model)).all())

    def delete(self, obj: T) -> None:
        self.session.delete(obj)
        self.session.flush()
