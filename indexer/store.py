"""Entity store — the repository handlers read and write through.

Handlers never touch a session directly. The dispatcher owns the unit of work:
everything a handler puts is committed together, or rolled back together.
"""

import itertools
from abc import ABC, abstractmethod
from typing import Any, TypeVar

from sqlmodel import Session, SQLModel, select

T = TypeVar("T", bound=SQLModel)


class EntityStore(ABC):
    @abstractmethod
    def get(self, model: type[T], entity_id: Any) -> T | None:
        """Load an entity by primary key, or None if absent."""

    @abstractmethod
    def put(self, entity: SQLModel) -> None:
        """Stage an entity (new or loaded) for the current unit of work."""

    @abstractmethod
    def find(self, model: type[T], **filters: Any) -> list[T]:
        """Return entities whose fields equal every given filter."""

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...

    def exists(self, model: type[SQLModel], entity_id: Any) -> bool:
        return self.get(model, entity_id) is not None


class SqlEntityStore(EntityStore):
    """Store backed by a SQLModel session."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, model, entity_id):
        return self.session.get(model, entity_id)

    def put(self, entity):
        # Flush in put order so foreign keys see their parent rows first
        self.session.add(entity)
        self.session.flush()

    def find(self, model, **filters):
        stmt = select(model)
        for field, value in filters.items():
            stmt = stmt.where(getattr(model, field) == value)
        return list(self.session.exec(stmt).all())

    def commit(self):
        self.session.commit()

    def rollback(self):
        self.session.rollback()


class MemoryEntityStore(EntityStore):
    """Dict-backed store with staged writes, for tests and dry runs.

    Entities are kept as field dicts so callers never share instances with
    the store; a rollback cannot leak in-place mutations.
    """

    def __init__(self):
        self._committed: dict[tuple[type, Any], dict] = {}
        self._staged: dict[tuple[type, Any], dict] = {}
        self._ids = itertools.count(1)

    def get(self, model, entity_id):
        key = (model, entity_id)
        data = self._staged.get(key, self._committed.get(key))
        if data is None:
            return None
        return model(**data)

    def put(self, entity):
        if getattr(entity, "id", None) is None:
            entity.id = next(self._ids)
        self._staged[(type(entity), entity.id)] = entity.model_dump()

    def find(self, model, **filters):
        rows = {**self._committed, **self._staged}
        found = []
        for (row_model, _), data in rows.items():
            if row_model is not model:
                continue
            if all(data.get(field) == value for field, value in filters.items()):
                found.append(model(**data))
        return found

    def commit(self):
        self._committed.update(self._staged)
        self._staged.clear()

    def rollback(self):
        self._staged.clear()

    def count(self, model: type[SQLModel]) -> int:
        return len(self.find(model))
