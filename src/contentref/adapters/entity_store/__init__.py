"""Entity store adapters.

- `InMemoryEntityStore`: non-durable store for tests and prototyping.
- `SqlAlchemyEntityStore`: relational store on the tables in `schema`.
"""

from .memory import InMemoryEntityData, InMemoryEntityStore
from .sqlalchemy_store import SqlAlchemyEntityStore

__all__ = ["InMemoryEntityData", "InMemoryEntityStore", "SqlAlchemyEntityStore"]
