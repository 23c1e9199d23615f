"""SQLAlchemy adapters for the pagination core.

- SQLAlchemyStore: RecordStore over a mapped model and an async session factory
- PaginatedRepository: per-model ``paginate`` entry point
"""

from storepager.core.database.repository import PaginatedRepository
from storepager.core.database.store import SQLAlchemyStore

__all__ = [
    "PaginatedRepository",
    "SQLAlchemyStore",
]
