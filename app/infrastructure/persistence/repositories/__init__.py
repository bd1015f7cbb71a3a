"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.base import BaseRecordStore
from app.infrastructure.persistence.repositories.memory_record_store import (
    InMemoryRecordStore,
)
from app.infrastructure.persistence.repositories.sql_record_store import SqlRecordStore

__all__ = [
    "BaseRecordStore",
    "InMemoryRecordStore",
    "SqlRecordStore",
]
