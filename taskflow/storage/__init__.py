from fastapi import Depends
from sqlalchemy.orm import Session

from ..config import settings
from ..db import get_db
from .database_provider import DatabaseStorageProvider
from .memory_provider import MemoryStorageProvider
from .provider import DuplicateRecordError, StorageProvider


_memory_storage = None


def get_memory_storage() -> MemoryStorageProvider:
    global _memory_storage
    if _memory_storage is None:
        _memory_storage = MemoryStorageProvider()
    return _memory_storage


def get_storage(db: Session = Depends(get_db)) -> StorageProvider:
    if settings.storage_backend == "memory":
        return get_memory_storage()
    return DatabaseStorageProvider(db)


__all__ = [
    "DuplicateRecordError",
    "StorageProvider",
    "DatabaseStorageProvider",
    "MemoryStorageProvider",
    "get_memory_storage",
    "get_storage",
]
