"""
Key-value persistence substrate for the domain store.

Each collection is written as one JSON blob under a fixed key. Two backends
are provided: an in-process dict (tests, throwaway sessions) and a
SQLAlchemy table (the default).
"""

import logging
from datetime import datetime
from typing import Dict, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..core.config import Settings
from ..core.exceptions import StorageWriteError
from ..models import StorageEntry

logger = logging.getLogger(__name__)


class StorageKeys:
    """Fixed keys, one per collection plus the login session."""

    USERS = "users"
    PATIENTS = "patients"
    INCIDENTS = "incidents"
    AUTH = "auth"

    COLLECTIONS = (USERS, PATIENTS, INCIDENTS)


class StorageBackend:
    """
    Synchronous key-value interface.

    ``set_many`` is all-or-nothing: either every key is written or none is.
    """

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, blob: str) -> None:
        self.set_many({key: blob})

    def set_many(self, items: Mapping[str, str]) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError

    def close(self) -> None:
        """Release any held resources."""


class MemoryStorage(StorageBackend):
    """
    Dict-backed storage with an optional byte quota.

    A write that would push the total stored size past ``quota_bytes``
    raises StorageWriteError and leaves the contents unchanged.
    """

    def __init__(self, quota_bytes: Optional[int] = None):
        self.quota_bytes = quota_bytes
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_many(self, items: Mapping[str, str]) -> None:
        staged = dict(self._data)
        staged.update(items)

        if self.quota_bytes is not None:
            used = sum(len(k) + len(v) for k, v in staged.items())
            if used > self.quota_bytes:
                raise StorageWriteError(
                    f"Storage quota exceeded: {used} > {self.quota_bytes} bytes"
                )

        self._data = staged

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self):
        return list(self._data.keys())


class DatabaseStorage(StorageBackend):
    """Storage backed by the ``storage_entries`` table."""

    def __init__(self, session_factory: sessionmaker):
        """
        Initialize database storage.

        Args:
            session_factory: SQLAlchemy session factory bound to an engine
        """
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        db: Session = self.session_factory()
        try:
            entry = db.query(StorageEntry).filter(StorageEntry.key == key).first()
            return entry.value if entry else None
        finally:
            db.close()

    def set_many(self, items: Mapping[str, str]) -> None:
        db: Session = self.session_factory()
        try:
            now = datetime.utcnow()
            for key, blob in items.items():
                entry = db.query(StorageEntry).filter(StorageEntry.key == key).first()
                if entry:
                    entry.value = blob
                    entry.updated_at = now
                else:
                    db.add(StorageEntry(key=key, value=blob))
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageWriteError(f"Failed to write {sorted(items)}: {e}")
        finally:
            db.close()

    def remove(self, key: str) -> None:
        db: Session = self.session_factory()
        try:
            db.query(StorageEntry).filter(StorageEntry.key == key).delete()
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageWriteError(f"Failed to remove {key}: {e}")
        finally:
            db.close()


def build_storage(settings: Settings) -> StorageBackend:
    """
    Create the storage backend named by ``settings.storage_backend``.

    Args:
        settings: Application settings

    Returns:
        A ready-to-use StorageBackend
    """
    backend = settings.storage_backend.lower()

    if backend == "memory":
        logger.info("Using in-memory storage")
        return MemoryStorage()

    if backend == "database":
        from ..core.database import SessionLocal, init_db

        init_db()
        logger.info(f"Using database storage: {settings.DATABASE_URL}")
        return DatabaseStorage(SessionLocal)

    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")
