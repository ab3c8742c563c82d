"""
Test the storage backends.
"""

import json

import pytest
from sqlalchemy.orm import sessionmaker

from dentaldesk.core.config import Settings
from dentaldesk.core.database import build_engine, init_db
from dentaldesk.core.exceptions import StorageWriteError
from dentaldesk.schemas.records import PatientCreate
from dentaldesk.services.data_store import DataStore
from dentaldesk.services.storage_service import (
    DatabaseStorage,
    MemoryStorage,
    StorageKeys,
    build_storage,
)


@pytest.fixture
def db_storage(tmp_path):
    """Database storage on a throwaway SQLite file."""
    engine = build_engine(f"sqlite:///{tmp_path}/storage.db")
    init_db(bind=engine)
    storage = DatabaseStorage(sessionmaker(autocommit=False, autoflush=False, bind=engine))
    yield storage
    engine.dispose()


def test_memory_storage_set_get_remove():
    storage = MemoryStorage()
    storage.set("patients", "[]")

    assert storage.get("patients") == "[]"
    storage.remove("patients")
    assert storage.get("patients") is None
    storage.remove("patients")


def test_memory_quota_rejects_whole_batch():
    storage = MemoryStorage(quota_bytes=20)
    storage.set("a", "1")

    with pytest.raises(StorageWriteError):
        storage.set_many({"b": "2", "c": "x" * 50})

    assert storage.get("a") == "1"
    assert storage.get("b") is None


def test_database_storage_round_trip(db_storage):
    assert db_storage.get(StorageKeys.USERS) is None

    db_storage.set_many({StorageKeys.USERS: "[]", StorageKeys.PATIENTS: "[1]"})
    db_storage.set(StorageKeys.USERS, "[2]")

    assert db_storage.get(StorageKeys.USERS) == "[2]"
    assert db_storage.get(StorageKeys.PATIENTS) == "[1]"

    db_storage.remove(StorageKeys.USERS)
    assert db_storage.get(StorageKeys.USERS) is None


def test_data_store_over_database_storage(db_storage):
    store = DataStore(db_storage).load()
    patient = store.create_patient(PatientCreate(name="Meera Rao", dob="2001-03-04"))
    store.delete_patient("p1")

    reloaded = DataStore(db_storage).load()

    assert reloaded.snapshot() == store.snapshot()
    assert reloaded.get_patient_by_id(patient.id) == patient
    stored_ids = [i["id"] for i in json.loads(db_storage.get(StorageKeys.INCIDENTS))]
    assert stored_ids == ["i3", "i4", "i5"]


def test_build_storage_memory():
    storage = build_storage(Settings(storage_backend="memory"))
    assert isinstance(storage, MemoryStorage)


def test_build_storage_rejects_unknown_backend():
    with pytest.raises(ValueError):
        build_storage(Settings(storage_backend="cassette"))
