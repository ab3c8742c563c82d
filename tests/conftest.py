"""
Basic test configuration and fixtures.
"""

import itertools
from datetime import date, datetime

import pytest
from fastapi.testclient import TestClient

from dentaldesk.main import app
from dentaldesk.schemas.records import Incident, Patient
from dentaldesk.services.data_store import DataStore
from dentaldesk.services.storage_service import MemoryStorage


@pytest.fixture
def storage():
    """Empty in-memory storage."""
    return MemoryStorage()


@pytest.fixture
def store(storage):
    """Store loaded with the seed dataset."""
    return DataStore(storage).load()


@pytest.fixture
def client(store):
    """Test client fixture bound to the seeded store."""
    app.state.store = store
    yield TestClient(app)
    app.state.store = None


@pytest.fixture
def settings():
    """Settings fixture for testing."""
    from dentaldesk.core.config import get_settings

    return get_settings()


@pytest.fixture
def make_patient():
    """Factory for standalone Patient records."""
    counter = itertools.count(1)

    def _make(**overrides):
        n = next(counter)
        fields = {
            "id": f"tp{n}",
            "name": f"Patient {n}",
            "dob": date(1990, 1, 1),
            "created_at": datetime(2024, 1, 1, 9, 0),
        }
        fields.update(overrides)
        return Patient(**fields)

    return _make


@pytest.fixture
def make_incident():
    """Factory for standalone Incident records."""
    counter = itertools.count(1)

    def _make(**overrides):
        n = next(counter)
        fields = {
            "id": f"ti{n}",
            "patient_id": "tp1",
            "title": "Check-up",
            "appointment_date": datetime(2025, 7, 10, 10, 0),
            "status": "Scheduled",
            "created_at": datetime(2025, 7, 1, 9, 0),
        }
        fields.update(overrides)
        return Incident(**fields)

    return _make
