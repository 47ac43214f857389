"""Shared fixtures for the booking API tests."""

import itertools
from typing import List

import pytest
from fastapi.testclient import TestClient

from lyran_api.app.core.config import Settings
from lyran_api.app.core.errors import PersistenceError
from lyran_api.app.main import create_app
from lyran_api.app.services.booking_service import BookingService
from lyran_api.app.services.booking_store import (
    BookingRecord,
    BookingStore,
    SQLiteBookingStore,
    UnconfiguredBookingStore,
)


class RecordingStore(BookingStore):
    """In-memory store that remembers every insert."""

    def __init__(self) -> None:
        self.records: List[BookingRecord] = []

    def insert(self, record: BookingRecord) -> str:
        self.records.append(record)
        return str(len(self.records))

    def query_busy(self, resource_type, range_start, range_end, statuses):
        wanted = set(statuses)
        windows = [
            record.window
            for record in self.records
            if record.resource_type == resource_type
            and range_start <= record.window.start <= range_end
            and record.status in wanted
        ]
        return sorted(windows, key=lambda window: window.start)

    def list_recent(self, limit, date_from=None, date_to=None):
        return []


class BrokenStore(BookingStore):
    """Configured store whose every operation fails."""

    def insert(self, record):
        raise PersistenceError("disk I/O error")

    def query_busy(self, resource_type, range_start, range_end, statuses):
        raise PersistenceError("disk I/O error")

    def list_recent(self, limit, date_from=None, date_to=None):
        raise PersistenceError("disk I/O error")


def make_token_generator():
    counter = itertools.count(1)
    return lambda: f"3f2b9c1e-aaaa-4bbb-8ccc-{next(counter):012d}"


@pytest.fixture
def settings():
    return Settings(database_url="", swish_number="123 456 78 90", log_level="WARNING")


@pytest.fixture
def tokens():
    return make_token_generator()


@pytest.fixture
def recording_store():
    return RecordingStore()


@pytest.fixture
def sqlite_store(tmp_path):
    store = SQLiteBookingStore(str(tmp_path / "lyran.db"))
    store.migrate()
    return store


@pytest.fixture
def service(recording_store, settings, tokens):
    return BookingService(recording_store, settings, tokens)


@pytest.fixture
def degraded_service(settings, tokens):
    return BookingService(UnconfiguredBookingStore(), settings, tokens)


@pytest.fixture
def client(tmp_path, settings, tokens):
    settings.database_url = str(tmp_path / "api.db")
    app = create_app(settings, generate_token=tokens)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def degraded_client(settings, tokens):
    app = create_app(settings, generate_token=tokens)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def dart_payload():
    return {
        "resource_type": "dart",
        "date": "2025-09-01",
        "start_time": "18:00",
        "slots": 2,
        "customer_name": "Alva Lind",
        "customer_phone": "070-123 45 67",
        "customer_email": "alva@example.com",
        "age_confirmed": True,
    }


@pytest.fixture
def table_payload():
    return {
        "resource_type": "table",
        "date": "2025-09-01",
        "start_time": "20:00",
        "customer_name": "Nils Berg",
        "customer_phone": "073-555 12 34",
    }


@pytest.fixture
def broken_store():
    return BrokenStore()
