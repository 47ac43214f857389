"""
Persistence for bookings.

``BookingStore`` describes what the booking service needs from
storage.  Two variants exist:

* ``SQLiteBookingStore`` keeps bookings in the SQLite database created
  by ``core.db.init_db``.  Any ``sqlite3`` failure is re-raised as
  ``PersistenceError``.
* ``UnconfiguredBookingStore`` stands in when no database is
  configured.  Inserting raises ``StoreUnavailable`` so the service can
  fall back to non-persisted bookings; queries return nothing.

``build_store`` picks the variant from the application settings.
"""

import datetime as dt
import logging
import sqlite3
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from lyran_api.app.core.config import Settings
from lyran_api.app.core.db import get_connection, init_db
from lyran_api.app.core.errors import PersistenceError, StoreUnavailable
from lyran_api.app.schemas.booking import BookingStatus
from lyran_api.app.services.scheduling import TimeWindow


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookingRecord:
    """Fields of a booking as handed to the store for insertion."""

    resource_type: str
    window: TimeWindow
    customer_name: str
    customer_phone: str
    customer_email: Optional[str]
    age_confirmed: bool
    price_ore: int
    status: BookingStatus
    swish_ref: Optional[str]


def _to_db_time(value: dt.datetime) -> str:
    return value.isoformat(timespec="seconds")


def _from_db_time(value: Optional[str]) -> Optional[dt.datetime]:
    if value is None:
        return None
    return dt.datetime.fromisoformat(value)


class BookingStore:
    """Interface of a booking store."""

    configured = True

    def insert(self, record: BookingRecord) -> str:
        raise NotImplementedError

    def query_busy(
        self,
        resource_type: str,
        range_start: dt.datetime,
        range_end: dt.datetime,
        statuses: Iterable[BookingStatus],
    ) -> List[TimeWindow]:
        raise NotImplementedError

    def list_recent(
        self,
        limit: int,
        date_from: Optional[dt.date] = None,
        date_to: Optional[dt.date] = None,
    ) -> List[Dict[str, Any]]:
        raise NotImplementedError


class UnconfiguredBookingStore(BookingStore):
    """Store used when no database is configured."""

    configured = False

    def insert(self, record: BookingRecord) -> str:
        raise StoreUnavailable("No booking store configured")

    def query_busy(self, resource_type, range_start, range_end, statuses) -> List[TimeWindow]:
        return []

    def list_recent(self, limit, date_from=None, date_to=None) -> List[Dict[str, Any]]:
        return []


class SQLiteBookingStore(BookingStore):
    """Booking store backed by a SQLite database file."""

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url

    def migrate(self) -> None:
        try:
            version = init_db(self.database_url)
        except sqlite3.Error as exc:
            raise PersistenceError(f"Could not initialise booking database: {exc}") from exc
        logger.info("Booking database ready at schema version %s", version)

    def insert(self, record: BookingRecord) -> str:
        try:
            conn = get_connection(self.database_url)
            try:
                cursor = conn.cursor()
                cursor.execute(
                    """
                    INSERT INTO bookings (
                        resource_type, start_at, end_at, slots, customer_name,
                        customer_phone, customer_email, age_confirmed, price_ore,
                        status, swish_ref
                    )
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        record.resource_type,
                        _to_db_time(record.window.start),
                        _to_db_time(record.window.end),
                        record.window.effective_slots,
                        record.customer_name,
                        record.customer_phone,
                        record.customer_email,
                        int(record.age_confirmed),
                        record.price_ore,
                        record.status.value,
                        record.swish_ref,
                    ),
                )
                booking_id = cursor.lastrowid
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise PersistenceError(f"Could not save booking: {exc}") from exc
        return str(booking_id)

    def query_busy(
        self,
        resource_type: str,
        range_start: dt.datetime,
        range_end: dt.datetime,
        statuses: Iterable[BookingStatus],
    ) -> List[TimeWindow]:
        status_values = [status.value for status in statuses]
        if not status_values:
            return []
        placeholders = ", ".join("?" for _ in status_values)
        query = (
            "SELECT start_at, end_at, slots FROM bookings "
            "WHERE resource_type = ? AND start_at >= ? AND start_at <= ? "
            f"AND status IN ({placeholders}) "
            "ORDER BY start_at ASC"
        )
        params = [resource_type, _to_db_time(range_start), _to_db_time(range_end), *status_values]
        try:
            conn = get_connection(self.database_url)
            try:
                rows = conn.execute(query, tuple(params)).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise PersistenceError(f"Could not load availability: {exc}") from exc
        return [
            TimeWindow(
                start=_from_db_time(row["start_at"]),
                end=_from_db_time(row["end_at"]),
                effective_slots=row["slots"],
            )
            for row in rows
        ]

    def list_recent(
        self,
        limit: int,
        date_from: Optional[dt.date] = None,
        date_to: Optional[dt.date] = None,
    ) -> List[Dict[str, Any]]:
        query = (
            "SELECT id, resource_type, start_at, end_at, slots, customer_name, customer_phone, "
            "customer_email, price_ore, status, swish_ref, created_at FROM bookings"
        )
        conditions: list[str] = []
        params: list = []
        if date_from is not None:
            conditions.append("start_at >= ?")
            params.append(_to_db_time(dt.datetime.combine(date_from, dt.time.min)))
        if date_to is not None:
            conditions.append("start_at <= ?")
            params.append(_to_db_time(dt.datetime.combine(date_to, dt.time(23, 59, 59))))
        if conditions:
            query += " WHERE " + " AND ".join(conditions)
        query += " ORDER BY start_at DESC, id DESC LIMIT ?"
        params.append(limit)
        try:
            conn = get_connection(self.database_url)
            try:
                rows = conn.execute(query, tuple(params)).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise PersistenceError(f"Could not list bookings: {exc}") from exc
        bookings: List[Dict[str, Any]] = []
        for row in rows:
            bookings.append(
                {
                    "id": str(row["id"]),
                    "resource_type": row["resource_type"],
                    "start": _from_db_time(row["start_at"]),
                    "end": _from_db_time(row["end_at"]),
                    "slots": row["slots"],
                    "customer_name": row["customer_name"],
                    "customer_phone": row["customer_phone"],
                    "customer_email": row["customer_email"],
                    "amount_sek": row["price_ore"] // 100,
                    "status": row["status"],
                    "swish_ref": row["swish_ref"],
                    "created_at": _from_db_time(row["created_at"]),
                }
            )
        return bookings


def build_store(settings: Settings) -> BookingStore:
    """Return the store variant matching ``settings.database_url``."""
    if not settings.store_configured:
        logger.warning("DATABASE_URL is not set; bookings will not be persisted")
        return UnconfiguredBookingStore()
    return SQLiteBookingStore(settings.database_url)
