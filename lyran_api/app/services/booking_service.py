"""
Business logic for creating bookings and reporting availability.

``BookingService`` turns a raw JSON payload into a validated
``BookingRequest``, asks the scheduling rules for a window, price,
status and payment reference, and saves the result through the
configured ``BookingStore``.  When no store is configured the booking
is still answered, with a random identifier, but nothing is saved.

Overlapping bookings are not rejected.  ``query_availability`` only
reports which intervals are taken so the client can steer customers
away from them.
"""

import datetime as dt
import logging
from typing import Any, List, Mapping, Optional

from lyran_api.app.core.config import Settings
from lyran_api.app.core.errors import StoreUnavailable, ValidationError
from lyran_api.app.core.references import TokenGenerator, new_token
from lyran_api.app.schemas.booking import (
    BookingEcho,
    BookingReceipt,
    BookingRequest,
    BookingStatus,
    BookingSummary,
    BusyInterval,
    ResourceKind,
)
from lyran_api.app.services import scheduling
from lyran_api.app.services.booking_store import BookingRecord, BookingStore


logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("resource_type", "date", "start_time", "customer_name", "customer_phone")

# Bookings in these states occupy their interval.
BUSY_STATUSES = (BookingStatus.PENDING_PAYMENT, BookingStatus.CONFIRMED)

DEFAULT_LIST_LIMIT = 50
MAX_LIST_LIMIT = 500


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _parse_slots(value: Any) -> Optional[int]:
    if _is_blank(value):
        return None
    if isinstance(value, bool):
        raise ValidationError("slots must be a whole number", fields=["slots"])
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValidationError("slots must be a whole number", fields=["slots"])


def parse_booking_request(payload: Optional[Mapping[str, Any]]) -> BookingRequest:
    """Validate a booking payload as sent by the web client.

    Missing mandatory fields are reported together, before any attempt
    to parse dates or times.  Raises ``ValidationError`` (or its
    ``InvalidTimeSpec`` subclass) on any problem.
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        raise ValidationError("Request body must be a JSON object")

    missing = [name for name in REQUIRED_FIELDS if _is_blank(payload.get(name))]
    if missing:
        raise ValidationError(
            "Missing required field(s): " + ", ".join(missing), fields=missing
        )

    resource_type = str(payload["resource_type"]).strip()
    kind = scheduling.resource_kind_for(resource_type)
    if kind is ResourceKind.GAME_SLOT and resource_type not in scheduling.GAME_RESOURCE_TYPES:
        logger.warning("Unknown resource type %r booked as a game slot", resource_type)

    email = payload.get("customer_email")
    return BookingRequest(
        resource_type=resource_type,
        resource_kind=kind,
        date=scheduling.parse_date(payload["date"]),
        start_time=scheduling.parse_start_time(payload["start_time"]),
        requested_slots=_parse_slots(payload.get("slots")),
        customer_name=str(payload["customer_name"]).strip(),
        customer_phone=str(payload["customer_phone"]).strip(),
        customer_email=None if _is_blank(email) else str(email).strip(),
        age_confirmed=bool(payload.get("age_confirmed")),
    )


class BookingService:
    """Creates bookings and answers availability queries for one venue."""

    def __init__(
        self,
        store: BookingStore,
        settings: Settings,
        generate_token: TokenGenerator = new_token,
    ) -> None:
        self.store = store
        self.settings = settings
        self.generate_token = generate_token

    async def create_booking(self, payload: Optional[Mapping[str, Any]]) -> BookingReceipt:
        """Validate, price and save a booking.

        Game slots start as ``pending_payment`` with a Swish reference;
        seated tables are ``confirmed`` straight away and free.  A
        failing store raises ``PersistenceError``; only a missing store
        leads to an unsaved booking.
        """
        request = parse_booking_request(payload)
        quote = scheduling.quote(request, self.generate_token)
        record = BookingRecord(
            resource_type=request.resource_type,
            window=quote.window,
            customer_name=request.customer_name,
            customer_phone=request.customer_phone,
            customer_email=request.customer_email,
            age_confirmed=request.age_confirmed,
            price_ore=quote.price_ore,
            status=quote.status,
            swish_ref=quote.payment_reference,
        )

        persisted = True
        try:
            booking_id = self.store.insert(record)
        except StoreUnavailable:
            booking_id = self.generate_token()
            persisted = False
            logger.warning("No booking store; booking %s for %s is not saved", booking_id, request.resource_type)
        else:
            logger.info(
                "Booking %s created: %s %s-%s status=%s",
                booking_id,
                request.resource_type,
                quote.window.start.isoformat(timespec="minutes"),
                quote.window.end.strftime("%H:%M"),
                quote.status.value,
            )

        return BookingReceipt(
            id=booking_id,
            swish_ref=quote.payment_reference,
            amount_sek=quote.price_sek,
            require_payment=request.resource_kind is ResourceKind.GAME_SLOT,
            swish_number=self.settings.swish_number,
            status=quote.status,
            start=quote.window.start,
            end=quote.window.end,
            persisted=persisted,
            echo=BookingEcho(
                resource_type=request.resource_type,
                date=request.date.isoformat(),
                start_time=request.start_time.strftime("%H:%M"),
                customer_name=request.customer_name,
                customer_phone=request.customer_phone,
                customer_email=request.customer_email,
                age_confirmed=request.age_confirmed,
                slots=quote.window.effective_slots,
            ),
        )

    async def query_availability(
        self, resource_type: Optional[str], date: Any
    ) -> List[BusyInterval]:
        """Return the taken intervals of a resource on one day, earliest first.

        Without a configured store the list is always empty, which
        reads as "everything free" but guarantees nothing.
        """
        if _is_blank(resource_type) or _is_blank(date):
            raise ValidationError(
                "resource_type and date are required",
                fields=[name for name, value in (("resource_type", resource_type), ("date", date)) if _is_blank(value)],
            )
        day = scheduling.parse_date(date)
        day_start = dt.datetime.combine(day, dt.time.min)
        day_end = dt.datetime.combine(day, dt.time(23, 59, 59))
        windows = self.store.query_busy(resource_type.strip(), day_start, day_end, BUSY_STATUSES)
        return [BusyInterval(start=window.start, end=window.end) for window in windows]

    async def list_bookings(
        self,
        limit: Optional[int] = None,
        date_from: Any = None,
        date_to: Any = None,
    ) -> List[BookingSummary]:
        """List bookings for staff, latest start first."""
        if limit is None:
            limit = DEFAULT_LIST_LIMIT
        if limit < 1:
            raise ValidationError("limit must be positive", fields=["limit"])
        limit = min(limit, MAX_LIST_LIMIT)
        start_day = None if _is_blank(date_from) else scheduling.parse_date(date_from)
        end_day = None if _is_blank(date_to) else scheduling.parse_date(date_to)
        rows = self.store.list_recent(limit, start_day, end_day)
        return [BookingSummary(**row) for row in rows]
