"""
Scheduling and pricing rules.

Everything here is a pure function of its arguments: a booking request
maps to a concrete time window, a price, an initial status and, for
paid resources, a Swish payment reference.  Nothing in this module
knows about other bookings; overlap is the caller's concern.

Instants are naive ``datetime`` objects in the venue's local wall-clock
time.  No timezone conversion or daylight saving adjustment is made.
"""

import datetime as dt
from dataclasses import dataclass
from typing import Optional, Union

from lyran_api.app.core.errors import InvalidTimeSpec
from lyran_api.app.core.references import TokenGenerator, new_token
from lyran_api.app.schemas.booking import BookingRequest, BookingStatus, ResourceKind


TABLE_RESOURCE_TYPE = "table"
# Game resources the venue actually has; other strings are still billed per slot.
GAME_RESOURCE_TYPES = frozenset({"pool", "dart"})

SLOT_MINUTES = 45
MIN_SLOTS = 1
MAX_SLOTS = 2
PRICE_PER_SLOT_SEK = 50

TABLE_SERVICE_MINUTES = 60
TABLE_TURNOVER_MINUTES = 10

PAYMENT_REFERENCE_PREFIX = "BOKNING "
PAYMENT_REFERENCE_LENGTH = 8


@dataclass(frozen=True)
class TimeWindow:
    start: dt.datetime
    end: dt.datetime
    effective_slots: int = 1

    @property
    def duration(self) -> dt.timedelta:
        return self.end - self.start


@dataclass(frozen=True)
class Quote:
    """Everything the scheduling rules derive from a single request."""

    window: TimeWindow
    price_sek: int
    status: BookingStatus
    payment_reference: Optional[str]

    @property
    def price_ore(self) -> int:
        return self.price_sek * 100


def resource_kind_for(resource_type: str) -> ResourceKind:
    """Only the literal ``"table"`` is a seated table; anything else is billed per slot."""
    if resource_type == TABLE_RESOURCE_TYPE:
        return ResourceKind.SEATED_TABLE
    return ResourceKind.GAME_SLOT


def parse_date(value: Union[str, dt.date]) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    try:
        return dt.date.fromisoformat(str(value).strip())
    except ValueError:
        raise InvalidTimeSpec(f"Invalid date: {value!r}", fields=["date"]) from None


def parse_start_time(value: Union[str, dt.time]) -> dt.time:
    """Parse a wall-clock start time; values with a UTC offset are rejected."""
    if isinstance(value, dt.time):
        parsed = value
    else:
        try:
            parsed = dt.time.fromisoformat(str(value).strip())
        except ValueError:
            raise InvalidTimeSpec(f"Invalid start time: {value!r}", fields=["start_time"]) from None
    if parsed.tzinfo is not None:
        raise InvalidTimeSpec(
            f"Start time must be venue local time without an offset: {value!r}", fields=["start_time"]
        )
    return parsed


def effective_slots_for(resource_kind: ResourceKind, requested_slots: Optional[int]) -> int:
    """Clamp a requested slot count to what the resource allows.

    Game slots default to one and are capped at two; seated tables
    always count as a single slot.
    """
    if resource_kind is ResourceKind.SEATED_TABLE:
        return 1
    return max(MIN_SLOTS, min(requested_slots or 1, MAX_SLOTS))


def compute_window(
    resource_kind: ResourceKind,
    date: Union[str, dt.date],
    start_time: Union[str, dt.time],
    requested_slots: Optional[int] = None,
) -> TimeWindow:
    """Derive the occupied interval for a booking.

    Raises ``InvalidTimeSpec`` when ``date`` or ``start_time`` cannot
    be parsed, carries an offset, or the window would end past the
    last representable day.
    """
    start = dt.datetime.combine(parse_date(date), parse_start_time(start_time))
    slots = effective_slots_for(resource_kind, requested_slots)
    if resource_kind is ResourceKind.SEATED_TABLE:
        minutes = TABLE_SERVICE_MINUTES + TABLE_TURNOVER_MINUTES
    else:
        minutes = SLOT_MINUTES * slots
    try:
        end = start + dt.timedelta(minutes=minutes)
    except OverflowError:
        raise InvalidTimeSpec(f"Booking on {date!r} ends out of range", fields=["date"]) from None
    return TimeWindow(start=start, end=end, effective_slots=slots)


def compute_price(resource_kind: ResourceKind, effective_slots: int) -> int:
    """Price in whole kronor."""
    if resource_kind is ResourceKind.SEATED_TABLE:
        return 0
    return PRICE_PER_SLOT_SEK * effective_slots


def initial_status(resource_kind: ResourceKind) -> BookingStatus:
    if resource_kind is ResourceKind.SEATED_TABLE:
        return BookingStatus.CONFIRMED
    return BookingStatus.PENDING_PAYMENT


def make_payment_reference(
    resource_kind: ResourceKind, generate_token: TokenGenerator = new_token
) -> Optional[str]:
    """Build the text a customer writes in the Swish message, e.g. ``BOKNING 3F2B9C1E``."""
    if resource_kind is ResourceKind.SEATED_TABLE:
        return None
    token = generate_token().replace("-", "")
    return PAYMENT_REFERENCE_PREFIX + token[:PAYMENT_REFERENCE_LENGTH].upper()


def quote(request: BookingRequest, generate_token: TokenGenerator = new_token) -> Quote:
    window = compute_window(
        request.resource_kind, request.date, request.start_time, request.requested_slots
    )
    return Quote(
        window=window,
        price_sek=compute_price(request.resource_kind, window.effective_slots),
        status=initial_status(request.resource_kind),
        payment_reference=make_payment_reference(request.resource_kind, generate_token),
    )
