"""
Pydantic models for bookings and availability.

``BookingRequest`` is the validated form of a booking payload and is
only built by ``booking_service.parse_booking_request``.  The response
models mirror the JSON returned to the venue's web client; their field
names (``swish_ref``, ``amount_sek``, ``echo`` ...) are what existing
clients read and must not be renamed.
"""

import datetime as dt
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class ResourceKind(str, Enum):
    """How a resource is scheduled and billed."""

    GAME_SLOT = "game_slot"
    SEATED_TABLE = "seated_table"


class BookingStatus(str, Enum):
    PENDING_PAYMENT = "pending_payment"
    CONFIRMED = "confirmed"


class BookingRequest(BaseModel):
    resource_type: str = Field(..., examples=["dart"])
    resource_kind: ResourceKind
    date: dt.date = Field(..., examples=["2025-09-01"])
    start_time: dt.time = Field(..., examples=["18:00"])
    requested_slots: Optional[int] = Field(None, examples=[2])
    customer_name: str = Field(..., examples=["Alva Lind"])
    customer_phone: str = Field(..., examples=["070-123 45 67"])
    customer_email: Optional[str] = Field(None, examples=["alva@example.com"])
    age_confirmed: bool = False


class BookingEcho(BaseModel):
    """Normalised copy of the request, returned so the client can show a summary."""

    resource_type: str
    date: str
    start_time: str
    customer_name: str
    customer_phone: str
    customer_email: Optional[str] = None
    age_confirmed: bool = False
    slots: int


class BookingReceipt(BaseModel):
    id: str
    swish_ref: Optional[str] = Field(None, examples=["BOKNING 3F2B9C1E"])
    amount_sek: int = Field(..., examples=[100])
    require_payment: bool
    swish_number: str
    status: BookingStatus
    start: dt.datetime
    end: dt.datetime
    # False when the API runs without a database and nothing was saved.
    persisted: bool = True
    echo: BookingEcho


class BookingCreateResponse(BaseModel):
    ok: bool = True
    booking: BookingReceipt


class BusyInterval(BaseModel):
    start: dt.datetime
    end: dt.datetime


class AvailabilityResponse(BaseModel):
    ok: bool = True
    busy: List[BusyInterval] = Field(default_factory=list)
    # Venue closures are not modelled; the list stays empty for clients
    # that still read it.
    blocks: List[BusyInterval] = Field(default_factory=list)


class BookingSummary(BaseModel):
    id: str
    resource_type: str
    start: dt.datetime
    end: dt.datetime
    slots: int
    customer_name: str
    customer_phone: str
    customer_email: Optional[str] = None
    amount_sek: int
    status: BookingStatus
    swish_ref: Optional[str] = None
    created_at: Optional[dt.datetime] = None

    model_config = {
        "from_attributes": True,
    }


class BookingListResponse(BaseModel):
    ok: bool = True
    bookings: List[BookingSummary] = Field(default_factory=list)


class HealthResponse(BaseModel):
    ok: bool = True
    service: str
    swish_number: str
    store_configured: bool


class ErrorResponse(BaseModel):
    ok: bool = False
    error: str
