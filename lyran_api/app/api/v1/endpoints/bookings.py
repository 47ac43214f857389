"""
Booking endpoint.

``POST /api/bookings`` accepts the booking form of the venue's web
client.  Validation problems are answered with HTTP 400 and a
``{"ok": false, "error": ...}`` body by the exception handlers
registered in ``main``.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends

from lyran_api.app.api.deps import get_booking_service
from lyran_api.app.schemas.booking import BookingCreateResponse
from lyran_api.app.services.booking_service import BookingService


router = APIRouter()


@router.post("/bookings", response_model=BookingCreateResponse)
async def create_booking(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: BookingService = Depends(get_booking_service),
) -> BookingCreateResponse:
    """Create a booking.

    Game tables (anything but ``resource_type="table"``) cost 50 SEK
    per 45-minute slot, at most two slots, and come back with a Swish
    reference and ``require_payment`` set.  Tables are booked for
    70 minutes free of charge and are confirmed immediately.
    """
    booking = await service.create_booking(payload)
    return BookingCreateResponse(booking=booking)
