"""
Staff listing of bookings.

A plain read of the booking store, latest start first, optionally
restricted to a date range.  The API has no authentication; deploy it
behind something that restricts access to ``/api/admin``.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from lyran_api.app.api.deps import get_booking_service
from lyran_api.app.schemas.booking import BookingListResponse
from lyran_api.app.services.booking_service import BookingService


router = APIRouter()


@router.get("/bookings", response_model=BookingListResponse)
async def list_bookings(
    limit: Optional[int] = Query(None, description="Maximum number of bookings (default 50, max 500)"),
    date_from: Optional[str] = Query(None, examples=["2025-09-01"]),
    date_to: Optional[str] = Query(None, examples=["2025-09-30"]),
    service: BookingService = Depends(get_booking_service),
) -> BookingListResponse:
    bookings = await service.list_bookings(limit=limit, date_from=date_from, date_to=date_to)
    return BookingListResponse(bookings=bookings)
