"""
Availability endpoint.

Returns the intervals already taken for one resource on one day so the
client can grey them out.  Nothing stops a client from booking over
them.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from lyran_api.app.api.deps import get_booking_service
from lyran_api.app.schemas.booking import AvailabilityResponse
from lyran_api.app.services.booking_service import BookingService


router = APIRouter()


@router.get("/availability", response_model=AvailabilityResponse)
async def get_availability(
    resource_type: Optional[str] = Query(None, examples=["pool"]),
    date: Optional[str] = Query(None, examples=["2025-09-01"]),
    service: BookingService = Depends(get_booking_service),
) -> AvailabilityResponse:
    busy = await service.query_availability(resource_type, date)
    return AvailabilityResponse(busy=busy)
