"""Health check endpoint."""

from fastapi import APIRouter, Depends

from lyran_api.app.api.deps import get_booking_service
from lyran_api.app.schemas.booking import HealthResponse
from lyran_api.app.services.booking_service import BookingService


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(service: BookingService = Depends(get_booking_service)) -> HealthResponse:
    return HealthResponse(
        service=service.settings.service_name,
        swish_number=service.settings.swish_number,
        store_configured=service.store.configured,
    )
