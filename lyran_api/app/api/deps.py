"""Request dependencies shared by the API routes."""

from fastapi import Request

from lyran_api.app.services.booking_service import BookingService


def get_booking_service(request: Request) -> BookingService:
    """Return the ``BookingService`` built by ``create_app`` for this application."""
    return request.app.state.booking_service
