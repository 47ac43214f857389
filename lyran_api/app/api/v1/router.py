"""
Top-level router for version 1 of the API.

The routes keep the paths of the original web client (``/api/health``,
``/api/availability``, ``/api/bookings``), so ``main`` mounts this
router directly under ``/api``.
"""

from fastapi import APIRouter

from .endpoints import admin, availability, bookings, health

router = APIRouter()

router.include_router(health.router, tags=["health"])
router.include_router(availability.router, tags=["availability"])
router.include_router(bookings.router, tags=["bookings"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
