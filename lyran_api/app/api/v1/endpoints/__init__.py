"""
Endpoint modules for API v1.

Each module defines an ``APIRouter``; ``router.py`` aggregates them.
"""
