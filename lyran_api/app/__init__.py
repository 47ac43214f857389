"""
Application package for the Lyran booking API.

``core`` holds configuration, logging, errors and the database
helpers, ``services`` the scheduling rules, booking store and booking
service, ``schemas`` the pydantic payload models and ``api`` the
HTTP routes.
"""

from .main import app  # noqa: F401
