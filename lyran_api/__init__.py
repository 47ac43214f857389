"""
Top-level package for the Lyran booking API.

All functionality lives in the ``app`` subpackage, e.g.
``lyran_api.app.main`` for the ASGI application.
"""

__all__ = []
