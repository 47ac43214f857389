"""
Service layer.

``scheduling`` holds the pure time and pricing rules,
``booking_store`` the persistence variants and ``booking_service``
the orchestration used by the API handlers.
"""
