"""Version 1 of the booking API, served under ``/api``."""
