"""Random identifiers for degraded-mode bookings and payment references."""

import uuid
from typing import Callable


TokenGenerator = Callable[[], str]


def new_token() -> str:
    """Return a fresh random uuid4 string such as ``'3f2b9c1e-...'``."""
    return str(uuid.uuid4())
