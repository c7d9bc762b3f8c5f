"""Utility functions shared by the API and the client core."""

import secrets
import string
import time

_ID_ALPHABET = string.ascii_lowercase + string.digits


def now_ms() -> int:
    """Current wall-clock time as integer epoch milliseconds."""
    return time.time_ns() // 1_000_000


def generate_id(length: int = 13) -> str:
    """Generate a short random base-36 identifier."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))
