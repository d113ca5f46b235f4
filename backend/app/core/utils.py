"""
Utility functions for the application.
"""
from typing import Any, Dict
from datetime import datetime, timezone
import random
import string
import time
import uuid


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def utcnow_iso() -> str:
    """Current UTC time in the ISO format stored by the local store."""
    return utcnow().isoformat().replace("+00:00", "Z")


def new_remote_id() -> str:
    """Opaque id for rows in the remote store."""
    return str(uuid.uuid4())


def new_local_id(prefix: str) -> str:
    """
    Opaque id for records that live in the local store.
    Format: <prefix><epoch millis>-<9 random base36 chars>, e.g. temp-1700000000000-k3j9x0a1b.
    """
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=9))
    return f"{prefix}{int(time.time() * 1000)}-{suffix}"


def format_error(message: str, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response = {"error": message}
    if details:
        response["details"] = details
    return response
