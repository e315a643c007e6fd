"""ID generation and timestamp utilities."""

import secrets
import string
import time
from datetime import datetime, timezone

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits
_SUFFIX_LENGTH = 9


def generate_id(prefix: str = "node") -> str:
    """Generate an id of the form ``{prefix}_{epoch_ms}_{random base36}``."""
    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(_SUFFIX_LENGTH))
    return f"{prefix}_{time.time_ns() // 1_000_000}_{suffix}"


def generate_screen_id() -> str:
    """Generate a unique screen (node) ID."""
    return generate_id("screen")


def generate_component_id() -> str:
    """Generate a unique component ID."""
    return generate_id("component")


def generate_edge_id() -> str:
    """Generate a unique edge ID."""
    return generate_id("edge")


def generate_event_id() -> str:
    """Generate a unique change event ID."""
    return generate_id("event")


def utc_timestamp() -> str:
    """Generate an ISO8601 UTC timestamp."""
    return datetime.now(timezone.utc).isoformat()
