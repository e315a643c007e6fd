"""Utility functions for screenflow."""

from screenflow.utils.identifiers import (
    generate_id,
    generate_screen_id,
    generate_component_id,
    generate_edge_id,
    generate_event_id,
    utc_timestamp,
)

__all__ = [
    "generate_id",
    "generate_screen_id",
    "generate_component_id",
    "generate_edge_id",
    "generate_event_id",
    "utc_timestamp",
]
