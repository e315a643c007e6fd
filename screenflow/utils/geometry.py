"""Canvas helpers shared by the store and the exporters."""

from screenflow.models.flow import Position


def snap_to_grid(position: Position, grid_size: int = 20) -> Position:
    """Round a position to the nearest grid intersection.

    A grid size of 0 or less returns the position unchanged.
    """
    if grid_size <= 0:
        return position
    return Position(
        x=round(position.x / grid_size) * grid_size,
        y=round(position.y / grid_size) * grid_size,
    )


def format_node_label(label: str, max_length: int = 20) -> str:
    """Truncate a label for compact display, ending it with an ellipsis."""
    if len(label) <= max_length:
        return label
    return f"{label[:max_length - 3]}..."
