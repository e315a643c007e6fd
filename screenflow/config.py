"""Runtime settings for screenflow, read from the environment and ``.env``."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class FlowSettings:
    """Settings consumed by ``FlowStore`` and ``configure_logging``."""

    log_level: str = "WARNING"
    export_indent: int = 2
    snap_grid: int = 0  # 0 leaves drop positions as given


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("ignoring %s=%r: not an integer, using %d", name, raw, default)
        return default


def get_settings(dotenv_path: Path | str | None = None) -> FlowSettings:
    """Build settings from ``SCREENFLOW_*`` environment variables.

    A ``.env`` file (the nearest one, or ``dotenv_path``) fills in
    variables the environment does not already set. Importing this
    module reads nothing.
    """
    load_dotenv(dotenv_path)
    return FlowSettings(
        log_level=os.getenv("SCREENFLOW_LOG_LEVEL", "WARNING").upper(),
        export_indent=_int_env("SCREENFLOW_EXPORT_INDENT", 2),
        snap_grid=_int_env("SCREENFLOW_SNAP_GRID", 0),
    )


def configure_logging(settings: FlowSettings | None = None) -> None:
    """Set up basic logging for the embedding application."""
    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)
