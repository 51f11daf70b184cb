"""Root logging setup for the hosting service."""

import logging
import sys
from typing import Optional

from .settings import TaskflowSettings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: Optional[TaskflowSettings] = None) -> None:
    """Configure the root logger from settings.

    Logs go to stderr, since stdout belongs to the tool-call transport.

    Args:
        settings: Settings to read the level from; defaults to the environment
    """
    settings = settings or TaskflowSettings()
    level = logging.getLevelName(settings.log_level)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
    logging.getLogger(__name__).debug(f"Logging configured at {settings.log_level}")
