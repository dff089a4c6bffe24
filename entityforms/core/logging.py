"""
Logging setup shared by the command-line entry point.
"""

import logging

from entityforms.config import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging once, using the configured level."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
