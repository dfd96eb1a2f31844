# menucraft/core/logging_config.py

import logging
from typing import Optional

from .config import settings


def configure_logging(level: Optional[str] = None):
    """Configure logging for applications embedding the catalog"""
    logging.basicConfig(
        level=getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO),
        format=settings.LOG_FORMAT,
    )
