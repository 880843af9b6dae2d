import logging
from typing import Optional

from .config import get_settings


def configure_logging(level: Optional[str] = None):
    """Configure process-wide logging for the POS layer"""
    logging.basicConfig(
        level=level or get_settings().LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    # Request lines from httpx are noisy at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
