import logging
import sys
from typing import Optional

__all__ = ["setup_logging"]

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO", format_string: Optional[str] = None) -> None:
    """
    Configure logging to stdout for applications embedding the client.

    :param level: The logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    :param format_string: The log record format. Defaults to
        DEFAULT_FORMAT.
    """
    if format_string is None:
        format_string = DEFAULT_FORMAT

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=format_string,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
