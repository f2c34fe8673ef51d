"""Core TeamPulse utilities.

Configuration, structured logging and the transport-boundary error handler.
"""

from teampulse.core.config import Settings, get_settings
from teampulse.core.error_handler import ErrorHandler, ErrorResponse, HandledError, status_for_category
from teampulse.core.logging import configure_logging, get_logger

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "ErrorHandler",
    "ErrorResponse",
    "HandledError",
    "status_for_category",
]
