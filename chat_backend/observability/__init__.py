"""
Observability module.

Provides logging configuration, correlation ID tracking and request
logging middleware.
"""

from chat_backend.observability.correlation import get_correlation_id, set_correlation_id
from chat_backend.observability.logger import configure_logging

__all__ = ["configure_logging", "get_correlation_id", "set_correlation_id"]
