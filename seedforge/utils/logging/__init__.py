"""
Logging infrastructure for seedforge.

Structured events, correlation ids and a single tracking decorator for
factory operations.
"""

from .context import get_correlation_id, operation_context, set_correlation_id
from .smart_logger import track
from .structured import StructuredLogger, log_event

__all__ = [
    # Primary API
    "track",
    "log_event",
    "get_correlation_id",
    "set_correlation_id",
    "operation_context",
    # Advanced usage
    "StructuredLogger",
]
