"""
Structured logging utilities for event-based logging.

Provides structured event logging with a human-readable development
formatter for factory, registry and hook events.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional


class StructuredLogger:
    """
    Structured logger that creates consistent, searchable log events.

    Provides methods for logging structured events with consistent field names
    and automatic context injection.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def event(
        self,
        event_name: str,
        data: Optional[Dict[str, Any]] = None,
        level: int = logging.INFO,
    ):
        """
        Log a structured event with optional data.

        Args:
            event_name: Name of the event (e.g., 'factory_registered')
            data: Dictionary of structured data to include
            level: Log level (defaults to INFO)
        """
        if not self.logger.isEnabledFor(level):
            return

        from .context import get_correlation_id, get_operation_context

        structured_data = {
            "event": event_name,
            "correlation_id": get_correlation_id(),
        }

        operation_context = get_operation_context()
        if operation_context:
            structured_data.update(operation_context)

        if data:
            structured_data.update(data)

        record = self.logger.makeRecord(
            self.logger.name, level, "(structured)", 0, event_name, (), None
        )
        record.structured_data = structured_data

        self.logger.handle(record)


# Global structured logger instance
_global_logger: Optional[StructuredLogger] = None


def get_structured_logger(name: str = "seedforge") -> StructuredLogger:
    """Get or create a structured logger instance."""
    global _global_logger
    if _global_logger is None:
        _global_logger = StructuredLogger(name)
    return _global_logger


def log_event(
    event_name: str, data: Optional[Dict[str, Any]] = None, level: int = logging.INFO
):
    """
    Convenience function for logging structured events.

    Args:
        event_name: Name of the event
        data: Optional structured data
        level: Log level

    Example::

        log_event("factory_registered", {
            "factory": "user",
            "model": "User",
        })
    """
    structured_logger = get_structured_logger()
    structured_logger.event(event_name, data, level)


def create_development_formatter() -> logging.Formatter:
    """
    Create a human-readable formatter for development environments.

    Plain records are printed as-is; structured records are rendered
    per event type.
    """

    class DevelopmentFormatter(logging.Formatter):
        def format(self, record: logging.LogRecord) -> str:
            timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[
                :-3
            ]

            data: Optional[dict] = getattr(record, "structured_data", None)

            if not data:
                return f"{timestamp} | {record.levelname:5} | {record.getMessage()}"

            event = data.get("event", "")
            operation = data.get("operation", "")

            if event == "operation_started":
                message_content = self._format_operation_start(operation)
            elif event == "operation_completed":
                message_content = self._format_operation_success(data, operation)
            elif event == "operation_failed":
                message_content = self._format_operation_error(data, operation)
            else:
                message_content = self._format_generic_event(data, event)

            return f"{timestamp} | {record.levelname:5} | {message_content}"

        def _format_operation_start(self, operation: str) -> str:
            if not operation:
                return "operation started"
            return f"{operation} started"

        def _format_operation_success(self, data: dict, operation: str) -> str:
            duration_ms = data.get("duration_ms", 0)
            factory = data.get("factory")
            suffix = f" ({factory})" if factory else ""
            return f"{self._format_duration(duration_ms)} {operation}{suffix}"

        def _format_operation_error(self, data: dict, operation: str) -> str:
            duration_ms = data.get("duration_ms", 0)
            error_type = data.get("error_type", "Error")
            error_message = data.get("error_message", "")

            duration_part = f" {self._format_duration(duration_ms)}" if duration_ms else ""

            # Truncate long error messages
            if len(error_message) > 60:
                error_message = error_message[:57] + "..."

            return f"{operation}{duration_part} failed ({error_type}: {error_message})"

        def _format_generic_event(self, data: dict, event: str) -> str:
            if not event:
                return "log_event"

            context = self._get_event_context(data, event)
            return f"{event}: {context}" if context else event

        def _format_duration(self, duration_ms: int) -> str:
            if duration_ms >= 1000:
                return f"{duration_ms / 1000:.1f}s"
            return f"{duration_ms}ms"

        def _get_event_context(self, data: dict, event: str) -> str:
            factory = data.get("factory") or "<anonymous>"

            if event in ("factory_registered", "factory_unregistered"):
                model = data.get("model")
                return f"{factory} ({model})" if model else str(factory)
            elif event == "factory_extended":
                return f"{factory} -> {data.get('parent', 'unknown')}"
            elif event == "hooks_adopted":
                return f"{factory} adopted {data.get('hook_count', 0)} hooks"
            elif event == "hook_chain_failed":
                return (
                    f"{data.get('event_key', 'unknown')} stage "
                    f"{data.get('position', '?')} ({data.get('error_type', 'Error')})"
                )
            elif event == "instance_persisted":
                return f"{factory} {data.get('instance_type', '')}".rstrip()
            elif event == "create_failed":
                return (
                    f"{factory} at {data.get('stage', 'unknown')} "
                    f"({data.get('error_type', 'Error')})"
                )

            return ""

    return DevelopmentFormatter()
