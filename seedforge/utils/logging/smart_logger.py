"""
Operation tracking - a single decorator for timing and outcome events.

Wraps sync and async callables with operation_started / operation_completed /
operation_failed events. Exceptions are logged and re-raised unchanged.
"""

import functools
import inspect
import logging
import time
from typing import Any, Callable, Dict, Optional, TypeVar, cast

from .context import get_correlation_id
from .structured import log_event

F = TypeVar("F", bound=Callable[..., Any])


def track(operation: Optional[str] = None, level: int = logging.DEBUG):
    """
    Decorator that logs start, completion and failure of an operation.

    Args:
        operation: Operation name (auto-detected from function if None)
        level: Log level for start/completion events; failures use ERROR

    Tracking is skipped entirely when the ``track_operations`` setting is off.

    Examples:
        @track()
        @track(operation="factory_create")
    """

    def decorator(func: F) -> F:
        op_name = operation or _get_operation_name(func)

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            if not _should_track():
                return await func(*args, **kwargs)

            tracker = OperationTracker(op_name, level)
            tracker.on_enter()
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                tracker.on_exit(e)
                raise
            tracker.on_exit(None, result)
            return result

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            if not _should_track():
                return func(*args, **kwargs)

            tracker = OperationTracker(op_name, level)
            tracker.on_enter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                tracker.on_exit(e)
                raise
            tracker.on_exit(None, result)
            return result

        if inspect.iscoroutinefunction(func):
            return cast(F, async_wrapper)
        else:
            return cast(F, sync_wrapper)

    return decorator


class OperationTracker:
    """Logs the events of one tracked call."""

    def __init__(self, operation: str, level: int):
        self.operation = operation
        self.level = level
        self.start_time: Optional[float] = None
        self.correlation_id: Optional[str] = None

    def on_enter(self) -> None:
        self.start_time = time.perf_counter()
        self.correlation_id = get_correlation_id()
        log_event(
            "operation_started",
            {"operation": self.operation, "correlation_id": self.correlation_id},
            self.level,
        )

    def on_exit(self, error: Optional[Exception], result: Any = None) -> None:
        context: Dict[str, Any] = {
            "operation": self.operation,
            "correlation_id": self.correlation_id,
            "success": error is None,
            "duration_ms": int((time.perf_counter() - self.start_time) * 1000),
        }

        if error is None:
            if result is not None:
                context.update(_extract_result_info(result))
            log_event("operation_completed", context, self.level)
        else:
            context["error_type"] = type(error).__name__
            context["error_message"] = str(error)
            log_event("operation_failed", context, logging.ERROR)


def _get_operation_name(func: Callable) -> str:
    """Extract operation name from function."""
    if hasattr(func, "__qualname__"):
        return func.__qualname__.replace(".", "_").lower()
    return func.__name__.lower()


def _should_track() -> bool:
    from ...config.settings import get_settings

    return get_settings().track_operations


def _extract_result_info(result: Any) -> Dict[str, Any]:
    """Extract safe information about the result."""
    result_info: Dict[str, Any] = {"result_type": type(result).__name__}

    if isinstance(result, (list, tuple)):
        result_info["result_length"] = len(result)
    elif isinstance(result, dict):
        result_info["result_keys_count"] = len(result.keys())

    return result_info
