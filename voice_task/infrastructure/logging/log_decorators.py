"""
Logging decorators for outbound collaborator calls.
Provides structured, timed and redacted logging around adapter methods.
"""
import functools
import inspect
import logging
import time
import uuid
from typing import Any, Callable, Optional, Set

from .log_config import get_logger


# Default sensitive fields blacklist
DEFAULT_SENSITIVE_FIELDS: Set[str] = {
    'api_key', 'authorization', 'token', 'secret', 'password', 'audio_bytes'
}


def _sanitize_sensitive_data(data: Any, blacklist: Set[str]) -> Any:
    """
    Recursively mask sensitive values before they reach the logs.

    Keys matching the blacklist are replaced with [REDACTED] and raw bytes
    are replaced with a size marker.
    """
    if isinstance(data, dict):
        sanitized = {}
        for key, value in data.items():
            if any(sensitive in str(key).lower() for sensitive in blacklist):
                sanitized[key] = "[REDACTED]"
            else:
                sanitized[key] = _sanitize_sensitive_data(value, blacklist)
        return sanitized
    elif isinstance(data, (list, tuple)):
        return [_sanitize_sensitive_data(item, blacklist) for item in data]
    elif isinstance(data, (bytes, bytearray)):
        return f"[BINARY_DATA_{len(data)}_BYTES]"
    else:
        return data


def log_operation(
    operation: str,
    level: str = "INFO",
    include_args: bool = True,
    include_result: bool = False,
    sensitive_fields: Optional[Set[str]] = None
) -> Callable:
    """
    Decorator that logs start, completion and failure of an adapter method.

    Args:
        operation: Operation name used in log messages
        level: Logging level for start/completion records
        include_args: Whether to log (sanitized) call arguments
        include_result: Whether to log the (sanitized) return value
        sensitive_fields: Additional argument names to redact

    Returns:
        Decorated method; exceptions are logged and re-raised unchanged
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            component_name = f"{func.__module__}.{self.__class__.__name__}"
            logger = get_logger(component_name)

            blacklist = DEFAULT_SENSITIVE_FIELDS.copy()
            if sensitive_fields:
                blacklist.update(sensitive_fields)

            context = {
                "component": component_name,
                "operation": operation,
                "method": func.__name__,
                "operation_id": f"op_{uuid.uuid4().hex[:8]}"
            }

            if include_args:
                bound_args = inspect.signature(func).bind(self, *args, **kwargs)
                bound_args.apply_defaults()
                args_dict = {k: v for k, v in bound_args.arguments.items() if k != 'self'}
                context["arguments"] = _sanitize_sensitive_data(args_dict, blacklist)

            log_level = getattr(logging, level.upper(), logging.INFO)
            start_time = time.time()
            logger.log(log_level, f"Starting {operation}", extra={
                "extra_fields": {**context, "status": "started"}
            })

            try:
                result = func(self, *args, **kwargs)
            except Exception as e:
                logger.error(f"Failed {operation}", extra={"extra_fields": {
                    **context,
                    "status": "failed",
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                    "duration_ms": round((time.time() - start_time) * 1000, 2)
                }})
                raise

            success_context = {
                **context,
                "status": "completed",
                "duration_ms": round((time.time() - start_time) * 1000, 2)
            }
            if include_result and result is not None:
                success_context["result"] = _sanitize_sensitive_data(result, blacklist)

            logger.log(log_level, f"Completed {operation}", extra={"extra_fields": success_context})
            return result

        return wrapper
    return decorator
