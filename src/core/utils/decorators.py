"""
Common decorators for storage-triggered Lambda handlers.
"""

from __future__ import annotations

import traceback
from collections.abc import Callable
from functools import wraps
from typing import Any

from aws_lambda_powertools import Logger

logger = Logger(service="storage-event-handler", UTC=True)

JsonDict = dict[str, Any]


def _log_error(
    message: str,
    *,
    handler_name: str,
    request_id: str | None,
    exc: Exception,
    level: str = "warning",
) -> None:
    """
    Log error with consistent structure and full context.

    Args:
        message: Log message
        handler_name: Name of the handler function
        request_id: AWS request ID
        exc: Exception that was raised
        level: Log level ('warning' or 'exception')
    """
    log_extra = {
        "handler": handler_name,
        "request_id": request_id,
        "error": str(exc),
        "error_type": type(exc).__name__,
    }

    if level == "exception":
        logger.exception(message, extra=log_extra)
    else:
        log_extra["traceback"] = traceback.format_exc()
        logger.warning(message, extra=log_extra)


def storage_event_handler(
    func: Callable[..., JsonDict],
) -> Callable[..., JsonDict]:
    """
    Decorator for Lambda handlers triggered by storage notifications.

    Provides:
    - Centralized exception handling
    - Request ID tracking and structured logging
    - A failure summary instead of a raised error, so the platform does not
      redeliver an event that may already be partially processed

    Example:
        @storage_event_handler
        def handler(event, context):
            return {"records": 1, "completed": 1, "failed": 0, "skipped": 0}
    """

    @wraps(func)
    def wrapper(event: Any, context: Any) -> JsonDict:
        request_id = getattr(context, "aws_request_id", None)

        try:
            return func(event, context)

        # Malformed events
        except (KeyError, TypeError, AttributeError, ValueError) as exc:
            _log_error(
                "Malformed storage event",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
            )
            error_type = type(exc).__name__

        # Catch-all for unexpected errors
        except Exception as exc:
            _log_error(
                "Unexpected error in handler",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
                level="exception",
            )
            error_type = type(exc).__name__

        records = event.get("Records") if isinstance(event, dict) else None
        record_count = len(records) if isinstance(records, list) else 0
        return {
            "records": record_count,
            "completed": 0,
            "failed": record_count,
            "skipped": 0,
            "error": error_type,
        }

    return wrapper
