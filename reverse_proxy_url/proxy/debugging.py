"""Logging and error-response helpers for the before-hook pipeline."""

import logging
from datetime import UTC, datetime
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def log_hook_execution(
    request_id: str,
    hook_name: str,
    status: str,
    duration: Optional[float] = None,
    error: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> None:
    """Log hook execution details."""
    log_data = {
        "request_id": request_id,
        "hook_name": hook_name,
        "status": status,
    }

    if duration is not None:
        log_data["duration_seconds"] = str(duration)

    if error:
        log_data["error"] = error

    if details:
        log_data.update(details)

    if status == "error":
        logger.warning(f"[{request_id}] Hook {hook_name} rejected the request", extra=log_data)
    else:
        logger.debug(f"[{request_id}] Hook {hook_name} {status}", extra=log_data)


def create_error_response(
    message: str,
    request_id: str,
    error_type: str,
    details: Optional[Dict[str, Any]] = None,
    include_debug_info: bool = False,
) -> Dict[str, Any]:
    """Create the JSON body sent when a hook rejects a request."""
    response = {
        "detail": message,
        "error_type": error_type,
        "request_id": request_id,
    }

    if include_debug_info and details:
        response["debug"] = str({"timestamp": datetime.now(UTC).isoformat(), **details})

    return response
