from functools import wraps
from typing import Any, Dict, Iterable, Optional

from flask import jsonify, request, current_app

from . import config
from .errors import APIError

# /api/* payloads are consumed unwrapped by the dashboard pages.
_LEGACY_PREFIXES = ("/api/",)


def legacy_endpoint(func):
    """Decorator to explicitly mark a route as legacy-only."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        return func(*args, **kwargs)

    setattr(func, "_legacy_endpoint", True)
    setattr(wrapper, "_legacy_endpoint", True)
    return wrapper


def _is_legacy_request() -> bool:
    """Determine if the current request should return legacy JSON."""
    if not getattr(config, "USE_LEGACY_RESPONSES", True):
        return False

    try:
        path = request.path  # type: ignore[attr-defined]
    except RuntimeError:
        # Outside of a request context default to wrapped responses.
        return False

    if not path:
        return False

    view_func = None
    endpoint = request.endpoint
    if endpoint:
        view_func = current_app.view_functions.get(endpoint)

    if view_func and getattr(view_func, "_legacy_endpoint", False):
        return True

    return any(path.startswith(prefix) for prefix in _LEGACY_PREFIXES)


def _build_success_payload(data: Optional[Any], message: str) -> Dict[str, Any] | Any:
    if _is_legacy_request():
        return data if data is not None else {}

    return {
        "status": "ok",
        "message": message,
        "data": data,
    }


def _build_error_payload(error: Any, message: str, details: Optional[str]) -> Dict[str, Any]:
    if _is_legacy_request():
        legacy_payload: Dict[str, Any] = {"error": error}
        if details:
            legacy_payload["details"] = details
        return legacy_payload

    payload: Dict[str, Any] = {
        "status": "error",
        "message": message,
        "error": error,
    }
    if details:
        payload["details"] = details
    return payload


def make_ok(data: Optional[Any] = None, message: str = "success", status_code: int = 200):
    """Return a standardized success response (legacy-aware)."""
    payload = _build_success_payload(data, message)
    response = jsonify(payload)
    return response, status_code


def make_error(
    error: Any,
    message: str = "An error occurred",
    status_code: int = 400,
    details: Optional[str] = None,
):
    """Return a standardized error response (legacy-aware).

    An ``APIError`` contributes its message and details; legacy routes then
    answer ``{"error": message, "details": details}``.
    """
    if isinstance(error, APIError):
        details = details or error.details
        message = error.message
        error = error.message if _is_legacy_request() else error.to_dict()

    payload = _build_error_payload(error, message, details)
    response = jsonify(payload)
    return response, status_code


def apply_cors_headers(response, allowed_origins: Iterable[str]):
    """Echo the request Origin back when it is in ``allowed_origins``."""
    origin = request.headers.get("Origin")
    origins = set(allowed_origins)
    if origin and (origin in origins or "*" in origins):
        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Access-Control-Allow-Credentials"] = "true"
        response.headers.add("Vary", "Origin")
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    return response
