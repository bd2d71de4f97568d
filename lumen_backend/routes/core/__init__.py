"""
Core utilities for route handlers.
"""
from .observability import request_context_middleware
from .request_json import _read_json
from .response import _client_error, _json_response
from .services import SERVICES_KEY, _require_service

__all__ = [
    "SERVICES_KEY",
    "_client_error",
    "_json_response",
    "_read_json",
    "_require_service",
    "request_context_middleware",
]
