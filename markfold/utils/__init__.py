"""
Markfold utility modules.

This package provides shared utilities used across the Markfold codebase:
- Logging (loguru) with correlation-id scopes
"""

from .logger import (
    RequestContext,
    generate_request_id,
    get_correlation_id,
    get_request_context,
    is_debug_enabled,
    logger,
    with_correlation_id,
)

__all__ = [
    "RequestContext",
    "generate_request_id",
    "get_correlation_id",
    "get_request_context",
    "is_debug_enabled",
    "logger",
    "with_correlation_id",
]
