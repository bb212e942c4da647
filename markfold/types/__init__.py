"""
Markfold type definitions.

This module exports the range types and the error hierarchy.
"""

# Core types
from .core import FoldingRange, FoldingRangeKind, LanguageRegion, LineRange

# Error types
from .errors import (
    ConfigurationError,
    ErrorCode,
    ErrorContext,
    ErrorSeverity,
    MarkfoldError,
    ProviderError,
    RecoveryAction,
    ValidationError,
)

__all__ = [
    # Core types
    "FoldingRange",
    "FoldingRangeKind",
    "LanguageRegion",
    "LineRange",
    # Error types
    "ErrorCode",
    "ErrorSeverity",
    "RecoveryAction",
    "ErrorContext",
    "MarkfoldError",
    "ConfigurationError",
    "ValidationError",
    "ProviderError",
]
