"""
Core ActivityFilter Package

Contains core infrastructure components: condition names, configuration,
events and error handling.
"""

from activityfilter.core.exceptions import (
    ActivityFilterError,
    ConfigurationError,
    ValidationError,
    EvaluationError,
    ErrorCode,
    ErrorContext,
    RecoverySuggestion
)

__all__ = [
    'ActivityFilterError',
    'ConfigurationError',
    'ValidationError',
    'EvaluationError',
    'ErrorCode',
    'ErrorContext',
    'RecoverySuggestion',
]
