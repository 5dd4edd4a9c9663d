"""
Configuration Management Package

Provides Pydantic-based configuration models and management for ActivityFilter.
"""

from activityfilter.core.config.models import (
    AppConfig,
    OptionsConfig,
    RemoveConfig,
    RunOnConfig,
    normalize_linked_conditions,
)
from activityfilter.core.config.manager import ConfigManager

__all__ = [
    "AppConfig",
    "RemoveConfig",
    "OptionsConfig",
    "RunOnConfig",
    "normalize_linked_conditions",
    "ConfigManager",
]
