"""Configuration management module.

This module provides:
- Environment-based configuration with validation
- Component settings groups (Kubernetes, dashboard, streaming)
- Cached settings access via get_settings()
"""

from .settings import (
    DashboardSettings,
    Environment,
    KubernetesSettings,
    LogFormat,
    LogLevel,
    Settings,
    StreamingSettings,
    get_settings,
)

__all__ = [
    # Main settings
    "Settings",
    "get_settings",
    # Enums
    "Environment",
    "LogLevel",
    "LogFormat",
    # Component settings
    "KubernetesSettings",
    "DashboardSettings",
    "StreamingSettings",
]
