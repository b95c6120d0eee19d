# src/sinkadmin/core/__init__.py
"""Core infrastructure: configuration, authentication, logging."""

from sinkadmin.core.auth import (
    Authentication,
    NoAuthentication,
    TokenAuthentication,
    authentication_from_token,
)
from sinkadmin.core.config import (
    AdminSettings,
    LoggingSettings,
    TlsSettings,
    load_settings,
    resolve_config,
)
from sinkadmin.core.logging import configure_logging, get_logger

__all__ = [
    "AdminSettings",
    "Authentication",
    "LoggingSettings",
    "NoAuthentication",
    "TlsSettings",
    "TokenAuthentication",
    "authentication_from_token",
    "configure_logging",
    "get_logger",
    "load_settings",
    "resolve_config",
]
