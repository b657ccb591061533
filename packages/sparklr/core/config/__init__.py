"""Configuration management for Sparklr."""

from sparklr.core.config.loader import (
    configure_logging,
    detect_format,
    load_app_config,
    load_config,
)
from sparklr.core.config.models import (
    AppConfig,
    ExportConfig,
    LoggingConfig,
    ViewportConfig,
)

__all__ = [
    # Loaders
    "detect_format",
    "load_config",
    "load_app_config",
    "configure_logging",
    # Models
    "AppConfig",
    "ExportConfig",
    "LoggingConfig",
    "ViewportConfig",
]
