"""Configuration management for the reconciler."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config
from .models import (
    AdvancedConfig,
    AppConfig,
    DatePosted,
    LogFormat,
    LoggingConfig,
    LogLevel,
    ReferenceStoreConfig,
    ReportConfig,
    SearchConfig,
)

__all__ = [
    "load_config",
    "load_environment_config",
    "AppConfig",
    "SearchConfig",
    "ReferenceStoreConfig",
    "ReportConfig",
    "LoggingConfig",
    "AdvancedConfig",
    "EnvironmentConfig",
    "DatePosted",
    "LogLevel",
    "LogFormat",
    "ConfigurationError",
]
