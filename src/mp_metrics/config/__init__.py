"""Config – settings, loaders and validation errors."""

from mp_metrics.config.settings import EnvSettingsLoader, MetricsSettings, Settings, SettingsLoader
from mp_metrics.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MetricsSettings",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
]
