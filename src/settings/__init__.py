"""Configuration for bindscan."""

from settings.config import (
    CONFIG_FILENAME,
    BindscanConfig,
    ConfigError,
    TemplatesConfig,
    load_config,
    resolve_output_dir,
)

__all__ = [
    "CONFIG_FILENAME",
    "BindscanConfig",
    "ConfigError",
    "TemplatesConfig",
    "load_config",
    "resolve_output_dir",
]
