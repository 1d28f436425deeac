"""Configuration management for multisource."""

from multisource.config.settings import (
    MultiSourceSettings,
    YamlConfigSource,
    setup_logging,
)

__all__ = [
    "MultiSourceSettings",
    "YamlConfigSource",
    "setup_logging",
]
