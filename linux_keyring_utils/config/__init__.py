"""Module de configuration."""

from linux_keyring_utils.config.loader import (
    ConfigFileLoader,
    ConfigLoader,
    FileConfigLoader,
)

__all__ = [
    "ConfigLoader",
    "FileConfigLoader",
    "ConfigFileLoader",
]
