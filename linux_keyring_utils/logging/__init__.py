"""Module de logging."""

from linux_keyring_utils.logging.base import Logger
from linux_keyring_utils.logging.file_logger import FileLogger
from linux_keyring_utils.logging.security_logger import (
    SecurityEvent,
    SecurityEventType,
    SecurityLogger,
)

__all__ = [
    "Logger",
    "FileLogger",
    "SecurityEvent",
    "SecurityEventType",
    "SecurityLogger",
]
