"""Module de gestion des erreurs."""

from linux_keyring_utils.errors.exceptions import (ApplicationError,
                                                   ConfigurationError,
                                                   SystemRequirementError)


__all__ = [
    "ApplicationError",
    "ConfigurationError",
    "SystemRequirementError",
]
