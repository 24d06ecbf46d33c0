"""Backends de stockage de secrets.

Classes disponibles :
    SecretServiceCredentialStore : daemon freedesktop Secret Service.
    KeyctlCredentialStore : keyring du noyau Linux.
"""

from linux_keyring_utils.credentials.providers.keyctl import (
    KeyctlCredentialStore,
)
from linux_keyring_utils.credentials.providers.secret_service import (
    SecretServiceCredentialStore,
)

__all__ = [
    "SecretServiceCredentialStore",
    "KeyctlCredentialStore",
]
