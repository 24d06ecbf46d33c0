"""Client D-Bus de l'API freedesktop Secret Service.

Classes disponibles :
    SecretServiceClient : Appels OpenSession, Unlock, CreateItem, etc.
    Secret : Structure (oayays) d'un secret transporte sur le bus.
"""

from linux_keyring_utils.secretservice.client import (
    SecretServiceClient,
    connect,
    open_session_bus,
)
from linux_keyring_utils.secretservice.models import (
    LOGIN_COLLECTION_PATH,
    Secret,
)

__all__ = [
    "SecretServiceClient",
    "Secret",
    "LOGIN_COLLECTION_PATH",
    "connect",
    "open_session_bus",
]
