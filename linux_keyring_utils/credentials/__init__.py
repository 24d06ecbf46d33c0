"""Module de gestion des secrets pour applications Linux.

Deux backends sont disponibles :
    Secret Service (D-Bus) : GNOME Keyring, KWallet (KDE Plasma 6),
        KeePassXC (avec "Enable Secret Service" active) ;
    keyring noyau (keyctl) : repli pour les sessions sans daemon
        (SSH, conteneur, serveur).

Le store actif est choisi une fois par processus : Secret Service
s'il repond, sinon store composite avec repli sur le keyring noyau.

Exemple d'utilisation :

    from linux_keyring_utils.credentials import CredentialManager

    manager = CredentialManager.default("monapp")
    manager.store("alice", "s3cr3t")
    password = manager.get("alice")
    manager.delete_all()
"""

from linux_keyring_utils.credentials.base import CredentialStore
from linux_keyring_utils.credentials.exceptions import (
    CredentialError,
    CredentialNotFoundError,
    CredentialProviderUnavailableError,
    CredentialStoreError,
    CredentialUnlockError,
)
from linux_keyring_utils.credentials.models import (
    CredentialKey,
    decode_secret,
    encode_secret,
)
from linux_keyring_utils.credentials.config import (
    KeyringSettings,
    KeyringSettingsLoader,
    load_settings,
)
from linux_keyring_utils.credentials.providers import (
    KeyctlCredentialStore,
    SecretServiceCredentialStore,
)
from linux_keyring_utils.credentials.chain import FallbackCredentialStore
from linux_keyring_utils.credentials.bootstrap import (
    default_provider,
    get_fallback_provider,
    keyctl_fallback,
    register_fallback_factory,
    reset_default_provider,
    select_provider,
)
from linux_keyring_utils.credentials.manager import CredentialManager

__all__ = [
    # ABC
    "CredentialStore",
    # Modeles
    "CredentialKey",
    "encode_secret",
    "decode_secret",
    # Exceptions
    "CredentialError",
    "CredentialNotFoundError",
    "CredentialProviderUnavailableError",
    "CredentialStoreError",
    "CredentialUnlockError",
    # Configuration
    "KeyringSettings",
    "KeyringSettingsLoader",
    "load_settings",
    # Backends
    "SecretServiceCredentialStore",
    "KeyctlCredentialStore",
    # Composite et selection
    "FallbackCredentialStore",
    "default_provider",
    "get_fallback_provider",
    "keyctl_fallback",
    "register_fallback_factory",
    "reset_default_provider",
    "select_provider",
    # Facade
    "CredentialManager",
]
