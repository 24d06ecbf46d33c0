"""
Linux Keyring Utils - Stockage de secrets pour systèmes Linux.

Modules disponibles:
- credentials: Stores de secrets (Secret Service, keyring noyau,
  store composite, sélection automatique, CredentialManager)
- secretservice: Client D-Bus de l'API freedesktop Secret Service
- keyctl: Accès au keyring du noyau (appels système, keyctl show)
- logging: Gestion des logs (Logger, FileLogger, SecurityLogger)
- config: Chargement de configuration (TOML, JSON)
- commands: Exécution de commandes système (LinuxCommandExecutor)
- errors: Hiérarchie d'exceptions de la bibliothèque
"""

__version__ = "1.0.0"

# credentials en premier : secretservice et keyctl en dépendent
from linux_keyring_utils.credentials import (
    CredentialStore,
    CredentialKey,
    CredentialError,
    CredentialNotFoundError,
    CredentialProviderUnavailableError,
    CredentialStoreError,
    CredentialUnlockError,
    KeyringSettings,
    load_settings,
    SecretServiceCredentialStore,
    KeyctlCredentialStore,
    FallbackCredentialStore,
    default_provider,
    register_fallback_factory,
    reset_default_provider,
    select_provider,
    CredentialManager,
)
from linux_keyring_utils.logging import (
    Logger,
    FileLogger,
    SecurityLogger,
)
from linux_keyring_utils.config import (
    ConfigLoader,
    FileConfigLoader,
)
from linux_keyring_utils.commands import (
    CommandResult,
    CommandExecutor,
    LinuxCommandExecutor,
)
from linux_keyring_utils.errors import (
    ApplicationError,
    ConfigurationError,
    SystemRequirementError,
)

__all__ = [
    # Credentials - Contrat
    "CredentialStore",
    "CredentialKey",
    # Credentials - Exceptions
    "CredentialError",
    "CredentialNotFoundError",
    "CredentialProviderUnavailableError",
    "CredentialStoreError",
    "CredentialUnlockError",
    # Credentials - Configuration
    "KeyringSettings",
    "load_settings",
    # Credentials - Backends
    "SecretServiceCredentialStore",
    "KeyctlCredentialStore",
    "FallbackCredentialStore",
    # Credentials - Sélection
    "default_provider",
    "register_fallback_factory",
    "reset_default_provider",
    "select_provider",
    # Credentials - Facade
    "CredentialManager",
    # Logging
    "Logger",
    "FileLogger",
    "SecurityLogger",
    # Config
    "ConfigLoader",
    "FileConfigLoader",
    # Commands
    "CommandResult",
    "CommandExecutor",
    "LinuxCommandExecutor",
    # Errors
    "ApplicationError",
    "ConfigurationError",
    "SystemRequirementError",
]
