"""Selection du store de secrets actif.

Le choix est fait une fois par processus en sondant le daemon
Secret Service :

- daemon joignable : Secret Service seul, sans repli. Une panne
  ulterieure est alors consideree comme transitoire et n'est pas
  masquee par un autre backend ;
- daemon injoignable et repli de plateforme disponible : store
  composite (Secret Service principal, repli secondaire). Le
  Secret Service reste principal au cas ou le daemon demarre plus
  tard ;
- aucun repli : Secret Service seul ; les operations echouent
  tant que le daemon est absent.

Sous Linux, le repli par defaut est le keyring noyau.
"""

import sys
import threading
from typing import Callable, Optional

from linux_keyring_utils.credentials.base import CredentialStore
from linux_keyring_utils.credentials.chain import FallbackCredentialStore
from linux_keyring_utils.credentials.config import KeyringSettings
from linux_keyring_utils.credentials.providers.keyctl import (
    KeyctlCredentialStore,
)
from linux_keyring_utils.credentials.providers.secret_service import (
    SecretServiceCredentialStore,
)
from linux_keyring_utils.keyctl.listing import KeyctlLister
from linux_keyring_utils.logging.base import Logger
from linux_keyring_utils.logging.security_logger import SecurityLogger

FallbackFactory = Callable[
    [KeyringSettings, Optional[Logger]], Optional[CredentialStore]
]


def keyctl_fallback(
    settings: KeyringSettings,
    logger: Optional[Logger] = None,
) -> Optional[CredentialStore]:
    """Fabrique du repli keyring noyau (Linux uniquement)."""
    if not sys.platform.startswith("linux"):
        return None
    lister = KeyctlLister(
        command=settings.keyctl_command,
        timeout=settings.keyctl_timeout,
        logger=logger,
    )
    return KeyctlCredentialStore(
        scope=settings.keyctl_scope, lister=lister, logger=logger
    )


def _no_fallback(
    settings: KeyringSettings,
    logger: Optional[Logger] = None,
) -> Optional[CredentialStore]:
    return None


_fallback_factory: FallbackFactory = (
    keyctl_fallback if sys.platform.startswith("linux") else _no_fallback
)

_default_provider: Optional[CredentialStore] = None
_default_lock = threading.Lock()


def register_fallback_factory(factory: Optional[FallbackFactory]) -> None:
    """Remplace la fabrique du repli de plateforme.

    Args:
        factory: Nouvelle fabrique, ou None pour desactiver le repli.
    """
    global _fallback_factory
    _fallback_factory = factory or _no_fallback


def get_fallback_provider(
    settings: Optional[KeyringSettings] = None,
    logger: Optional[Logger] = None,
) -> Optional[CredentialStore]:
    """Retourne le repli de plateforme, ou None s'il n'y en a pas."""
    return _fallback_factory(settings or KeyringSettings(), logger)


def select_provider(
    settings: Optional[KeyringSettings] = None,
    logger: Optional[Logger] = None,
    primary: Optional[CredentialStore] = None,
    fallback_factory: Optional[FallbackFactory] = None,
    security_logger: Optional[SecurityLogger] = None,
) -> CredentialStore:
    """Choisit le store actif en sondant le daemon Secret Service.

    Args:
        settings: Parametres (defaut : KeyringSettings()).
        logger: Logger optionnel partage entre les stores.
        primary: Store principal injectable (defaut : Secret Service).
        fallback_factory: Fabrique de repli injectable (defaut : la
            fabrique enregistree pour la plateforme).
        security_logger: Audit optionnel des replis du store composite.

    Returns:
        Store a utiliser pour la duree du processus.
    """
    settings = settings or KeyringSettings()
    primary = primary or SecretServiceCredentialStore(
        settings=settings, logger=logger
    )
    if primary.is_available():
        if logger:
            logger.log_info(
                f"Store de secrets actif : {primary.source_name!r}"
            )
        return primary

    fallback = None
    if settings.enable_fallback:
        factory = fallback_factory or _fallback_factory
        fallback = factory(settings, logger)
    if fallback is None:
        if logger:
            logger.log_warning(
                f"{primary.source_name!r} injoignable et aucun repli "
                f"disponible : les operations echoueront"
            )
        return primary

    if logger:
        logger.log_warning(
            f"{primary.source_name!r} injoignable : repli sur "
            f"{fallback.source_name!r}"
        )
    return FallbackCredentialStore(
        primary=primary,
        fallback=fallback,
        logger=logger,
        security_logger=security_logger,
    )


def default_provider(
    settings: Optional[KeyringSettings] = None,
    logger: Optional[Logger] = None,
) -> CredentialStore:
    """Retourne le store du processus, selectionne au premier appel.

    Les arguments ne sont pris en compte qu'au premier appel.
    """
    global _default_provider
    with _default_lock:
        if _default_provider is None:
            _default_provider = select_provider(settings, logger)
        return _default_provider


def reset_default_provider() -> None:
    """Oublie le store selectionne (la prochaine demande resonde)."""
    global _default_provider
    with _default_lock:
        _default_provider = None
