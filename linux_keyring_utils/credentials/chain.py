"""Store composite avec repli sur un backend secondaire.

Ce module implemente FallbackCredentialStore : chaque operation est
tentee sur le backend principal puis, en cas d'echec, rejouee sur le
backend de repli s'il est configure.
"""

from typing import Callable, Optional, TypeVar

from linux_keyring_utils.credentials.base import CredentialStore
from linux_keyring_utils.logging.base import Logger
from linux_keyring_utils.logging.security_logger import (
    SecurityEvent,
    SecurityEventType,
    SecurityLogger,
)

T = TypeVar("T")


class FallbackCredentialStore(CredentialStore):
    """Delegue au store principal, puis au store de repli en cas d'echec.

    Toute erreur du principal declenche le repli, y compris
    CredentialNotFoundError : un secret stocke uniquement dans le
    backend de repli reste ainsi lisible. L'erreur du principal est
    alors ecartee au profit du resultat du repli.

    Exemple pour un poste sans daemon Secret Service :

        store = FallbackCredentialStore(
            primary=SecretServiceCredentialStore(),
            fallback=KeyctlCredentialStore(),
        )
        store.set("monapp", "alice", "s3cr3t")

    Attributes:
        _primary: Store principal.
        _fallback: Store de repli optionnel.
        _logger: Logger optionnel.
        _security_logger: Audit optionnel des replis.
    """

    def __init__(
        self,
        primary: CredentialStore,
        fallback: Optional[CredentialStore] = None,
        logger: Optional[Logger] = None,
        security_logger: Optional[SecurityLogger] = None,
    ) -> None:
        """Initialise le store composite.

        Args:
            primary: Store principal.
            fallback: Store de repli (None = aucun repli).
            logger: Logger optionnel (injection de dependance).
            security_logger: Audit optionnel des replis.
        """
        self._primary = primary
        self._fallback = fallback
        self._logger = logger
        self._security_logger = security_logger

    @property
    def primary(self) -> CredentialStore:
        """Store principal."""
        return self._primary

    @property
    def fallback(self) -> Optional[CredentialStore]:
        """Store de repli (None si absent)."""
        return self._fallback

    def _dispatch(
        self,
        operation: str,
        call: Callable[[CredentialStore], T],
    ) -> T:
        if self._fallback is None:
            return call(self._primary)
        try:
            return call(self._primary)
        except Exception as exc:
            if self._logger:
                self._logger.log_warning(
                    f"{operation} en echec via "
                    f"{self._primary.source_name!r} ({exc}), "
                    f"repli sur {self._fallback.source_name!r}"
                )
            if self._security_logger:
                self._security_logger.log_event(SecurityEvent(
                    event_type=SecurityEventType.BACKEND_FALLBACK,
                    details={
                        "operation": operation,
                        "primary": self._primary.source_name,
                        "fallback": self._fallback.source_name,
                        "error": type(exc).__name__,
                    },
                    severity="warning",
                ))
        return call(self._fallback)

    def set(
        self,
        service: str,
        user: str,
        password: str,
    ) -> None:
        """Stocke le secret dans le premier store qui accepte."""
        self._dispatch(
            "set", lambda store: store.set(service, user, password)
        )

    def get(self, service: str, user: str) -> str:
        """Lit le secret depuis le principal, sinon depuis le repli."""
        return self._dispatch(
            "get", lambda store: store.get(service, user)
        )

    def delete(self, service: str, user: str) -> None:
        """Supprime le secret du principal, sinon du repli."""
        self._dispatch(
            "delete", lambda store: store.delete(service, user)
        )

    def delete_all(self, service: str) -> None:
        """Supprime les secrets du service du principal, sinon du repli."""
        self._dispatch(
            "delete_all", lambda store: store.delete_all(service)
        )

    def is_available(self) -> bool:
        """Indique si au moins un des stores est disponible."""
        if self._primary.is_available():
            return True
        return self._fallback is not None and self._fallback.is_available()

    @property
    def source_name(self) -> str:
        """Nom court de la source.

        Returns:
            "chain"
        """
        return "chain"
