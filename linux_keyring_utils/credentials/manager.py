"""Facade de gestion des secrets d'un service.

Ce module fournit CredentialManager, facade liee a un nom de service
au-dessus d'un CredentialStore, avec audit optionnel des acces.
"""

from typing import Optional

from linux_keyring_utils.credentials.base import CredentialStore
from linux_keyring_utils.credentials.bootstrap import default_provider
from linux_keyring_utils.credentials.exceptions import (
    CredentialError,
    CredentialNotFoundError,
)
from linux_keyring_utils.credentials.models import CredentialKey
from linux_keyring_utils.logging.base import Logger
from linux_keyring_utils.logging.security_logger import (
    SecurityEvent,
    SecurityEventType,
    SecurityLogger,
)


class CredentialManager:
    """Facade unifiee pour lire et stocker les secrets d'un service.

    Usage typique :

        manager = CredentialManager.default("monapp")
        manager.store("alice", "s3cr3t")
        password = manager.get("alice")
        manager.delete_all()

    Attributes:
        _service: Nom du service applicatif.
        _store: Store de secrets sous-jacent.
        _security_logger: Audit optionnel des acces.
    """

    def __init__(
        self,
        service: str,
        store: CredentialStore,
        logger: Optional[Logger] = None,
        security_logger: Optional[SecurityLogger] = None,
    ) -> None:
        """Initialise le manager.

        Args:
            service: Nom du service applicatif (ex: "monapp").
            store: Store de secrets (ex: default_provider()).
            logger: Logger optionnel ; sert a construire un
                SecurityLogger si aucun n'est fourni.
            security_logger: Audit optionnel des acces.
        """
        self._service = service
        self._store = store
        if security_logger is None and logger is not None:
            security_logger = SecurityLogger(logger)
        self._security_logger = security_logger

    @property
    def service(self) -> str:
        """Nom du service gere."""
        return self._service

    def _audit(
        self,
        event_type: SecurityEventType,
        user: Optional[str] = None,
        severity: str = "info",
        error: Optional[Exception] = None,
    ) -> None:
        if self._security_logger is None:
            return
        resource = (
            CredentialKey(self._service, user).composite_name
            if user is not None
            else self._service
        )
        details = {"backend": self._store.source_name}
        if error is not None:
            details["error"] = f"{type(error).__name__}: {error}"
        self._security_logger.log_event(SecurityEvent(
            event_type=event_type,
            resource=resource,
            details=details,
            severity=severity,
            user_id=user,
        ))

    def get(self, user: str) -> str:
        """Lit le secret d'un utilisateur.

        Raises:
            CredentialNotFoundError: si le secret est absent.
        """
        try:
            value = self._store.get(self._service, user)
        except CredentialNotFoundError:
            self._audit(SecurityEventType.SECRET_MISSING, user)
            raise
        except CredentialError as exc:
            self._audit(
                SecurityEventType.ACCESS_DENIED, user, "warning", exc
            )
            raise
        self._audit(SecurityEventType.SECRET_READ, user)
        return value

    def get_or_default(self, user: str, default: str = "") -> str:
        """Lit un secret, ou retourne default s'il est absent."""
        try:
            return self.get(user)
        except CredentialNotFoundError:
            return default

    def store(self, user: str, password: str) -> None:
        """Stocke ou remplace le secret d'un utilisateur."""
        try:
            self._store.set(self._service, user, password)
        except CredentialError as exc:
            self._audit(
                SecurityEventType.ACCESS_DENIED, user, "error", exc
            )
            raise
        self._audit(SecurityEventType.SECRET_STORED, user)

    def delete(self, user: str) -> None:
        """Supprime le secret d'un utilisateur.

        Raises:
            CredentialNotFoundError: si le secret est absent.
        """
        self._store.delete(self._service, user)
        self._audit(SecurityEventType.SECRET_DELETED, user)

    def delete_all(self) -> None:
        """Supprime tous les secrets du service."""
        self._store.delete_all(self._service)
        self._audit(
            SecurityEventType.SECRET_BULK_DELETED, severity="warning"
        )

    @classmethod
    def default(
        cls,
        service: str,
        logger: Optional[Logger] = None,
    ) -> "CredentialManager":
        """Cree un manager sur le store selectionne pour le processus.

        Args:
            service: Nom du service applicatif.
            logger: Logger optionnel (audit et selection du store).

        Returns:
            Instance de CredentialManager configuree.
        """
        return cls(
            service=service,
            store=default_provider(logger=logger),
            logger=logger,
        )
