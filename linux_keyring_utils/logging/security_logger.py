"""Logging structuré des événements de sécurité liés aux secrets.

Ce module fournit les primitives pour tracer les accès aux secrets
(écriture, lecture, suppression, repli de backend, refus) via une
interface typée et une sortie JSON structurée. La valeur d'un secret
n'apparaît jamais dans un événement.

Respecte le principe DIP : SecurityLogger dépend de l'abstraction Logger,
non d'une implémentation concrète.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

from linux_keyring_utils.logging.base import Logger


class SecurityEventType(StrEnum):
    """Types d'événements de sécurité traçables."""

    SECRET_STORED = "secret.stored"
    SECRET_READ = "secret.read"
    SECRET_MISSING = "secret.missing"
    SECRET_DELETED = "secret.deleted"
    SECRET_BULK_DELETED = "secret.bulk_deleted"
    BACKEND_FALLBACK = "backend.fallback"
    ACCESS_DENIED = "access.denied"


@dataclass(frozen=True)
class SecurityEvent:
    """Événement de sécurité structuré pour audit trail.

    Attributes:
        event_type: Type d'événement (SecurityEventType).
        resource: Ressource concernée (ex: "monapp:alice").
        details: Contexte additionnel (backend, erreur...).
        severity: Niveau de sévérité (info, warning, error, critical).
        user_id: Utilisateur propriétaire du secret.
        timestamp: Horodatage ISO 8601 UTC (auto-généré).
    """

    event_type: SecurityEventType
    resource: str | None = None
    details: dict[str, Any] = field(default_factory=dict)
    severity: str = "info"
    user_id: str | None = None
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def to_payload(self) -> dict[str, Any]:
        """Retourne le dictionnaire sérialisé en JSON.

        La clé user_id n'est présente que si elle est renseignée.
        """
        payload: dict[str, Any] = {
            "security_event": str(self.event_type),
            "timestamp": self.timestamp,
            "resource": self.resource,
            "severity": self.severity,
            "details": self.details,
        }
        if self.user_id is not None:
            payload["user_id"] = self.user_id
        return payload


class SecurityLogger:
    """Logger spécialisé pour les événements de sécurité.

    Formate chaque événement en JSON structuré et le transmet
    au Logger injecté selon le niveau de sévérité.

    Utilisation :
        sec_logger = SecurityLogger(file_logger)
        sec_logger.log_event(SecurityEvent(
            event_type=SecurityEventType.SECRET_DELETED,
            resource="monapp:alice",
            details={"backend": "keyctl"},
        ))
    """

    def __init__(self, logger: Logger) -> None:
        """Initialise le logger de sécurité.

        Args:
            logger: Instance de Logger pour l'émission des messages.
        """
        self._logger = logger

    def log_event(self, event: SecurityEvent) -> None:
        """Enregistre un événement de sécurité en JSON structuré.

        Args:
            event: Événement de sécurité à journaliser.
        """
        message = json.dumps(
            event.to_payload(), ensure_ascii=False, default=str
        )
        emit = {
            "critical": self._logger.log_error,
            "error": self._logger.log_error,
            "warning": self._logger.log_warning,
        }.get(event.severity, self._logger.log_info)
        emit(message)
