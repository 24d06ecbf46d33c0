"""Modeles de donnees pour la gestion des credentials.

Ce module definit la dataclass immuable CredentialKey qui porte
les differentes representations d'une cle (service, user) selon
le backend : nom composite pour le keyring noyau, attributs et
libelle pour le Secret Service.
"""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class CredentialKey:
    """Cle d'identification d'un secret.

    Attributes:
        service: Nom du service applicatif (ex: "monapp").
        user: Nom de l'utilisateur (ex: "alice").
    """

    service: str
    user: str

    @property
    def composite_name(self) -> str:
        """Description de la cle dans un keyring noyau.

        Returns:
            Chaine "<service>:<user>".
        """
        return f"{self.service}:{self.user}"

    @property
    def label(self) -> str:
        """Libelle lisible d'un item Secret Service.

        Returns:
            Chaine "Password for '<user>' on '<service>'".
        """
        return f"Password for '{self.user}' on '{self.service}'"

    @property
    def attributes(self) -> Dict[str, str]:
        """Attributs de recherche d'un item Secret Service.

        Returns:
            Dictionnaire {"username": user, "service": service}.
        """
        return {"username": self.user, "service": self.service}


def service_prefix(service: str) -> str:
    """Prefixe commun des noms composites d'un service.

    Args:
        service: Nom du service applicatif.

    Returns:
        Chaine "<service>:".
    """
    return f"{service}:"


def encode_secret(password: str) -> bytes:
    """Encode un secret en UTF-8 (octets non UTF-8 preserves)."""
    return password.encode("utf-8", errors="surrogateescape")


def decode_secret(data: bytes) -> str:
    """Decode un secret lu depuis un backend."""
    return data.decode("utf-8", errors="surrogateescape")
