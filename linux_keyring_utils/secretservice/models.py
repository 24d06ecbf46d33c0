"""Constantes et structures de l'API freedesktop Secret Service.

Reference : https://specifications.freedesktop.org/secret-service/
"""

from dataclasses import dataclass
from typing import Tuple

SERVICE_BUS_NAME = "org.freedesktop.secrets"
SERVICE_PATH = "/org/freedesktop/secrets"

SERVICE_INTERFACE = "org.freedesktop.Secret.Service"
SESSION_INTERFACE = "org.freedesktop.Secret.Session"
COLLECTION_INTERFACE = "org.freedesktop.Secret.Collection"
ITEM_INTERFACE = "org.freedesktop.Secret.Item"
PROMPT_INTERFACE = "org.freedesktop.Secret.Prompt"
PEER_INTERFACE = "org.freedesktop.DBus.Peer"

ITEM_LABEL_PROPERTY = "org.freedesktop.Secret.Item.Label"
ITEM_ATTRIBUTES_PROPERTY = "org.freedesktop.Secret.Item.Attributes"

LOGIN_COLLECTION_PATH = "/org/freedesktop/secrets/collection/login"
DEFAULT_COLLECTION_ALIAS = "default"

# Chemin objet "vide" renvoye quand aucun prompt n'est necessaire.
NO_OBJECT = "/"

PLAIN_ALGORITHM = "plain"
TEXT_CONTENT_TYPE = "text/plain; charset=utf8"

ERROR_IS_LOCKED = "org.freedesktop.Secret.Error.IsLocked"
ERROR_NO_SUCH_OBJECT = "org.freedesktop.Secret.Error.NoSuchObject"
ERROR_SERVICE_UNKNOWN = "org.freedesktop.DBus.Error.ServiceUnknown"
ERROR_UNKNOWN_OBJECT = "org.freedesktop.DBus.Error.UnknownObject"

SECRET_SIGNATURE = "(oayays)"


@dataclass(frozen=True)
class Secret:
    """Secret transporte sur le bus, lie a une session ouverte.

    Attributes:
        session: Chemin objet de la session.
        parameters: Parametres de l'algorithme (vide en "plain").
        value: Valeur brute du secret.
        content_type: Type MIME de la valeur.
    """

    session: str
    parameters: bytes
    value: bytes
    content_type: str = TEXT_CONTENT_TYPE

    def to_dbus(self) -> Tuple[str, bytes, bytes, str]:
        """Retourne la structure D-Bus (oayays)."""
        return (
            self.session,
            self.parameters,
            self.value,
            self.content_type,
        )

    @classmethod
    def from_dbus(cls, data: Tuple[str, bytes, bytes, str]) -> "Secret":
        """Construit un Secret depuis une structure (oayays)."""
        session, parameters, value, content_type = data
        return cls(
            session=session,
            parameters=bytes(parameters),
            value=bytes(value),
            content_type=content_type,
        )
