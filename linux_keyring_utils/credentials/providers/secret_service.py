"""Store de secrets via le daemon freedesktop Secret Service.

Ce module fournit SecretServiceCredentialStore, backend principal
sous Linux et BSD. Compatibilites :
- GNOME Keyring
- KWallet (KDE Plasma 6)
- KeePassXC (avec "Enable Secret Service" active)

Chaque operation ouvre sa propre connexion D-Bus (et sa session
quand un secret transite), puis les libere avant de retourner,
y compris en cas d'erreur.
"""

from contextlib import AbstractContextManager
from typing import List, Optional

from linux_keyring_utils.credentials.base import CredentialStore
from linux_keyring_utils.credentials.config import KeyringSettings
from linux_keyring_utils.credentials.exceptions import (
    CredentialError,
    CredentialNotFoundError,
)
from linux_keyring_utils.credentials.models import (
    CredentialKey,
    decode_secret,
    encode_secret,
)
from linux_keyring_utils.logging.base import Logger
from linux_keyring_utils.secretservice.client import (
    ConnectionFactory,
    SecretServiceClient,
    connect,
)
from linux_keyring_utils.secretservice.models import Secret


class SecretServiceCredentialStore(CredentialStore):
    """Lit et ecrit des secrets dans la collection par defaut.

    Les items portent les attributs {"username", "service"} et le
    libelle "Password for '<user>' on '<service>'".

    Attributes:
        _settings: Parametres (collection, timeout).
        _connection_factory: Fabrique de connexion D-Bus injectable.
        _logger: Logger optionnel.
    """

    def __init__(
        self,
        settings: Optional[KeyringSettings] = None,
        connection_factory: Optional[ConnectionFactory] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        """Initialise le store Secret Service.

        Args:
            settings: Parametres optionnels (defaut : KeyringSettings()).
            connection_factory: Fabrique de connexion (defaut : bus de
                session). Permet d'injecter un faux bus en test.
            logger: Logger optionnel (injection de dependance).
        """
        self._settings = settings or KeyringSettings()
        self._connection_factory = connection_factory
        self._logger = logger

    def _connect(self) -> AbstractContextManager[SecretServiceClient]:
        return connect(
            self._connection_factory,
            login_collection_path=self._settings.login_collection_path,
            collection_alias=self._settings.collection_alias,
            timeout=self._settings.dbus_timeout,
            logger=self._logger,
        )

    def _log(self, message: str) -> None:
        if self._logger:
            self._logger.log_info(message)

    @staticmethod
    def _unlocked_collection(client: SecretServiceClient) -> str:
        collection = client.login_collection()
        client.unlock([collection])
        return collection

    def _find_item(
        self,
        client: SecretServiceClient,
        service: str,
        user: str,
    ) -> str:
        """Retourne le premier item du couple (service, user).

        L'ordre des resultats est defini par le daemon.

        Raises:
            CredentialNotFoundError: si aucun item ne correspond.
        """
        collection = self._unlocked_collection(client)
        results = client.search_items(
            collection, CredentialKey(service, user).attributes
        )
        if not results:
            raise CredentialNotFoundError(
                f"Secret introuvable : service={service!r}, user={user!r}"
            )
        return results[0]

    def _find_service_items(
        self,
        client: SecretServiceClient,
        service: str,
    ) -> List[str]:
        """Retourne tous les items d'un service.

        Raises:
            CredentialNotFoundError: si aucun item ne correspond.
        """
        collection = self._unlocked_collection(client)
        results = client.search_items(collection, {"service": service})
        if not results:
            raise CredentialNotFoundError(
                f"Aucun secret pour service={service!r}"
            )
        return results

    def set(
        self,
        service: str,
        user: str,
        password: str,
    ) -> None:
        """Cree ou remplace l'item du couple (service, user).

        Le daemon decide si CreateItem remplace un item aux memes
        attributs ou cree un doublon.
        """
        key = CredentialKey(service, user)
        with self._connect() as client, client.session() as session:
            secret = Secret(
                session=session,
                parameters=b"",
                value=encode_secret(password),
            )
            collection = self._unlocked_collection(client)
            client.create_item(
                collection, key.label, key.attributes, secret, replace=True
            )
        self._log(
            f"Secret stocke via Secret Service : "
            f"service={service!r}, user={user!r}"
        )

    def get(self, service: str, user: str) -> str:
        """Lit le secret du premier item correspondant."""
        with self._connect() as client:
            item = self._find_item(client, service, user)
            with client.session() as session:
                client.unlock([item])
                secret = client.get_secret(item, session)
        return decode_secret(secret.value)

    def delete(self, service: str, user: str) -> None:
        """Supprime le premier item correspondant."""
        with self._connect() as client:
            item = self._find_item(client, service, user)
            client.delete_item(item)
        self._log(
            f"Secret supprime via Secret Service : "
            f"service={service!r}, user={user!r}"
        )

    def delete_all(self, service: str) -> None:
        """Supprime tous les items du service.

        S'arrete a la premiere suppression en echec et propage
        l'erreur : les items restants ne sont pas supprimes.
        """
        if not service:
            raise CredentialNotFoundError(
                "Service vide : suppression globale refusee."
            )
        with self._connect() as client:
            try:
                items = self._find_service_items(client, service)
            except CredentialNotFoundError:
                return
            for item in items:
                client.delete_item(item)
        self._log(
            f"{len(items)} secret(s) supprime(s) via Secret Service "
            f"pour service={service!r}"
        )

    def is_available(self) -> bool:
        """Sonde le daemon (connexion au bus puis Ping)."""
        try:
            with self._connect() as client:
                client.ping()
        except CredentialError:
            return False
        return True

    @property
    def source_name(self) -> str:
        """Nom court de la source.

        Returns:
            "secret-service"
        """
        return "secret-service"
