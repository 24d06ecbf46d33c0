"""Client bloquant de l'API freedesktop Secret Service.

Ce module fournit SecretServiceClient, qui expose un appel Python par
methode D-Bus utilisee par le backend (OpenSession, Close, ReadAlias,
Unlock, CreateItem, SearchItems, GetSecret, Delete) au-dessus d'une
connexion jeepney.

Example :
    Lecture d'un secret avec une session garantie fermee :

        from linux_keyring_utils.secretservice import connect

        with connect() as client:
            collection = client.login_collection()
            client.unlock([collection])
            items = client.search_items(
                collection, {"service": "monapp", "username": "alice"}
            )
            with client.session() as session:
                secret = client.get_secret(items[0], session)
"""

from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from jeepney import DBusAddress, MatchRule, message_bus, new_method_call
from jeepney.io.blocking import DBusConnection, open_dbus_connection
from jeepney.low_level import Message
from jeepney.wrappers import DBusErrorResponse, unwrap_msg

from linux_keyring_utils.credentials.exceptions import (
    CredentialNotFoundError,
    CredentialProviderUnavailableError,
    CredentialStoreError,
    CredentialUnlockError,
)
from linux_keyring_utils.logging.base import Logger
from linux_keyring_utils.secretservice.models import (
    COLLECTION_INTERFACE,
    DEFAULT_COLLECTION_ALIAS,
    ERROR_IS_LOCKED,
    ERROR_NO_SUCH_OBJECT,
    ERROR_SERVICE_UNKNOWN,
    ERROR_UNKNOWN_OBJECT,
    ITEM_ATTRIBUTES_PROPERTY,
    ITEM_INTERFACE,
    ITEM_LABEL_PROPERTY,
    LOGIN_COLLECTION_PATH,
    NO_OBJECT,
    PEER_INTERFACE,
    PLAIN_ALGORITHM,
    PROMPT_INTERFACE,
    SECRET_SIGNATURE,
    SERVICE_BUS_NAME,
    SERVICE_INTERFACE,
    SERVICE_PATH,
    SESSION_INTERFACE,
    Secret,
)

ConnectionFactory = Callable[[], DBusConnection]


def open_session_bus() -> DBusConnection:
    """Ouvre une connexion au bus de session D-Bus."""
    return open_dbus_connection(bus="SESSION")


class SecretServiceClient:
    """Appels D-Bus vers le daemon Secret Service.

    Le client ne possede pas la connexion : son cycle de vie est gere
    par connect(). Les erreurs D-Bus sont traduites en exceptions du
    module credentials.

    Attributes:
        _connection: Connexion jeepney bloquante.
        _login_collection_path: Collection utilisee si l'alias
            par defaut n'est pas defini.
        _collection_alias: Alias de la collection cible.
        _timeout: Timeout en secondes des appels (None = aucun).
        _logger: Logger optionnel.
    """

    def __init__(
        self,
        connection: DBusConnection,
        login_collection_path: str = LOGIN_COLLECTION_PATH,
        collection_alias: str = DEFAULT_COLLECTION_ALIAS,
        timeout: Optional[float] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        """Initialise le client.

        Args:
            connection: Connexion jeepney deja ouverte.
            login_collection_path: Chemin de la collection "login".
            collection_alias: Alias lu via ReadAlias.
            timeout: Timeout des appels en secondes.
            logger: Logger optionnel (injection de dependance).
        """
        self._connection = connection
        self._login_collection_path = login_collection_path
        self._collection_alias = collection_alias
        self._timeout = timeout
        self._logger = logger

    def _log(self, message: str) -> None:
        if self._logger:
            self._logger.log_info(message)

    def _send(self, message: Message) -> Tuple[Any, ...]:
        """Envoie un message et retourne le corps de la reponse.

        Raises:
            CredentialProviderUnavailableError: daemon absent ou
                connexion perdue.
            CredentialUnlockError: objet verrouille.
            CredentialNotFoundError: objet inexistant.
            CredentialStoreError: toute autre erreur D-Bus.
        """
        try:
            reply = self._connection.send_and_get_reply(
                message, timeout=self._timeout
            )
            return unwrap_msg(reply)
        except DBusErrorResponse as exc:
            raise self._translate_error(exc) from exc
        except OSError as exc:
            raise CredentialProviderUnavailableError(
                f"Connexion au bus D-Bus perdue : {exc}"
            ) from exc

    @staticmethod
    def _translate_error(exc: DBusErrorResponse) -> Exception:
        detail = f"{exc.name} : {exc.data}"
        if exc.name == ERROR_IS_LOCKED:
            return CredentialUnlockError(f"Objet verrouille ({detail})")
        if exc.name in (ERROR_NO_SUCH_OBJECT, ERROR_UNKNOWN_OBJECT):
            return CredentialNotFoundError(f"Objet introuvable ({detail})")
        if exc.name == ERROR_SERVICE_UNKNOWN:
            return CredentialProviderUnavailableError(
                f"Daemon Secret Service absent ({detail})"
            )
        return CredentialStoreError(f"Erreur Secret Service ({detail})")

    def _call(
        self,
        path: str,
        interface: str,
        method: str,
        signature: Optional[str] = None,
        body: Tuple[Any, ...] = (),
    ) -> Tuple[Any, ...]:
        address = DBusAddress(
            path, bus_name=SERVICE_BUS_NAME, interface=interface
        )
        return self._send(
            new_method_call(address, method, signature, body)
        )

    def ping(self) -> None:
        """Verifie que le daemon repond (et l'active si besoin)."""
        self._call(SERVICE_PATH, PEER_INTERFACE, "Ping")

    def open_session(self) -> str:
        """Ouvre une session "plain" et retourne son chemin objet."""
        _output, session_path = self._call(
            SERVICE_PATH,
            SERVICE_INTERFACE,
            "OpenSession",
            "sv",
            (PLAIN_ALGORITHM, ("s", "")),
        )
        self._log(f"Session Secret Service ouverte : {session_path}")
        return session_path

    def close_session(self, session_path: str) -> None:
        """Ferme une session ouverte par open_session()."""
        self._call(session_path, SESSION_INTERFACE, "Close")
        self._log(f"Session Secret Service fermee : {session_path}")

    @contextmanager
    def session(self) -> Iterator[str]:
        """Ouvre une session et garantit sa fermeture.

        Yields:
            Chemin objet de la session.
        """
        session_path = self.open_session()
        try:
            yield session_path
        finally:
            self.close_session(session_path)

    def read_alias(self, name: str) -> str:
        """Retourne la collection designee par un alias ("/" si aucun)."""
        (path,) = self._call(
            SERVICE_PATH, SERVICE_INTERFACE, "ReadAlias", "s", (name,)
        )
        return path

    def login_collection(self) -> str:
        """Resout la collection cible (alias, sinon collection login)."""
        path = self.read_alias(self._collection_alias)
        if path == NO_OBJECT:
            return self._login_collection_path
        return path

    def unlock(self, paths: List[str]) -> None:
        """Deverrouille des collections ou des items.

        Si le daemon exige une interaction utilisateur, le prompt
        est execute et son resultat attendu.

        Raises:
            CredentialUnlockError: si le prompt est refuse.
        """
        _unlocked, prompt = self._call(
            SERVICE_PATH, SERVICE_INTERFACE, "Unlock", "ao", (paths,)
        )
        if prompt != NO_OBJECT:
            self._run_prompt(prompt, action="deverrouillage")

    def _run_prompt(self, prompt_path: str, action: str) -> Any:
        """Execute un prompt et attend son signal Completed.

        Returns:
            Resultat (variant deballe) transmis par Completed.

        Raises:
            CredentialUnlockError: si l'utilisateur annule le prompt.
        """
        rule = MatchRule(
            type="signal",
            interface=PROMPT_INTERFACE,
            member="Completed",
            path=prompt_path,
        )
        self._send(message_bus.AddMatch(rule))
        with self._connection.filter(rule) as signals:
            self._call(prompt_path, PROMPT_INTERFACE, "Prompt", "s", ("",))
            signal = self._connection.recv_until_filtered(
                signals, timeout=self._timeout
            )
        dismissed, (_signature, result) = signal.body
        if dismissed:
            raise CredentialUnlockError(
                f"Prompt de {action} annule : {prompt_path}"
            )
        return result

    def create_item(
        self,
        collection: str,
        label: str,
        attributes: Dict[str, str],
        secret: Secret,
        replace: bool = True,
    ) -> str:
        """Cree un item dans une collection.

        Le remplacement d'un item aux attributs identiques depend
        du daemon : certains creent un doublon malgre replace=True.

        Returns:
            Chemin objet de l'item cree.
        """
        properties = {
            ITEM_LABEL_PROPERTY: ("s", label),
            ITEM_ATTRIBUTES_PROPERTY: ("a{ss}", attributes),
        }
        item, prompt = self._call(
            collection,
            COLLECTION_INTERFACE,
            "CreateItem",
            f"a{{sv}}{SECRET_SIGNATURE}b",
            (properties, secret.to_dbus(), replace),
        )
        if prompt != NO_OBJECT:
            item = self._run_prompt(prompt, action="creation")
        return item

    def search_items(
        self,
        collection: str,
        attributes: Dict[str, str],
    ) -> List[str]:
        """Retourne les items d'une collection portant ces attributs."""
        (results,) = self._call(
            collection,
            COLLECTION_INTERFACE,
            "SearchItems",
            "a{ss}",
            (attributes,),
        )
        return list(results)

    def get_secret(self, item: str, session_path: str) -> Secret:
        """Lit le secret d'un item via une session ouverte."""
        (data,) = self._call(
            item, ITEM_INTERFACE, "GetSecret", "o", (session_path,)
        )
        return Secret.from_dbus(data)

    def delete_item(self, item: str) -> None:
        """Supprime un item (prompt execute si le daemon l'exige)."""
        (prompt,) = self._call(item, ITEM_INTERFACE, "Delete")
        if prompt != NO_OBJECT:
            self._run_prompt(prompt, action="suppression")
        self._log(f"Item Secret Service supprime : {item}")


@contextmanager
def connect(
    connection_factory: Optional[ConnectionFactory] = None,
    **client_options: Any,
) -> Iterator[SecretServiceClient]:
    """Ouvre une connexion au bus et la ferme en sortie de bloc.

    Args:
        connection_factory: Fabrique de connexion (defaut : bus de
            session). Permet d'injecter un faux bus en test.
        **client_options: Options transmises a SecretServiceClient.

    Yields:
        Client pret a l'emploi.

    Raises:
        CredentialProviderUnavailableError: si le bus est injoignable.
    """
    factory = connection_factory or open_session_bus
    try:
        connection = factory()
    except (KeyError, OSError, ValueError) as exc:
        raise CredentialProviderUnavailableError(
            f"Bus de session D-Bus injoignable : {exc!r}"
        ) from exc
    try:
        yield SecretServiceClient(connection, **client_options)
    finally:
        connection.close()
