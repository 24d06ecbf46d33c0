"""Store de secrets dans le keyring du noyau Linux.

Ce module fournit KeyctlCredentialStore, backend de repli quand le
daemon Secret Service est injoignable (session SSH, conteneur,
serveur sans bureau). Les secrets sont des cles de type "user"
nommees "<service>:<user>".

Deux portees sont disponibles :
- "session" : les cles disparaissent a la fin de la session ;
- "persistent" : keyring par UID, survit a la deconnexion, expire
  apres trois jours sans acces.
"""

from typing import Literal, Optional

from linux_keyring_utils.credentials.base import CredentialStore
from linux_keyring_utils.credentials.exceptions import (
    CredentialNotFoundError,
    CredentialProviderUnavailableError,
    CredentialStoreError,
)
from linux_keyring_utils.credentials.models import (
    CredentialKey,
    decode_secret,
    encode_secret,
    service_prefix,
)
from linux_keyring_utils.errors.exceptions import SystemRequirementError
from linux_keyring_utils.keyctl.keyring import Keyring, KeyNotFoundError
from linux_keyring_utils.keyctl.listing import (
    SESSION_KEYRING_SPEC,
    KeyctlLister,
)
from linux_keyring_utils.keyctl.syscalls import KeyctlSyscalls, is_missing_key
from linux_keyring_utils.logging.base import Logger

KeyctlScope = Literal["session", "persistent"]


class KeyctlCredentialStore(CredentialStore):
    """Stocke les secrets dans le keyring de session ou persistant.

    Le keyring est resolu a chaque appel. L'ecrasement d'un secret
    n'est pas atomique : l'ancienne cle est retiree puis la nouvelle
    ajoutee.

    Attributes:
        _scope: "session" ou "persistent".
        _syscalls: Liaison noyau (creee a la demande).
        _lister: Enumerateur utilise par delete_all.
        _logger: Logger optionnel.
    """

    def __init__(
        self,
        scope: KeyctlScope = "session",
        syscalls: Optional[KeyctlSyscalls] = None,
        lister: Optional[KeyctlLister] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        """Initialise le store keyctl.

        Args:
            scope: Keyring cible ("session" ou "persistent").
            syscalls: Liaison noyau injectable (tests).
            lister: Enumerateur injectable (tests).
            logger: Logger optionnel (injection de dependance).
        """
        if scope not in ("session", "persistent"):
            raise ValueError(f"Portee keyctl inconnue : {scope!r}")
        self._scope = scope
        self._syscalls = syscalls
        self._lister = lister or KeyctlLister(logger=logger)
        self._logger = logger

    def _keyring(self) -> Keyring:
        """Resout le keyring cible.

        Raises:
            CredentialProviderUnavailableError: si le noyau refuse
                ou si l'architecture n'est pas supportee.
        """
        try:
            if self._syscalls is None:
                self._syscalls = KeyctlSyscalls()
            if self._scope == "persistent":
                return Keyring.persistent(self._syscalls)
            return Keyring.session(self._syscalls)
        except (OSError, SystemRequirementError) as exc:
            raise CredentialProviderUnavailableError(
                f"Keyring {self._scope} indisponible : {exc}"
            ) from exc

    def _log(self, message: str) -> None:
        if self._logger:
            self._logger.log_info(message)

    def set(
        self,
        service: str,
        user: str,
        password: str,
    ) -> None:
        """Stocke un secret, en retirant d'abord toute cle homonyme.

        Raises:
            CredentialStoreError: si le secret est vide ou si le
                noyau refuse l'ajout.
        """
        if not password:
            raise CredentialStoreError(
                "Le keyring noyau n'accepte pas de secret vide."
            )
        keyring = self._keyring()
        name = CredentialKey(service, user).composite_name
        try:
            keyring.search(name).unlink()
        except (KeyNotFoundError, OSError):
            pass
        try:
            keyring.add(name, encode_secret(password))
        except OSError as exc:
            raise CredentialStoreError(
                f"Ajout de la cle {name!r} refuse : {exc}"
            ) from exc
        self._log(f"Secret stocke dans le keyring {self._scope} : {name!r}")

    def get(self, service: str, user: str) -> str:
        """Lit un secret ; CredentialNotFoundError si absent."""
        keyring = self._keyring()
        name = CredentialKey(service, user).composite_name
        try:
            key = keyring.search(name)
            return decode_secret(key.get())
        except KeyNotFoundError as exc:
            raise CredentialNotFoundError(
                f"Secret introuvable : service={service!r}, user={user!r}"
            ) from exc
        except OSError as exc:
            if is_missing_key(exc):
                raise CredentialNotFoundError(
                    f"Secret disparu pendant la lecture : {name!r}"
                ) from exc
            raise CredentialStoreError(
                f"Lecture de la cle {name!r} impossible : {exc}"
            ) from exc

    def delete(self, service: str, user: str) -> None:
        """Retire un secret ; CredentialNotFoundError si absent."""
        keyring = self._keyring()
        name = CredentialKey(service, user).composite_name
        try:
            keyring.search(name).unlink()
        except KeyNotFoundError as exc:
            raise CredentialNotFoundError(
                f"Secret introuvable : service={service!r}, user={user!r}"
            ) from exc
        except OSError as exc:
            raise CredentialStoreError(
                f"Suppression de la cle {name!r} impossible : {exc}"
            ) from exc
        self._log(f"Secret supprime du keyring {self._scope} : {name!r}")

    def delete_all(self, service: str) -> None:
        """Retire toutes les cles "<service>:*" (au mieux).

        Les cles disparues entre l'enumeration et la suppression,
        comme les echecs individuels, sont ignores. Un outil keyctl
        absent equivaut a "rien a supprimer".
        """
        if not service:
            raise CredentialNotFoundError(
                "Service vide : suppression globale refusee."
            )
        keyring = self._keyring()
        target = (
            SESSION_KEYRING_SPEC
            if self._scope == "session"
            else str(keyring.serial)
        )
        removed = 0
        for description in self._lister.list_descriptions(
            service_prefix(service), keyring=target
        ):
            try:
                keyring.search(description).unlink()
                removed += 1
            except (KeyNotFoundError, OSError):
                continue
        self._log(
            f"{removed} secret(s) supprime(s) du keyring {self._scope} "
            f"pour service={service!r}"
        )

    def is_available(self) -> bool:
        """Indique si le keyring cible peut etre resolu."""
        try:
            self._keyring()
        except CredentialProviderUnavailableError:
            return False
        return True

    @property
    def source_name(self) -> str:
        """Nom court de la source.

        Returns:
            "keyctl"
        """
        return "keyctl"
