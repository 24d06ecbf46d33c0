"""Objets Keyring et Key au-dessus des appels systeme keyctl.

Ce module fournit une API objet minimale : un Keyring resolu
(session ou persistant) permet de chercher, d'ajouter et de lire
des cles de type "user".
"""

from dataclasses import dataclass
from typing import Optional

from linux_keyring_utils.keyctl.syscalls import (
    KEY_SPEC_SESSION_KEYRING,
    KeyctlSyscalls,
    is_missing_key,
)


class KeyNotFoundError(LookupError):
    """Levee quand une recherche de cle ne trouve rien."""


@dataclass(frozen=True)
class Key:
    """Cle noyau liee a un keyring.

    Le numero est attribue par le noyau et change apres un
    unlink suivi d'un nouvel ajout.

    Attributes:
        serial: Numero de la cle.
        keyring: Numero du keyring contenant la cle.
        syscalls: Liaison utilisee pour les operations.
    """

    serial: int
    keyring: int
    syscalls: KeyctlSyscalls

    def get(self) -> bytes:
        """Retourne le contenu brut de la cle."""
        return self.syscalls.read(self.serial)

    def unlink(self) -> None:
        """Retire la cle de son keyring."""
        self.syscalls.unlink(self.serial, self.keyring)


class Keyring:
    """Keyring noyau resolu en numero de cle.

    Attributes:
        serial: Numero du keyring.
        name: Nom lisible ("session", "persistent").
    """

    def __init__(
        self,
        serial: int,
        syscalls: KeyctlSyscalls,
        name: str = "",
    ) -> None:
        self.serial = serial
        self.name = name
        self._syscalls = syscalls

    @classmethod
    def session(
        cls,
        syscalls: Optional[KeyctlSyscalls] = None,
    ) -> "Keyring":
        """Retourne le keyring de session (cree s'il n'existe pas)."""
        syscalls = syscalls or KeyctlSyscalls()
        serial = syscalls.get_keyring_id(KEY_SPEC_SESSION_KEYRING)
        return cls(serial, syscalls, name="session")

    @classmethod
    def persistent(
        cls,
        syscalls: Optional[KeyctlSyscalls] = None,
        uid: int = -1,
    ) -> "Keyring":
        """Retourne le keyring persistant de l'UID courant.

        Ce keyring survit a la fermeture de session ; le noyau
        l'expire apres trois jours sans acces par defaut.
        """
        syscalls = syscalls or KeyctlSyscalls()
        serial = syscalls.get_persistent(uid, KEY_SPEC_SESSION_KEYRING)
        return cls(serial, syscalls, name="persistent")

    def search(self, description: str) -> Key:
        """Cherche une cle "user" par description exacte.

        La recherche du noyau parcourt aussi les keyrings imbriques
        (le keyring persistant est lie dans @s) : seule une cle liee
        directement a ce keyring est retenue.

        Raises:
            KeyNotFoundError: si la cle est absente de ce keyring.
            OSError: pour toute autre erreur noyau.
        """
        try:
            serial = self._syscalls.search(self.serial, description)
        except OSError as exc:
            if is_missing_key(exc):
                raise KeyNotFoundError(description) from exc
            raise
        if serial not in self._syscalls.linked_keys(self.serial):
            raise KeyNotFoundError(description)
        return Key(serial, self.serial, self._syscalls)

    def add(self, description: str, data: bytes) -> Key:
        """Ajoute une cle "user" dans ce keyring."""
        serial = self._syscalls.add_key(description, data, self.serial)
        return Key(serial, self.serial, self._syscalls)

    def __repr__(self) -> str:
        return f"Keyring(name={self.name!r}, serial={self.serial})"
