"""Appels systeme add_key(2) et keyctl(2) via ctypes.

Ce module appelle directement le noyau par le point d'entree
syscall() de la libc, sans dependre de libkeyutils. Les numeros
d'appels systeme dependent de l'architecture.
"""

import ctypes
import errno
import os
import platform
import struct
from typing import Dict, List, Optional, Tuple

from linux_keyring_utils.errors.exceptions import SystemRequirementError

# Identifiants speciaux de keyrings (linux/keyctl.h)
KEY_SPEC_THREAD_KEYRING = -1
KEY_SPEC_PROCESS_KEYRING = -2
KEY_SPEC_SESSION_KEYRING = -3
KEY_SPEC_USER_KEYRING = -4
KEY_SPEC_USER_SESSION_KEYRING = -5

# Operations keyctl
KEYCTL_GET_KEYRING_ID = 0
KEYCTL_UNLINK = 9
KEYCTL_SEARCH = 10
KEYCTL_READ = 11
KEYCTL_GET_PERSISTENT = 22

USER_KEY_TYPE = "user"

# (add_key, request_key, keyctl) par machine
_SYSCALL_NUMBERS: Dict[str, Tuple[int, int, int]] = {
    "x86_64": (248, 249, 250),
    "amd64": (248, 249, 250),
    "i386": (286, 287, 288),
    "i686": (286, 287, 288),
    "armv6l": (309, 310, 311),
    "armv7l": (309, 310, 311),
    "aarch64": (217, 218, 219),
    "arm64": (217, 218, 219),
    "riscv64": (217, 218, 219),
    "ppc64": (269, 270, 271),
    "ppc64le": (269, 270, 271),
    "s390x": (278, 279, 280),
}


def syscall_numbers(machine: Optional[str] = None) -> Tuple[int, int, int]:
    """Retourne les numeros (add_key, request_key, keyctl).

    Args:
        machine: Architecture (defaut : platform.machine()).

    Raises:
        SystemRequirementError: si l'architecture est inconnue.
    """
    machine = machine or platform.machine()
    try:
        return _SYSCALL_NUMBERS[machine.lower()]
    except KeyError:
        raise SystemRequirementError(
            f"Appels systeme keyctl non supportes sur {machine!r}"
        )


class KeyctlSyscalls:
    """Liaison bas niveau vers les appels systeme de gestion de cles.

    Chaque methode retourne la valeur brute du noyau ou leve OSError
    avec l'errno positionne (ENOKEY, EKEYEXPIRED, EINVAL, ...).

    Attributes:
        _libc: Bibliotheque C chargee avec use_errno=True.
        _nr_add_key: Numero de l'appel add_key.
        _nr_keyctl: Numero de l'appel keyctl.
    """

    def __init__(
        self,
        libc: Optional[ctypes.CDLL] = None,
        machine: Optional[str] = None,
    ) -> None:
        """Charge la libc et resout les numeros d'appels systeme.

        Args:
            libc: Bibliotheque C injectable (defaut : processus courant).
            machine: Architecture a utiliser (defaut : detectee).

        Raises:
            SystemRequirementError: si l'architecture est inconnue.
        """
        self._nr_add_key, _nr_request_key, self._nr_keyctl = (
            syscall_numbers(machine)
        )
        self._libc = libc or ctypes.CDLL(None, use_errno=True)
        self._libc.syscall.restype = ctypes.c_long

    def _syscall(self, number: int, *args: object) -> int:
        result = self._libc.syscall(ctypes.c_long(number), *args)
        if result < 0:
            err = ctypes.get_errno()
            raise OSError(err, os.strerror(err))
        return result

    def _keyctl(self, operation: int, *args: object) -> int:
        return self._syscall(self._nr_keyctl, ctypes.c_long(operation), *args)

    def get_keyring_id(self, keyring: int, create: bool = True) -> int:
        """Resout un identifiant special (@s, @u...) en numero de cle."""
        return self._keyctl(
            KEYCTL_GET_KEYRING_ID,
            ctypes.c_long(keyring),
            ctypes.c_long(1 if create else 0),
        )

    def get_persistent(
        self,
        uid: int = -1,
        destination: int = KEY_SPEC_SESSION_KEYRING,
    ) -> int:
        """Recupere (ou cree) le keyring persistant d'un UID.

        Le keyring est lie dans destination ; le noyau repousse son
        expiration a chaque acces.

        Args:
            uid: UID cible (-1 = UID courant).
            destination: Keyring dans lequel le lier.
        """
        return self._keyctl(
            KEYCTL_GET_PERSISTENT,
            ctypes.c_long(uid),
            ctypes.c_long(destination),
        )

    def add_key(
        self,
        description: str,
        payload: bytes,
        keyring: int,
        key_type: str = USER_KEY_TYPE,
    ) -> int:
        """Ajoute une cle dans un keyring et retourne son numero."""
        buffer = ctypes.create_string_buffer(payload, len(payload))
        return self._syscall(
            self._nr_add_key,
            ctypes.c_char_p(key_type.encode()),
            ctypes.c_char_p(description.encode()),
            buffer,
            ctypes.c_size_t(len(payload)),
            ctypes.c_long(keyring),
        )

    def search(
        self,
        keyring: int,
        description: str,
        key_type: str = USER_KEY_TYPE,
    ) -> int:
        """Cherche une cle par description, recursivement.

        Raises:
            OSError: errno ENOKEY si la cle est absente.
        """
        return self._keyctl(
            KEYCTL_SEARCH,
            ctypes.c_long(keyring),
            ctypes.c_char_p(key_type.encode()),
            ctypes.c_char_p(description.encode()),
            ctypes.c_long(0),
        )

    def read(self, key: int) -> bytes:
        """Lit le contenu complet d'une cle.

        La taille est demandee au noyau, puis le contenu est lu en
        une seule passe.
        """
        size = self._keyctl(
            KEYCTL_READ, ctypes.c_long(key), None, ctypes.c_size_t(0)
        )
        if size == 0:
            return b""
        buffer = ctypes.create_string_buffer(size)
        length = self._keyctl(
            KEYCTL_READ, ctypes.c_long(key), buffer, ctypes.c_size_t(size)
        )
        return buffer.raw[:min(length, size)]

    def linked_keys(self, keyring: int) -> List[int]:
        """Retourne les numeros des cles liees directement au keyring.

        KEYCTL_READ sur un keyring renvoie un tableau de key_serial_t
        (entiers 32 bits signes, ordre natif).
        """
        raw = self.read(keyring)
        count = len(raw) // 4
        return list(struct.unpack(f"={count}i", raw[:count * 4]))

    def unlink(self, key: int, keyring: int) -> None:
        """Retire une cle d'un keyring."""
        self._keyctl(KEYCTL_UNLINK, ctypes.c_long(key), ctypes.c_long(keyring))


_MISSING_KEY_ERRNOS = (
    getattr(errno, "ENOKEY", 126),
    getattr(errno, "EKEYEXPIRED", 127),
    getattr(errno, "EKEYREVOKED", 128),
)


def is_missing_key(exc: OSError) -> bool:
    """Indique si une erreur noyau signifie "cle absente"."""
    return exc.errno in _MISSING_KEY_ERRNOS
