"""Acces au keyring du noyau Linux (add_key/keyctl).

Classes disponibles :
    KeyctlSyscalls : Appels systeme bruts via ctypes.
    Keyring, Key : API objet (session, persistant).
    KeyctlLister : Enumeration par prefixe via "keyctl show".
"""

from linux_keyring_utils.keyctl.keyring import Key, KeyNotFoundError, Keyring
from linux_keyring_utils.keyctl.listing import (
    KeyctlLister,
    parse_user_key_descriptions,
)
from linux_keyring_utils.keyctl.syscalls import KeyctlSyscalls

__all__ = [
    "KeyctlSyscalls",
    "Keyring",
    "Key",
    "KeyNotFoundError",
    "KeyctlLister",
    "parse_user_key_descriptions",
]
