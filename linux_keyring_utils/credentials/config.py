"""Configuration des backends de secrets.

Exemple de fichier TOML :

    [keyring]
    collection_alias = "default"
    keyctl_scope = "persistent"
    keyctl_timeout = 5
"""

from pathlib import Path
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from linux_keyring_utils.config.loader import ConfigFileLoader, ConfigLoader
from linux_keyring_utils.secretservice.models import (
    DEFAULT_COLLECTION_ALIAS,
    LOGIN_COLLECTION_PATH,
)


class KeyringSettings(BaseModel):
    """Parametres des backends Secret Service et keyctl.

    Attributes:
        collection_alias: Alias de la collection Secret Service cible.
        login_collection_path: Collection utilisee si l'alias n'est
            pas defini par le daemon.
        dbus_timeout: Timeout des appels D-Bus en secondes
            (None = attente illimitee).
        keyctl_scope: Keyring noyau utilise ("session" ou
            "persistent").
        keyctl_command: Outil de diagnostic utilise par delete_all.
        keyctl_timeout: Timeout de l'outil de diagnostic en secondes.
        enable_fallback: Autorise le repli sur le keyring noyau
            quand le Secret Service est injoignable.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    collection_alias: str = Field(
        default=DEFAULT_COLLECTION_ALIAS, min_length=1
    )
    login_collection_path: str = Field(
        default=LOGIN_COLLECTION_PATH, pattern=r"^/"
    )
    dbus_timeout: Optional[float] = Field(default=None, gt=0)
    keyctl_scope: Literal["session", "persistent"] = "session"
    keyctl_command: str = Field(default="keyctl", min_length=1)
    keyctl_timeout: Optional[int] = Field(default=None, gt=0)
    enable_fallback: bool = True


class KeyringSettingsLoader(ConfigFileLoader[KeyringSettings]):
    """Charge KeyringSettings depuis la section [keyring]."""

    schema = KeyringSettings
    default_section = "keyring"


def load_settings(
    config_path: Union[str, Path],
    section: Optional[str] = None,
    config_loader: Optional[ConfigLoader] = None,
) -> KeyringSettings:
    """Charge les parametres depuis un fichier TOML ou JSON.

    Args:
        config_path: Chemin du fichier de configuration.
        section: Section a lire (defaut : "keyring").
        config_loader: Chargeur injectable (tests).

    Returns:
        Parametres valides.

    Raises:
        ConfigurationError: si la section est invalide.
    """
    return KeyringSettingsLoader(config_path, config_loader).load(section)
