"""Fonctions de chargement de configuration."""

import json
import tomllib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Generic, TypeVar, Union

from pydantic import BaseModel, ValidationError

from linux_keyring_utils.errors.exceptions import ConfigurationError

# Type générique pour le modèle de configuration
T = TypeVar("T", bound=BaseModel)


class ConfigLoader(ABC):
    """
    Interface abstraite pour le chargement de configuration.

    Permet l'injection de dépendance et facilite les tests
    en permettant de substituer l'implémentation réelle par un mock.
    """

    @abstractmethod
    def load(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """
        Charge un fichier de configuration.

        Args:
            config_path: Chemin vers le fichier de configuration

        Returns:
            Dictionnaire de configuration brut

        Raises:
            FileNotFoundError: Si le fichier n'existe pas
            ValueError: Si le format n'est pas supporté
        """
        pass


class FileConfigLoader(ConfigLoader):
    """
    Implémentation du chargeur de configuration depuis fichiers.

    Supporte les formats TOML et JSON, détectés automatiquement
    par l'extension du fichier.
    """

    def load(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """
        Charge un fichier de configuration TOML ou JSON.

        Args:
            config_path: Chemin vers le fichier de configuration

        Returns:
            Dictionnaire de configuration brut

        Raises:
            FileNotFoundError: Si le fichier n'existe pas
            ValueError: Si l'extension n'est pas supportée
        """
        path = Path(config_path)

        if not path.exists():
            raise FileNotFoundError(
                f"Fichier de configuration non trouvé: {path}"
            )

        suffix = path.suffix.lower()

        if suffix == ".toml":
            with open(path, "rb") as f:
                return tomllib.load(f)
        if suffix == ".json":
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        raise ValueError(
            f"Extension non supportée: {suffix}. "
            "Utilisez .toml ou .json"
        )


class ConfigFileLoader(ABC, Generic[T]):
    """Classe de base des chargeurs de configuration typés.

    Charge un fichier (TOML ou JSON) puis valide une section
    via un modèle pydantic.

    Attributes:
        _config: Dictionnaire de configuration chargé depuis le fichier.

    Example:
        >>> class KeyringSettingsLoader(ConfigFileLoader[KeyringSettings]):
        ...     schema = KeyringSettings
        ...     default_section = "keyring"
    """

    schema: type
    default_section: str = ""

    def __init__(
        self,
        config_path: str | Path,
        config_loader: ConfigLoader | None = None
    ) -> None:
        """Initialise le loader en chargeant le fichier de configuration.

        Args:
            config_path: Chemin vers le fichier de configuration
                (.toml ou .json).
            config_loader: Chargeur de configuration injectable
                (DIP). Si None, utilise FileConfigLoader par défaut.

        Raises:
            FileNotFoundError: Si le fichier de configuration n'existe pas.
            ValueError: Si l'extension du fichier n'est pas supportée.
        """
        loader = config_loader or FileConfigLoader()
        self._config: dict[str, Any] = loader.load(config_path)

    @property
    def config(self) -> dict[str, Any]:
        """Retourne le dictionnaire de configuration brut."""
        return self._config

    def _get_section(self, section: str) -> dict[str, Any]:
        """Extrait une section du fichier de configuration.

        Une section absente équivaut à une section vide : le modèle
        applique alors ses valeurs par défaut.
        """
        data = self._config.get(section, {})
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"La section '{section}' doit être une table, "
                f"reçu: {type(data).__name__}"
            )
        return data

    def load(self, section: str | None = None) -> T:
        """Charge et valide la section demandée.

        Args:
            section: Nom de la section. Si None, utilise
                default_section ("" = racine du fichier).

        Returns:
            Instance du modèle pydantic.

        Raises:
            ConfigurationError: Si la section ne respecte pas le modèle.
        """
        name = self.default_section if section is None else section
        data = self._get_section(name) if name else self._config
        try:
            return self.schema.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Configuration invalide (section '{name}'): {e}"
            ) from e
