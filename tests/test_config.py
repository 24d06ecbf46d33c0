"""Tests pour le module config et KeyringSettings."""

import json
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from linux_keyring_utils.config import ConfigLoader, FileConfigLoader
from linux_keyring_utils.credentials.config import (
    KeyringSettings,
    KeyringSettingsLoader,
    load_settings,
)
from linux_keyring_utils.errors.exceptions import ConfigurationError
from linux_keyring_utils.secretservice.models import LOGIN_COLLECTION_PATH


class TestFileConfigLoader:
    """Tests pour FileConfigLoader."""

    def test_load_toml(self, tmp_path):
        """Test du chargement d'un fichier TOML."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('[keyring]\nkeyctl_scope = "persistent"\n')

        config = FileConfigLoader().load(config_file)

        assert config["keyring"]["keyctl_scope"] == "persistent"

    def test_load_json(self, tmp_path):
        """Test du chargement d'un fichier JSON."""
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"keyring": {"dbus_timeout": 2}}))

        config = FileConfigLoader().load(str(config_file))

        assert config["keyring"]["dbus_timeout"] == 2

    def test_load_file_not_found(self, tmp_path):
        """Test avec un fichier inexistant."""
        with pytest.raises(FileNotFoundError):
            FileConfigLoader().load(tmp_path / "absent.toml")

    def test_load_unsupported_format(self, tmp_path):
        """Test avec un format non supporté."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("keyring: {}")

        with pytest.raises(ValueError, match="Extension non supportée"):
            FileConfigLoader().load(config_file)


class TestKeyringSettings:
    """Tests du modèle KeyringSettings."""

    def test_valeurs_par_defaut(self):
        """Les valeurs par défaut ciblent la collection login."""
        settings = KeyringSettings()
        assert settings.collection_alias == "default"
        assert settings.login_collection_path == LOGIN_COLLECTION_PATH
        assert settings.dbus_timeout is None
        assert settings.keyctl_scope == "session"
        assert settings.keyctl_command == "keyctl"
        assert settings.enable_fallback is True

    def test_portee_invalide(self):
        """Une portée keyctl inconnue est refusée."""
        with pytest.raises(ValidationError):
            KeyringSettings(keyctl_scope="global")

    def test_timeout_negatif(self):
        """Un timeout D-Bus négatif est refusé."""
        with pytest.raises(ValidationError):
            KeyringSettings(dbus_timeout=-1)

    def test_chemin_collection_relatif(self):
        """Le chemin de collection doit être un chemin objet absolu."""
        with pytest.raises(ValidationError):
            KeyringSettings(login_collection_path="collection/login")

    def test_immuable(self):
        """Le modèle est gelé."""
        settings = KeyringSettings()
        with pytest.raises(ValidationError):
            settings.keyctl_scope = "persistent"


class TestLoadSettings:
    """Tests de load_settings() et KeyringSettingsLoader."""

    def test_section_keyring(self, tmp_path):
        """La section [keyring] est lue par défaut."""
        config_file = tmp_path / "app.toml"
        config_file.write_text(
            "[keyring]\n"
            'keyctl_scope = "persistent"\n'
            "keyctl_timeout = 5\n"
            "enable_fallback = false\n"
        )

        settings = load_settings(config_file)

        assert settings.keyctl_scope == "persistent"
        assert settings.keyctl_timeout == 5
        assert settings.enable_fallback is False

    def test_section_absente(self, tmp_path):
        """Une section absente donne les valeurs par défaut."""
        config_file = tmp_path / "app.toml"
        config_file.write_text('[autre]\ncle = "valeur"\n')

        assert load_settings(config_file) == KeyringSettings()

    def test_section_personnalisee(self, tmp_path):
        """Une autre section peut être demandée."""
        config_file = tmp_path / "app.json"
        config_file.write_text(
            json.dumps({"secrets": {"collection_alias": "perso"}})
        )

        settings = load_settings(config_file, section="secrets")

        assert settings.collection_alias == "perso"

    def test_cle_inconnue(self, tmp_path):
        """Une clé inconnue lève ConfigurationError."""
        config_file = tmp_path / "app.toml"
        config_file.write_text("[keyring]\nkeyctl_scop = \"session\"\n")

        with pytest.raises(ConfigurationError, match="keyring"):
            load_settings(config_file)

    def test_section_non_table(self, tmp_path):
        """Une section qui n'est pas une table lève ConfigurationError."""
        config_file = tmp_path / "app.json"
        config_file.write_text(json.dumps({"keyring": "session"}))

        with pytest.raises(ConfigurationError, match="table"):
            load_settings(config_file)

    def test_chargeur_injecte(self):
        """Le chargeur de configuration est injectable."""
        loader = MagicMock(spec=ConfigLoader)
        loader.load.return_value = {"keyring": {"dbus_timeout": 1.5}}

        settings_loader = KeyringSettingsLoader("virtuel.toml", loader)

        assert settings_loader.load().dbus_timeout == 1.5
        assert settings_loader.config == loader.load.return_value
        loader.load.assert_called_once_with("virtuel.toml")
