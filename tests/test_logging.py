"""Tests pour le module logging."""

import json
import logging
from unittest.mock import MagicMock

from linux_keyring_utils.logging import (
    FileLogger,
    Logger,
    SecurityEvent,
    SecurityEventType,
    SecurityLogger,
)


class TestFileLogger:
    """Tests pour FileLogger."""

    def test_implements_logger_interface(self, tmp_path):
        """Vérifie que FileLogger implémente l'interface Logger."""
        logger = FileLogger(str(tmp_path / "test.log"))

        assert isinstance(logger, Logger)

    def test_niveaux(self, tmp_path):
        """Les trois niveaux sont écrits dans le fichier."""
        log_file = tmp_path / "test.log"
        logger = FileLogger(str(log_file))

        logger.log_info("Message info")
        logger.log_warning("Message warning")
        logger.log_error("Message error")

        content = log_file.read_text()
        assert "INFO - Message info" in content
        assert "WARNING - Message warning" in content
        assert "ERROR - Message error" in content
        logger.close()

    def test_creates_log_directory(self, tmp_path):
        """Test que le répertoire de log est créé si nécessaire."""
        log_file = tmp_path / "subdir" / "test.log"

        logger = FileLogger(str(log_file))
        logger.log_info("Test")

        assert log_file.exists()
        logger.close()

    def test_config_from_dict(self, tmp_path):
        """Test de la configuration depuis un dictionnaire."""
        log_file = tmp_path / "test.log"
        config = {
            "logging": {
                "level": "warning",
                "format": "%(levelname)s | %(message)s"
            }
        }

        logger = FileLogger(str(log_file), config=config)
        logger.log_info("Ignoré")
        logger.log_warning("Retenu")

        content = log_file.read_text()
        assert "Ignoré" not in content
        assert "WARNING | Retenu" in content
        logger.close()

    def test_niveau_inconnu(self, tmp_path):
        """Un niveau inconnu retombe sur INFO."""
        logger = FileLogger(
            str(tmp_path / "test.log"),
            config={"logging": {"level": "BAVARD"}},
        )

        assert logger.logger.level == logging.INFO
        logger.close()

    def test_utf8_encoding(self, tmp_path):
        """Test de l'encodage UTF-8."""
        log_file = tmp_path / "test.log"
        logger = FileLogger(str(log_file))

        logger.log_info("Secret stocké : 'monapp:élodie'")

        content = log_file.read_text(encoding="utf-8")
        assert "élodie" in content
        logger.close()


class TestFileLoggerConsole:
    """Tests pour FileLogger avec sortie console et handlers partagés."""

    def test_console_output_active(self, tmp_path):
        """FileLogger avec console_output=True crée un StreamHandler."""
        logger = FileLogger(
            str(tmp_path / "console.log"), console_output=True
        )

        assert len(logger.logger.handlers) == 2
        logger.close()

    def test_handlers_partages(self, tmp_path):
        """Deux FileLogger sur le même fichier partagent le handler."""
        log_file = str(tmp_path / "shared.log")
        logger1 = FileLogger(log_file)
        logger2 = FileLogger(log_file)

        assert logger2.handler is logger1.handler
        assert len(logger2.logger.handlers) == 1
        logger2.close()

    def test_close_detache_les_handlers(self, tmp_path):
        """close() retire les handlers du logger."""
        logger = FileLogger(str(tmp_path / "close.log"))
        logger.close()

        assert logger.logger.handlers == []


class TestSecurityLogger:
    """Tests pour SecurityLogger et SecurityEvent."""

    def test_log_event_info(self):
        """log_event avec severity='info' appelle log_info."""
        mock_logger = MagicMock()
        SecurityLogger(mock_logger).log_event(SecurityEvent(
            event_type=SecurityEventType.SECRET_READ,
            resource="monapp:alice",
        ))

        mock_logger.log_info.assert_called_once()
        assert "secret.read" in mock_logger.log_info.call_args[0][0]

    def test_log_event_warning(self):
        """log_event avec severity='warning' appelle log_warning."""
        mock_logger = MagicMock()
        SecurityLogger(mock_logger).log_event(SecurityEvent(
            event_type=SecurityEventType.BACKEND_FALLBACK,
            severity="warning",
        ))

        mock_logger.log_warning.assert_called_once()

    def test_log_event_error_et_critical(self):
        """error et critical passent par log_error."""
        mock_logger = MagicMock()
        sec_logger = SecurityLogger(mock_logger)
        for severity in ("error", "critical"):
            sec_logger.log_event(SecurityEvent(
                event_type=SecurityEventType.ACCESS_DENIED,
                severity=severity,
            ))

        assert mock_logger.log_error.call_count == 2

    def test_payload_json(self):
        """Le payload contient l'événement, la ressource et les détails."""
        mock_logger = MagicMock()
        SecurityLogger(mock_logger).log_event(SecurityEvent(
            event_type=SecurityEventType.SECRET_STORED,
            resource="monapp:élodie",
            details={"backend": "keyctl"},
            user_id="élodie",
        ))

        payload = json.loads(mock_logger.log_info.call_args[0][0])
        assert payload["security_event"] == "secret.stored"
        assert payload["resource"] == "monapp:élodie"
        assert payload["details"] == {"backend": "keyctl"}
        assert payload["user_id"] == "élodie"
        assert payload["timestamp"]

    def test_sans_user_id(self):
        """Sans user_id, la clé est absente du payload."""
        mock_logger = MagicMock()
        SecurityLogger(mock_logger).log_event(SecurityEvent(
            event_type=SecurityEventType.SECRET_BULK_DELETED,
            resource="monapp",
        ))

        payload = json.loads(mock_logger.log_info.call_args[0][0])
        assert "user_id" not in payload
