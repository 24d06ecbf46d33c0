"""Tests unitaires pour le module commands."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from linux_keyring_utils.commands import (
    CommandResult,
    LinuxCommandExecutor,
)
from linux_keyring_utils.logging.base import Logger


# --- Tests CommandResult ---


class TestCommandResult:
    """Tests pour la dataclass CommandResult."""

    def test_creation(self):
        """Test de création d'un CommandResult."""
        result = CommandResult(
            command=["keyctl", "show", "@s"],
            return_code=0,
            stdout="Session Keyring",
            stderr="",
            success=True,
            duration=0.01,
        )
        assert result.command == ["keyctl", "show", "@s"]
        assert result.success is True
        assert result.executed_as_root is False

    def test_immutabilite(self):
        """Test que CommandResult est immutable (frozen)."""
        result = CommandResult(
            command=["keyctl"],
            return_code=0,
            stdout="",
            stderr="",
            success=True,
            duration=0.0,
        )
        with pytest.raises(AttributeError):
            result.return_code = 1


# --- Tests LinuxCommandExecutor.run ---


class TestLinuxCommandExecutorRun:
    """Tests pour la méthode run() de LinuxCommandExecutor."""

    def setup_method(self):
        """Initialise les mocks pour chaque test."""
        self.mock_logger = MagicMock(spec=Logger)
        self.executor = LinuxCommandExecutor(
            logger=self.mock_logger,
        )

    @patch(
        "linux_keyring_utils.commands.runner.subprocess.run"
    )
    def test_run_commande_reussie(self, mock_run):
        """Test d'une commande réussie."""
        mock_run.return_value = MagicMock(
            returncode=0,
            stdout="Session Keyring\n",
            stderr="",
        )
        result = self.executor.run(["keyctl", "show", "@s"])

        assert result.success is True
        assert result.return_code == 0
        assert result.stdout == "Session Keyring\n"
        assert result.command == ["keyctl", "show", "@s"]
        assert result.duration >= 0

    @patch(
        "linux_keyring_utils.commands.runner.subprocess.run"
    )
    def test_run_commande_echouee(self, mock_run):
        """Test d'une commande échouée."""
        mock_run.return_value = MagicMock(
            returncode=1,
            stdout="",
            stderr="keyctl_read_alloc: Permission denied",
        )
        result = self.executor.run(["keyctl", "show", "42"])

        assert result.success is False
        assert result.return_code == 1
        assert "Permission denied" in result.stderr
        self.mock_logger.log_error.assert_called_once()

    @patch(
        "linux_keyring_utils.commands.runner.subprocess.run"
    )
    def test_run_timeout(self, mock_run):
        """Test du timeout lors de l'exécution."""
        mock_run.side_effect = subprocess.TimeoutExpired(
            cmd=["keyctl", "show"], timeout=5, output=b"partiel",
        )
        result = self.executor.run(["keyctl", "show"], timeout=5)

        assert result.success is False
        assert result.return_code == -1
        assert result.stdout == "partiel"
        self.mock_logger.log_error.assert_called_once()

    @patch(
        "linux_keyring_utils.commands.runner.subprocess.run"
    )
    def test_run_commande_introuvable(self, mock_run):
        """Test avec une commande introuvable."""
        mock_run.side_effect = FileNotFoundError(
            "No such file or directory: 'keyctl'"
        )
        result = self.executor.run(["keyctl", "show", "@s"])

        assert result.success is False
        assert result.return_code == -1
        assert "keyctl" in result.stderr
        self.mock_logger.log_error.assert_called_once()

    @patch(
        "linux_keyring_utils.commands.runner.subprocess.run"
    )
    def test_run_log_commande(self, mock_run):
        """Test que la commande est loguée."""
        mock_run.return_value = MagicMock(
            returncode=0, stdout="", stderr="",
        )
        self.executor.run(["keyctl", "show", "@s"])

        self.mock_logger.log_info.assert_called_once()
        call_args = self.mock_logger.log_info.call_args[0][0]
        assert "keyctl show @s" in call_args

    @patch(
        "linux_keyring_utils.commands.runner.subprocess.run"
    )
    def test_run_timeout_par_defaut(self, mock_run):
        """Le timeout par défaut s'applique sans timeout explicite."""
        mock_run.return_value = MagicMock(
            returncode=0, stdout="", stderr="",
        )
        executor = LinuxCommandExecutor(default_timeout=7)
        executor.run(["keyctl", "show"])
        assert mock_run.call_args[1]["timeout"] == 7

        executor.run(["keyctl", "show"], timeout=2)
        assert mock_run.call_args[1]["timeout"] == 2

    @patch(
        "linux_keyring_utils.commands.runner.subprocess.run"
    )
    def test_run_sans_logger(self, mock_run):
        """Test de l'exécution sans logger."""
        mock_run.return_value = MagicMock(
            returncode=0, stdout="ok", stderr="",
        )
        executor = LinuxCommandExecutor()
        result = executor.run(["keyctl", "show"])

        assert result.success is True
        assert result.stdout == "ok"


# --- Tests du préfixe root ---


class TestLinuxCommandExecutorExecutedAsRoot:
    """Tests de la distinction root / utilisateur."""

    @patch("linux_keyring_utils.commands.runner.os.getuid", return_value=0)
    @patch(
        "linux_keyring_utils.commands.runner.subprocess.run"
    )
    def test_root(self, mock_run, _mock_uid):
        """En root, le résultat et le log portent la marque root."""
        mock_run.return_value = MagicMock(
            returncode=0, stdout="", stderr="",
        )
        logger = MagicMock(spec=Logger)
        result = LinuxCommandExecutor(logger=logger).run(["keyctl"])

        assert result.executed_as_root is True
        assert logger.log_info.call_args[0][0].startswith("[ROOT]")

    @patch(
        "linux_keyring_utils.commands.runner.os.getuid", return_value=1000
    )
    @patch(
        "linux_keyring_utils.commands.runner.subprocess.run"
    )
    def test_utilisateur(self, mock_run, _mock_uid):
        """Hors root, le log porte la marque [user]."""
        mock_run.return_value = MagicMock(
            returncode=0, stdout="", stderr="",
        )
        logger = MagicMock(spec=Logger)
        result = LinuxCommandExecutor(logger=logger).run(["keyctl"])

        assert result.executed_as_root is False
        assert logger.log_info.call_args[0][0].startswith("[user]")
