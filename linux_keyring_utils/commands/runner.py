"""Exécuteur de commandes Linux via subprocess.

Ce module fournit LinuxCommandExecutor, une implémentation concrète
de CommandExecutor qui utilise subprocess pour exécuter des outils
de diagnostic (ex: keyctl show) et capturer leur sortie.

Les commandes exécutées par root sont distinguées dans les logs par
un préfixe textuel [ROOT] ou [user].

Example :
    Lister le keyring de session :

        from linux_keyring_utils.commands import LinuxCommandExecutor

        executor = LinuxCommandExecutor(logger=logger)
        result = executor.run(["keyctl", "show", "@s"])
        if result.success:
            print(result.stdout)
"""

import os
import subprocess  # nosec B404
import time
from typing import List, Optional

from linux_keyring_utils.commands.base import (
    CommandExecutor,
    CommandResult,
)
from linux_keyring_utils.logging.base import Logger


class LinuxCommandExecutor(CommandExecutor):
    """Exécuteur de commandes Linux via subprocess.

    Attributes:
        _logger: Logger optionnel.
        _default_timeout: Timeout par défaut en secondes.
        _is_root: True si le processus courant est root (uid 0).
    """

    _ROOT_PREFIX = "[ROOT]"
    _USER_PREFIX = "[user]"

    def __init__(
        self,
        logger: Optional[Logger] = None,
        default_timeout: Optional[int] = None,
    ) -> None:
        """Initialise l'exécuteur de commandes.

        Args:
            logger: Logger optionnel.
            default_timeout: Timeout par défaut en secondes
                (None = aucune limite).
        """
        self._logger = logger
        self._default_timeout = default_timeout
        self._is_root: bool = os.getuid() == 0

    def _prefix(self) -> str:
        return self._ROOT_PREFIX if self._is_root else self._USER_PREFIX

    def _log(self, message: str) -> None:
        if self._logger:
            self._logger.log_info(message)

    def _log_error(self, message: str) -> None:
        if self._logger:
            self._logger.log_error(message)

    def _failure(
        self,
        command: List[str],
        start: float,
        stdout: str = "",
        stderr: str = "",
    ) -> CommandResult:
        return CommandResult(
            command=command,
            return_code=-1,
            stdout=stdout,
            stderr=stderr,
            success=False,
            duration=time.monotonic() - start,
            executed_as_root=self._is_root,
        )

    def run(
        self,
        command: List[str],
        timeout: Optional[int] = None,
    ) -> CommandResult:
        """Exécute une commande et retourne le résultat.

        Args:
            command: Commande sous forme de liste.
            timeout: Timeout en secondes (prioritaire sur le
                timeout par défaut).

        Returns:
            CommandResult avec les sorties capturées. Un programme
            introuvable ou un timeout donnent success=False.
        """
        effective_timeout = (
            timeout if timeout is not None else self._default_timeout
        )
        self._log(f"{self._prefix()} Exécution : {' '.join(command)}")

        start = time.monotonic()
        try:
            proc = subprocess.run(  # nosec B603
                command,
                capture_output=True,
                text=True,
                timeout=effective_timeout,
            )
        except subprocess.TimeoutExpired as e:
            self._log_error(
                f"Timeout après {effective_timeout}s : "
                f"{' '.join(command)}"
            )
            return self._failure(
                command,
                start,
                stdout=_as_text(e.stdout),
                stderr=_as_text(e.stderr),
            )
        except OSError as e:
            self._log_error(f"Erreur système : {e}")
            return self._failure(command, start, stderr=str(e))

        if proc.returncode != 0:
            self._log_error(
                f"Code retour {proc.returncode} : {' '.join(command)}"
            )
        return CommandResult(
            command=command,
            return_code=proc.returncode,
            stdout=proc.stdout,
            stderr=proc.stderr,
            success=proc.returncode == 0,
            duration=time.monotonic() - start,
            executed_as_root=self._is_root,
        )


def _as_text(output: Optional[object]) -> str:
    # TimeoutExpired expose des bytes même avec text=True
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return str(output)
