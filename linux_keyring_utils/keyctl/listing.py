"""Enumeration des cles d'un keyring via l'outil keyctl.

Le noyau n'offre pas de recherche par prefixe : la liste des cles
est obtenue en analysant la sortie texte de "keyctl show <keyring>",
dont le format est :

    Session Keyring
     123456789 --alswrv   1000  1000  keyring: _ses
     987654321 --alswrv   1000  1000   \\_ user: monapp:alice

Un changement de format de l'outil casse silencieusement
l'enumeration.
"""

from typing import Iterator, List, Optional

from linux_keyring_utils.commands.base import CommandExecutor
from linux_keyring_utils.commands.runner import LinuxCommandExecutor
from linux_keyring_utils.logging.base import Logger

USER_KEY_MARKER = "user:"
SESSION_KEYRING_SPEC = "@s"


def parse_user_key_descriptions(output: str, prefix: str) -> Iterator[str]:
    """Extrait les descriptions de cles "user" commencant par prefix.

    Args:
        output: Sortie texte de "keyctl show".
        prefix: Prefixe attendu (ex: "monapp:").

    Yields:
        Descriptions completes (ex: "monapp:alice").
    """
    for line in output.splitlines():
        if prefix not in line:
            continue
        _before, marker, description = line.partition(USER_KEY_MARKER)
        if not marker:
            continue
        description = description.strip()
        if description.startswith(prefix):
            yield description


class KeyctlLister:
    """Liste les descriptions de cles d'un keyring par prefixe.

    Attributes:
        _executor: Executeur de commandes.
        _command: Programme keyctl a lancer.
        _timeout: Timeout de la commande en secondes.
    """

    def __init__(
        self,
        executor: Optional[CommandExecutor] = None,
        command: str = "keyctl",
        timeout: Optional[int] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._executor = executor or LinuxCommandExecutor(logger=logger)
        self._command = command
        self._timeout = timeout
        self._logger = logger

    def list_descriptions(
        self,
        prefix: str,
        keyring: str = SESSION_KEYRING_SPEC,
    ) -> List[str]:
        """Retourne les descriptions commencant par prefix.

        Si l'outil est absent ou echoue, la liste est vide.

        Args:
            prefix: Prefixe des descriptions recherchees.
            keyring: Keyring a afficher ("@s" ou numero de cle).
        """
        result = self._executor.run(
            [self._command, "show", keyring], timeout=self._timeout
        )
        if not result.success:
            if self._logger:
                self._logger.log_warning(
                    f"Enumeration du keyring {keyring} impossible, "
                    f"rien a supprimer : {result.stderr.strip()}"
                )
            return []
        return list(parse_user_key_descriptions(result.stdout, prefix))
