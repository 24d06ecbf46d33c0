"""Module d'exécution de commandes système.

Classes disponibles :
    CommandResult : Résultat immuable d'une exécution.
    CommandExecutor : Interface abstraite pour les exécuteurs.
    LinuxCommandExecutor : Exécuteur concret via subprocess.
"""

from linux_keyring_utils.commands.base import (
    CommandResult,
    CommandExecutor,
)
from linux_keyring_utils.commands.runner import (
    LinuxCommandExecutor,
)

__all__ = [
    "CommandResult",
    "CommandExecutor",
    "LinuxCommandExecutor",
]
