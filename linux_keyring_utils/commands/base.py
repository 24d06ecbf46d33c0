"""Interfaces abstraites et structures de données pour l'exécution
de commandes système.

Ce module définit :
    - CommandResult : Résultat immuable d'une exécution de commande.
    - CommandExecutor : Interface abstraite pour les exécuteurs.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class CommandResult:
    """Résultat de l'exécution d'une commande système.

    Attributes:
        command: Commande exécutée sous forme de liste.
        return_code: Code de retour du processus (-1 si le
            processus n'a pas pu être lancé ou a expiré).
        stdout: Sortie standard capturée.
        stderr: Sortie d'erreur capturée.
        success: True si la commande a réussi (code 0).
        duration: Durée d'exécution en secondes.
        executed_as_root: True si lancée par root.
    """

    command: List[str]
    return_code: int
    stdout: str
    stderr: str
    success: bool
    duration: float
    executed_as_root: bool = False


class CommandExecutor(ABC):
    """Interface abstraite pour l'exécution de commandes système."""

    @abstractmethod
    def run(
        self,
        command: List[str],
        timeout: Optional[int] = None,
    ) -> CommandResult:
        """Exécute une commande et retourne le résultat.

        Ne lève pas d'exception si la commande échoue ou si le
        programme est introuvable : l'échec est porté par
        CommandResult.success.

        Args:
            command: Commande sous forme de liste.
            timeout: Timeout en secondes.

        Returns:
            Résultat de l'exécution.
        """
        pass
