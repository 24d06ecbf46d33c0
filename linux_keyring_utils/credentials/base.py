"""Interface abstraite des stores de secrets.

Ce module definit l'ABC CredentialStore que chaque backend
(Secret Service, keyring noyau) et le store composite implementent.
Un secret est adresse par le couple (service, user) ; au plus un
secret existe par couple et par backend.
"""

from abc import ABC, abstractmethod


class CredentialStore(ABC):
    """Contrat commun de lecture, ecriture et suppression de secrets.

    Les implementations sont sans etat entre deux appels : chaque
    operation ouvre et libere ses propres ressources (connexion D-Bus,
    session, handle de keyring).
    """

    @abstractmethod
    def set(
        self,
        service: str,
        user: str,
        password: str,
    ) -> None:
        """Stocke ou remplace le secret du couple (service, user).

        Args:
            service: Nom du service applicatif.
            user: Nom de l'utilisateur.
            password: Secret a stocker.

        Raises:
            CredentialStoreError: si le backend rejette l'operation.
            CredentialProviderUnavailableError: si le backend est
                injoignable.
        """
        pass  # pragma: no cover

    @abstractmethod
    def get(
        self,
        service: str,
        user: str,
    ) -> str:
        """Retourne le secret du couple (service, user).

        La correspondance est exacte et sensible a la casse.

        Args:
            service: Nom du service applicatif.
            user: Nom de l'utilisateur.

        Returns:
            Le secret stocke.

        Raises:
            CredentialNotFoundError: si aucun secret n'existe.
        """
        pass  # pragma: no cover

    @abstractmethod
    def delete(
        self,
        service: str,
        user: str,
    ) -> None:
        """Supprime le secret du couple (service, user).

        Args:
            service: Nom du service applicatif.
            user: Nom de l'utilisateur.

        Raises:
            CredentialNotFoundError: si aucun secret n'existe.
        """
        pass  # pragma: no cover

    @abstractmethod
    def delete_all(self, service: str) -> None:
        """Supprime tous les secrets d'un service, tous users confondus.

        Un service vide leve CredentialNotFoundError au lieu de
        supprimer quoi que ce soit. Un service sans secret n'est
        pas une erreur.

        Args:
            service: Nom du service applicatif.

        Raises:
            CredentialNotFoundError: si service est vide.
        """
        pass  # pragma: no cover

    def is_available(self) -> bool:
        """Indique si le backend semble operationnel.

        Returns:
            True par defaut ; les backends qui savent sonder leur
            facilite native surchargent cette methode.
        """
        return True

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Nom court du backend.

        Returns:
            Nom du backend (ex: "secret-service", "keyctl").
        """
        pass  # pragma: no cover
