"""Exceptions pour le module credentials.

Ce module definit les exceptions metier levees lors
d'operations sur les credentials. Toutes heritent de
ApplicationError afin que l'appelant puisse intercepter
l'ensemble des erreurs de la bibliotheque d'un seul bloc.
"""

from linux_keyring_utils.errors.exceptions import ApplicationError


class CredentialError(ApplicationError):
    """Exception de base pour toutes les erreurs credentials."""


class CredentialNotFoundError(CredentialError):
    """Levee quand aucun secret n'existe pour la cle demandee."""


class CredentialStoreError(CredentialError):
    """Levee quand le stockage, la lecture ou la suppression echoue."""


class CredentialProviderUnavailableError(CredentialError):
    """Levee quand le backend est injoignable (bus, daemon, noyau)."""


class CredentialUnlockError(CredentialError):
    """Levee quand une collection ou un item refuse de se deverrouiller."""
