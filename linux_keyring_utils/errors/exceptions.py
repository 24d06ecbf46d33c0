"""
Module contenant les exceptions de base de linux_keyring_utils.

Ce module suit le principe SRP en isolant la hierarchie d'exceptions
commune a tous les sous-modules.
"""


class ApplicationError(Exception):
    """Exception de base pour toute la bibliotheque."""
    pass


class ConfigurationError(ApplicationError):
    """Exception de base pour toutes les configurations invalides."""
    pass


class SystemRequirementError(ApplicationError):
    """Levee quand le systeme hote ne fournit pas une primitive requise.

    Exemple : architecture dont les numeros d'appels systeme keyctl
    ne sont pas connus.
    """
    pass
