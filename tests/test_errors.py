#!/usr/bin/env python3
"""Tests unitaires pour le module errors."""

import unittest

from linux_keyring_utils.errors import (ApplicationError,
                                        ConfigurationError,
                                        SystemRequirementError)


class TestApplicationErrorHierarchy(unittest.TestCase):
    """Tests de la hiérarchie d'exceptions."""

    def test_configuration_error(self):
        self.assertTrue(issubclass(ConfigurationError, ApplicationError))

    def test_system_requirement_error(self):
        self.assertTrue(
            issubclass(SystemRequirementError, ApplicationError)
        )

    def test_message_conserve(self):
        error = SystemRequirementError("Architecture 'sparc' inconnue")
        self.assertIn("sparc", str(error))

    def test_interception_globale(self):
        """Toutes les erreurs de la bibliothèque s'attrapent d'un bloc."""
        with self.assertRaises(ApplicationError):
            raise ConfigurationError("section invalide")


if __name__ == "__main__":
    unittest.main()
