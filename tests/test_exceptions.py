"""Tests for domain exception hierarchy."""

from __future__ import annotations

import unittest

from lumina_design.exceptions import (
    ChatError,
    ConfigValidationError,
    GatewayConfigurationError,
    GenerationError,
    InvalidInputError,
    LuminaError,
)


class ExceptionHierarchyTests(unittest.TestCase):
    """Validate exception inheritance contract."""

    def test_exception_hierarchy(self) -> None:
        self.assertTrue(issubclass(LuminaError, RuntimeError))
        for error_type in (
            InvalidInputError,
            GenerationError,
            ChatError,
            ConfigValidationError,
            GatewayConfigurationError,
        ):
            self.assertTrue(issubclass(error_type, LuminaError), error_type.__name__)


if __name__ == "__main__":
    unittest.main()
