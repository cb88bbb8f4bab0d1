"""Tests for top-level package lazy exports."""

from __future__ import annotations

import unittest

import lumina_design


class PackageExportTests(unittest.TestCase):
    """Ensure __getattr__ and exported symbols behave as expected."""

    def test_lazy_exports_resolve_known_symbols(self) -> None:
        self.assertTrue(callable(lumina_design.load_config))
        self.assertTrue(callable(lumina_design.ensure_config_dir))
        self.assertTrue(callable(lumina_design.build_gateway))
        self.assertIsNotNone(lumina_design.DesignController)
        self.assertIsNotNone(lumina_design.StateManager)
        self.assertIsNotNone(lumina_design.GeminiGateway)
        self.assertIsNotNone(lumina_design.OllamaChatGateway)
        self.assertIsNotNone(lumina_design.LuminaError)
        self.assertIsNotNone(lumina_design.InvalidInputError)
        self.assertEqual(lumina_design.Status.IDLE.value, "IDLE")
        self.assertEqual(len(lumina_design.STYLES), 5)

    def test_all_names_resolve(self) -> None:
        for name in lumina_design.__all__:
            if name == "LuminaDesignApp":
                continue
            self.assertIsNotNone(getattr(lumina_design, name), name)

    def test_unknown_symbol_raises_attribute_error(self) -> None:
        with self.assertRaises(AttributeError):
            getattr(lumina_design, "THIS_DOES_NOT_EXIST")


if __name__ == "__main__":
    unittest.main()
