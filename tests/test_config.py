from __future__ import annotations

import unittest

from mini_crud.core.config import (
    DEFAULT_CONFIG,
    CrudConfig,
    dollar_placeholder,
    format_placeholder,
    numeric_placeholder,
    placeholder_for_paramstyle,
    qmark_placeholder,
)


class PlaceholderTests(unittest.TestCase):
    def test_placeholder_formatters(self) -> None:
        self.assertEqual([qmark_placeholder(n) for n in (1, 2)], ["?", "?"])
        self.assertEqual(format_placeholder(3), "%s")
        self.assertEqual(numeric_placeholder(3), ":3")
        self.assertEqual(dollar_placeholder(12), "$12")

    def test_placeholder_for_paramstyle(self) -> None:
        self.assertIs(placeholder_for_paramstyle("qmark"), qmark_placeholder)
        self.assertIs(placeholder_for_paramstyle("format"), format_placeholder)
        self.assertIs(placeholder_for_paramstyle("pyformat"), format_placeholder)
        self.assertIs(placeholder_for_paramstyle("numeric"), numeric_placeholder)

    def test_named_paramstyle_is_rejected(self) -> None:
        with self.assertRaisesRegex(ValueError, "Unsupported paramstyle"):
            placeholder_for_paramstyle("named")


class CrudConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        self.assertFalse(DEFAULT_CONFIG.enable_upsert)
        self.assertFalse(DEFAULT_CONFIG.tolerate_missing_insert_id)
        self.assertIs(DEFAULT_CONFIG.placeholder, qmark_placeholder)
        self.assertEqual(DEFAULT_CONFIG.conflict_clause, "ON DUPLICATE KEY UPDATE")

    def test_for_paramstyle_with_overrides(self) -> None:
        config = CrudConfig.for_paramstyle("numeric", enable_upsert=True)

        self.assertIs(config.placeholder, numeric_placeholder)
        self.assertTrue(config.enable_upsert)

    def test_with_options_returns_copy(self) -> None:
        config = DEFAULT_CONFIG.with_options(tolerate_missing_insert_id=True)

        self.assertTrue(config.tolerate_missing_insert_id)
        self.assertFalse(DEFAULT_CONFIG.tolerate_missing_insert_id)

    def test_config_is_frozen(self) -> None:
        with self.assertRaises(Exception):
            DEFAULT_CONFIG.enable_upsert = True  # type: ignore[misc]


if __name__ == "__main__":
    unittest.main()
