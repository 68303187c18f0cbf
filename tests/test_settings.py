import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from yahoo_quotes.config.settings import DEFAULT_BASE_URL, Settings, get_settings


class TestQuoteSettings(unittest.TestCase):
    def test_defaults_without_env(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings.from_env()

        self.assertEqual(settings.YAHOO_QUOTES_BASE_URL, DEFAULT_BASE_URL)
        self.assertEqual(settings.YAHOO_QUOTES_TIMEOUT_SEC, 5.0)

    def test_env_overrides(self):
        env = {
            "YAHOO_QUOTES_BASE_URL": " https://example.test/quotes.csv ",
            "YAHOO_QUOTES_TIMEOUT_SEC": "1.5",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env()

        self.assertEqual(settings.YAHOO_QUOTES_BASE_URL, "https://example.test/quotes.csv")
        self.assertEqual(settings.YAHOO_QUOTES_TIMEOUT_SEC, 1.5)

    def test_non_positive_timeout_fails_validation(self):
        with patch.dict(os.environ, {"YAHOO_QUOTES_TIMEOUT_SEC": "0"}, clear=True):
            with self.assertRaises(ValidationError):
                Settings.from_env()

    def test_non_numeric_timeout_fails_validation(self):
        with patch.dict(os.environ, {"YAHOO_QUOTES_TIMEOUT_SEC": "soon"}, clear=True):
            with self.assertRaises(ValidationError):
                Settings.from_env()

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        try:
            with patch.dict(os.environ, {}, clear=True):
                self.assertIs(get_settings(), get_settings())
        finally:
            get_settings.cache_clear()


if __name__ == "__main__":
    unittest.main()
