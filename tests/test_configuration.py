import logging
import os
import tempfile
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch

from gibberish.configuration import _load_settings, get_settings
from gibberish.errors import ConfigurationError, SettingsError
from gibberish.utils import LOG_FORMAT, setup_logger


class SettingsTests(unittest.TestCase):
    def setUp(self) -> None:
        _load_settings.cache_clear()
        self._tmp = tempfile.TemporaryDirectory()
        self.app_dir = Path(self._tmp.name)

    def tearDown(self) -> None:
        _load_settings.cache_clear()
        self._tmp.cleanup()

    def write_dotenv(self, content: str) -> None:
        (self.app_dir / ".env").write_text(content, encoding="utf-8")

    def test_defaults(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            settings = get_settings(app_dir=self.app_dir)
        self.assertEqual(settings.GIBBERISH_MAX_PASSES, 1000)
        self.assertAlmostEqual(settings.GIBBERISH_FUZZY_TOLERANCE, 0.00001)
        self.assertEqual(settings.GIBBERISH_FINGERPRINT_ALGORITHM, "sha1")
        self.assertEqual(settings.GIBBERISH_LOG_LEVEL, "WARNING")

    def test_dotenv_values(self) -> None:
        self.write_dotenv(
            "GIBBERISH_MAX_PASSES=50\n"
            "GIBBERISH_LOG_LEVEL=debug\n"
            "GIBBERISH_FINGERPRINT_ALGORITHM= SHA256 \n"
            "UNRELATED=ignored\n"
        )
        with patch.dict(os.environ, {}, clear=True):
            settings = get_settings(app_dir=self.app_dir)
        self.assertEqual(settings.GIBBERISH_MAX_PASSES, 50)
        self.assertEqual(settings.GIBBERISH_LOG_LEVEL, "DEBUG")
        self.assertEqual(settings.GIBBERISH_FINGERPRINT_ALGORITHM, "sha256")

    def test_process_environment_wins_over_dotenv(self) -> None:
        self.write_dotenv("GIBBERISH_MAX_PASSES=50\n")
        with patch.dict(
            os.environ,
            {"GIBBERISH_MAX_PASSES": "70", "GIBBERISH_LOG_LEVEL": "warn"},
            clear=True,
        ):
            settings = get_settings(app_dir=self.app_dir)
        self.assertEqual(settings.GIBBERISH_MAX_PASSES, 70)
        self.assertEqual(settings.GIBBERISH_LOG_LEVEL, "WARNING")

    def test_settings_are_cached(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            first = get_settings(app_dir=self.app_dir)
            second = get_settings(app_dir=self.app_dir)
        self.assertIs(first, second)

    def test_invalid_values_report_their_source(self) -> None:
        with patch.dict(os.environ, {"GIBBERISH_MAX_PASSES": "0"}, clear=True):
            with self.assertRaises(SettingsError) as ctx:
                get_settings(app_dir=self.app_dir)
        message = str(ctx.exception)
        self.assertIn("GIBBERISH_MAX_PASSES", message)
        self.assertIn("source: env:process:GIBBERISH_MAX_PASSES", message)
        self.assertIsInstance(ctx.exception, ConfigurationError)

    def test_unknown_algorithm(self) -> None:
        self.write_dotenv("GIBBERISH_FINGERPRINT_ALGORITHM=nope\n")
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(SettingsError) as ctx:
                get_settings(app_dir=self.app_dir)
        self.assertIn("source: env:.env:GIBBERISH_FINGERPRINT_ALGORITHM", str(ctx.exception))

    def test_unknown_log_level(self) -> None:
        with patch.dict(os.environ, {"GIBBERISH_LOG_LEVEL": "chatty"}, clear=True):
            with self.assertRaises(SettingsError):
                get_settings(app_dir=self.app_dir)


class SetupLoggerTests(unittest.TestCase):
    def tearDown(self) -> None:
        for name in ("gibberish.tests.explicit", "gibberish.tests.settings"):
            logger = logging.getLogger(name)
            for handler in list(logger.handlers):
                logger.removeHandler(handler)

    def test_explicit_level(self) -> None:
        logger = setup_logger("gibberish.tests.explicit", "DEBUG")
        self.assertEqual(logger.level, logging.DEBUG)
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.handlers[0].formatter._fmt, LOG_FORMAT)

        setup_logger("gibberish.tests.explicit", "INFO")
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.INFO)

    def test_level_from_settings(self) -> None:
        fake = SimpleNamespace(GIBBERISH_LOG_LEVEL="ERROR")
        with patch("gibberish.utils.get_settings", return_value=fake):
            logger = setup_logger("gibberish.tests.settings")
        self.assertEqual(logger.level, logging.ERROR)

    def test_exported_from_package(self) -> None:
        import gibberish

        self.assertIs(gibberish.setup_logger, setup_logger)
        self.assertIn("setup_logger", gibberish.__all__)


if __name__ == "__main__":
    unittest.main()
