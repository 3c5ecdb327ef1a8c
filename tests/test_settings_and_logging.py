import logging
import unittest
from unittest.mock import patch
import sys
import os
sys.path.append(os.getcwd())

from kundli.config import Settings
from kundli.logging_config import configure_logging


class TestSettings(unittest.TestCase):
    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

        self.assertEqual(settings.DEFAULT_AYANAMSA, "Lahiri")
        self.assertEqual(settings.DEFAULT_HOUSE_SYSTEM, "Equal")
        self.assertEqual(settings.DAYS_PER_YEAR, 365.25)
        self.assertIsNone(settings.EPHE_PATH)

    def test_environment_overrides(self):
        env = {"INGRESS_SEARCH_DAYS": "30", "DEFAULT_NODE_TYPE": "True"}
        with patch.dict(os.environ, env, clear=True):
            settings = Settings(_env_file=None)

        self.assertEqual(settings.INGRESS_SEARCH_DAYS, 30)
        self.assertEqual(settings.DEFAULT_NODE_TYPE, "True")


class TestConfigureLogging(unittest.TestCase):
    def tearDown(self):
        logging.getLogger("kundli").setLevel(logging.NOTSET)

    def test_explicit_level(self):
        configure_logging("debug")
        self.assertEqual(logging.getLogger("kundli").level, logging.DEBUG)

    @patch("kundli.logging_config.settings")
    def test_level_from_settings(self, mock_settings):
        mock_settings.LOG_LEVEL = "WARNING"
        configure_logging()
        self.assertEqual(logging.getLogger("kundli").level, logging.WARNING)


if __name__ == "__main__":
    unittest.main()
