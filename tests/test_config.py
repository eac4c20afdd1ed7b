import os
import unittest
from unittest.mock import patch

from rps_match import config


class SettingsTests(unittest.TestCase):
    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            s = config.load_settings({})
        self.assertEqual(s.log_level, "INFO")
        self.assertEqual(s.default_ruleset, "Classic")
        self.assertEqual(s.default_difficulty, "Normal")
        self.assertEqual(s.computer_name, "Computer")
        self.assertIsNone(s.seed)

    def test_env_overrides_defaults(self):
        with patch.dict(os.environ, {"RPS_LOG_LEVEL": "debug", "RPS_SEED": "42"}, clear=True):
            s = config.load_settings({})
        self.assertEqual(s.log_level, "DEBUG")
        self.assertEqual(s.seed, 42)

    def test_yaml_takes_precedence(self):
        with patch.dict(os.environ, {"RPS_DEFAULT_RULESET": "Classic"}, clear=True):
            s = config.load_settings({"RPS_DEFAULT_RULESET": "Extended", "RPS_SEED": 7})
        self.assertEqual(s.default_ruleset, "Extended")
        self.assertEqual(s.seed, 7)

    def test_load_yaml_missing_file(self):
        self.assertEqual(config._load_yaml(os.path.join(os.path.dirname(__file__), "nope.yml")), {})


if __name__ == "__main__":
    unittest.main()
