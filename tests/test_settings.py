import unittest

from config.settings import AppSettings, LoggingSettings


class TestLogLevel(unittest.TestCase):
    def make(self, environment, level=None):
        return AppSettings(environment=environment, logging=LoggingSettings(level=level))

    def test_environment_defaults(self):
        self.assertEqual(self.make("development").log_level, "DEBUG")
        self.assertEqual(self.make("testing").log_level, "WARNING")
        self.assertEqual(self.make("production").log_level, "INFO")

    def test_explicit_level_wins(self):
        self.assertEqual(self.make("development", "error").log_level, "ERROR")

    def test_environment_flags(self):
        settings = self.make("production")
        self.assertTrue(settings.is_production)
        self.assertFalse(settings.is_development)
        self.assertFalse(settings.is_testing)


if __name__ == "__main__":
    unittest.main()
