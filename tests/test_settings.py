import unittest

from easypay_client.config import EasyPayConfig, Settings
from easypay_client.config.settings import DEFAULT_GATEWAY, validate_settings
from easypay_client.exceptions import ConfigurationError
from easypay_client.psp import EasyPayAdapter, PSPDispatcher, PSPProvider


def make_settings(**overrides):
    values = {"LDC_PID": None, "LDC_SECRET": None, "LDC_GATEWAY": DEFAULT_GATEWAY}
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestSettings(unittest.TestCase):
    def test_blank_credentials_become_none(self):
        current = make_settings(LDC_PID="  ", LDC_SECRET="")
        self.assertIsNone(current.LDC_PID)
        self.assertIsNone(current.LDC_SECRET)
        self.assertFalse(current.easypay_config().is_configured)

    def test_blank_gateway_uses_default(self):
        current = make_settings(LDC_GATEWAY="")
        self.assertEqual(current.easypay_config().gateway_url, DEFAULT_GATEWAY)

    def test_easypay_config(self):
        current = make_settings(LDC_PID="1001", LDC_SECRET="k", LDC_GATEWAY="https://g.example/", LDC_TIMEOUT_SECONDS=5)
        config = current.easypay_config()
        self.assertIsInstance(config, EasyPayConfig)
        self.assertEqual(config.credentials(), ("1001", "k"))
        self.assertEqual(config.gateway_url, "https://g.example/epay")
        self.assertEqual(config.timeout_seconds, 5)

    def test_validate_settings(self):
        with self.assertRaises(ConfigurationError) as ctx:
            validate_settings(make_settings(LDC_PID="1001"))
        self.assertIn("LDC_SECRET", str(ctx.exception))
        validate_settings(make_settings(LDC_PID="1001", LDC_SECRET="k"))


class TestDispatcher(unittest.TestCase):
    def tearDown(self):
        PSPDispatcher.clear_cache()

    def test_builds_and_caches(self):
        PSPDispatcher.clear_cache()
        current = make_settings(LDC_PID="1001", LDC_SECRET="k")
        adapter = PSPDispatcher.get_adapter("EasyPay", current)
        self.assertIsInstance(adapter, EasyPayAdapter)
        self.assertEqual(adapter.config.pid, "1001")
        self.assertIs(PSPDispatcher.get_adapter(PSPProvider.EASYPAY, current), adapter)

    def test_cache_follows_settings(self):
        first = PSPDispatcher.get_adapter("easypay", make_settings(LDC_PID="A", LDC_SECRET="k"))
        second = PSPDispatcher.get_adapter("easypay", make_settings(LDC_PID="B", LDC_SECRET="k"))
        self.assertIsNot(first, second)
        self.assertEqual(first.config.pid, "A")
        self.assertEqual(second.config.pid, "B")
        again = PSPDispatcher.get_adapter("easypay", make_settings(LDC_PID="A", LDC_SECRET="k"))
        self.assertIs(again, first)

    def test_unsupported(self):
        with self.assertRaises(ValueError):
            PSPDispatcher.get_adapter("stripe")


if __name__ == "__main__":
    unittest.main()
