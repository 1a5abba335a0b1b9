from unittest import TestCase

import httpx
from django.core.exceptions import ImproperlyConfigured

from .settings import load_settings
from .transport import build_client


class SettingsTestCase(TestCase):

    def test_defaults(self):
        settings = load_settings({"VERIFY_SSL": True})
        self.assertEqual(settings.REQUEST_TIMEOUT, 30.0)
        self.assertTrue(settings.VERIFY_SSL)

    # Check that missing settings give the defaults
    def test_no_user_settings(self):
        for settings in (load_settings(), load_settings({})):
            self.assertEqual(settings.REQUEST_TIMEOUT, 30.0)
            self.assertTrue(settings.VERIFY_SSL)

    def test_request_timeout(self):
        settings = load_settings({"REQUEST_TIMEOUT": "2.5"})
        self.assertEqual(settings.REQUEST_TIMEOUT, 2.5)

    def test_invalid_request_timeout(self):
        settings = load_settings({"REQUEST_TIMEOUT": "soon"})
        with self.assertRaises(ImproperlyConfigured):
            settings.REQUEST_TIMEOUT

    def test_non_positive_request_timeout(self):
        settings = load_settings({"REQUEST_TIMEOUT": 0})
        with self.assertRaises(ImproperlyConfigured):
            settings.REQUEST_TIMEOUT

    def test_build_client(self):
        settings = load_settings({"REQUEST_TIMEOUT": 7, "VERIFY_SSL": False})
        transport = httpx.MockTransport(lambda request: httpx.Response(204))
        client = build_client(settings, transport=transport)
        self.addCleanup(client.close)
        self.assertEqual(client.timeout, httpx.Timeout(7.0))
        self.assertEqual(client.get("http://example.test/").status_code, 204)
