from unittest.mock import MagicMock

from django.test import SimpleTestCase, TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from remote.middleware import remote_for_request
from remote.tests.fakes import RemoteStoreTestMixin


class RemoteForRequestTests(SimpleTestCase):
    def test_binds_bearer_token(self):
        remote = MagicMock()
        request = MagicMock(remote_store=remote, auth="user-token")

        remote_for_request(request)

        remote.with_token.assert_called_once_with("user-token")

    def test_anonymous_request_stays_on_anon_key(self):
        remote = MagicMock()
        request = MagicMock(remote_store=remote, auth=None)

        remote_for_request(request)

        remote.with_token.assert_called_once_with(None)


class HealthCheckTests(RemoteStoreTestMixin, TestCase):
    def test_reports_configured_remote_store(self):
        response = self.client.get(reverse("health-check"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "ok")
        self.assertEqual(response.data["remote_store"], "configured")


@override_settings(REMOTE_STORE={"URL": "", "ANON_KEY": "", "TIMEOUT": 15, "PRODUCT_BUCKET": "products"})
class UnconfiguredHealthCheckTests(TestCase):
    def test_reports_degraded_without_remote_store(self):
        response = APIClient().get(reverse("health-check"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "degraded")
        self.assertEqual(response.data["remote_store"], "not_configured")
