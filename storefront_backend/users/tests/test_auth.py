# users/tests/test_auth.py

from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from remote.tests.fakes import InMemoryRemoteStore, RemoteStoreTestMixin
from users.models import ROLE_ADMIN, ROLE_USER
from users.services.auth_service import AuthService


class AuthServiceTests(TestCase):
    """
    GUARANTEES:
    - Admin role only for the configured admin email (case-insensitive)
    - Profile write failures never fail registration
    - Missing profiles are recreated on sign-in
    """

    def setUp(self):
        self.remote = InMemoryRemoteStore()
        self.service = AuthService(self.remote, admin_email="Boss@Example.com")

    def test_admin_email_gets_admin_role(self):
        user = self.service.register(email="boss@example.com", password="secret-pass", display_name="Boss")

        self.assertEqual(user.role, ROLE_ADMIN)
        self.assertEqual(self.remote.rows("users")[0]["role"], ROLE_ADMIN)

    def test_other_emails_get_user_role(self):
        user = self.service.register(email="shopper@example.com", password="secret-pass", display_name="S")
        self.assertEqual(user.role, ROLE_USER)

    def test_profile_write_failure_is_logged_not_raised(self):
        self.remote.fail("insert", "users")

        with self.assertLogs("users.services.auth_service", level="ERROR"):
            user = self.service.register(email="shopper@example.com", password="secret-pass", display_name="S")

        self.assertEqual(user.email, "shopper@example.com")
        self.assertEqual(self.remote.rows("users"), [])

    def test_login_recreates_missing_profile(self):
        self.remote.fail("insert", "users")
        with self.assertLogs("users.services.auth_service", level="ERROR"):
            self.service.register(email="shopper@example.com", password="secret-pass", display_name="")

        user, session = self.service.login(email="shopper@example.com", password="secret-pass")

        self.assertEqual(user.display_name, "shopper")
        self.assertTrue(session["access_token"])
        self.assertEqual(len(self.remote.rows("users")), 1)

    @override_settings(FRONTEND_BASE_URL="https://shop.example.com/")
    def test_password_reset_redirects_to_frontend(self):
        self.service.reset_password(email="shopper@example.com")

        self.assertEqual(
            self.remote.reset_requests,
            [{"email": "shopper@example.com", "redirect_to": "https://shop.example.com/reset-password"}],
        )


@override_settings(ADMIN_EMAIL="admin@example.com")
class AuthApiTests(RemoteStoreTestMixin, TestCase):
    """
    GUARANTEES:
    - Register / login / logout / me proxy the remote auth service
    - Login merges the guest cart into the account cart
    """

    def _register(self, email="shopper@example.com"):
        return self.client.post(
            reverse("users:register"),
            {"email": email, "password": "secret-pass", "display_name": "Shopper"},
            format="json",
        )

    def _login(self, email="shopper@example.com", password="secret-pass"):
        return self.client.post(
            reverse("users:login"), {"email": email, "password": password}, format="json"
        )

    def test_register_and_login(self):
        registered = self._register()
        self.assertEqual(registered.status_code, status.HTTP_201_CREATED)
        self.assertEqual(registered.data["role"], "user")

        response = self._login()

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["user"]["email"], "shopper@example.com")
        self.assertTrue(response.data["session"]["access_token"].startswith("token-"))

    def test_register_admin_email(self):
        self.assertEqual(self._register("ADMIN@example.com").data["role"], "admin")

    def test_duplicate_registration_is_rejected(self):
        self._register()
        response = self._register()

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "REGISTRATION_FAILED")

    def test_weak_password_is_rejected_locally(self):
        response = self.client.post(
            reverse("users:register"),
            {"email": "a@example.com", "password": "123", "display_name": "A"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.remote.accounts, {})

    def test_bad_credentials(self):
        self._register()
        response = self._login(password="wrong-pass")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["error"]["code"], "INVALID_CREDENTIALS")

    def test_login_merges_guest_cart(self):
        lamp = self.seed_product("Desk Lamp", "149.99")
        self._register()
        user_id = self.remote.rows("users")[0]["id"]
        self.remote.seed("carts", {"user_id": user_id, "product_id": lamp["id"], "quantity": 1})
        self.client.post(
            reverse("cart:add-cart-item"), {"product_id": lamp["id"], "quantity": 2}, format="json"
        )

        response = self._login()

        self.assertEqual(response.data["cart_merged"], 1)
        self.assertFalse(response.data["cart_merge_failed"])
        self.assertEqual(self.remote.rows("carts")[0]["quantity"], 3)

        # guest store is empty; the account cart is now authoritative
        self.client.credentials()
        self.assertEqual(self.client.get(reverse("cart:cart")).data["items"], [])

    def test_failed_merge_keeps_guest_cart(self):
        lamp = self.seed_product("Desk Lamp", "149.99")
        self._register()
        self.client.post(reverse("cart:add-cart-item"), {"product_id": lamp["id"]}, format="json")
        self.remote.fail("insert", "carts")

        with self.assertLogs("users.views.auth", level="ERROR"):
            response = self._login()

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["cart_merge_failed"])
        self.assertEqual(len(self.client.get(reverse("cart:cart")).data["items"]), 1)

    def test_me_and_logout(self):
        user = self.authenticate()

        me = self.client.get(reverse("users:me"))
        self.assertEqual(me.data["id"], user["id"])

        logout = self.client.post(reverse("users:logout"))
        self.assertEqual(logout.status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(self.client.get(reverse("users:me")).status_code, status.HTTP_401_UNAUTHORIZED)

    def test_invalid_token_is_unauthorized(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")
        response = self.client.get(reverse("users:me"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_password_reset_is_always_accepted(self):
        response = self.client.post(
            reverse("users:password-reset"), {"email": "nobody@example.com"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_202_ACCEPTED)
        self.assertEqual(self.remote.reset_requests[0]["email"], "nobody@example.com")

    def test_password_reset_hides_auth_service_failures(self):
        self.remote.fail("reset_password")

        with self.assertLogs("users.views.auth", level="WARNING"):
            response = self.client.post(
                reverse("users:password-reset"), {"email": "shopper@example.com"}, format="json"
            )

        self.assertEqual(response.status_code, status.HTTP_202_ACCEPTED)
        self.assertEqual(self.remote.reset_requests, [])


@override_settings(REMOTE_STORE={"URL": "", "ANON_KEY": "", "TIMEOUT": 15, "PRODUCT_BUCKET": "products"})
class UnconfiguredAuthApiTests(TestCase):
    def test_register_is_rejected_when_remote_store_is_missing(self):
        response = APIClient().post(
            reverse("users:register"),
            {"email": "a@example.com", "password": "secret-pass", "display_name": "A"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)

    def test_password_reset_is_rejected_when_remote_store_is_missing(self):
        response = APIClient().post(
            reverse("users:password-reset"), {"email": "a@example.com"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
