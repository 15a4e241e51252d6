# users/authentication.py

"""
REMOTE TOKEN AUTHENTICATION

Authorization: Bearer <access token issued by the remote auth service>

- Token -> auth user via the remote auth service
- Auth user -> StoreUser via the `users` profile table
- request.auth is the raw access token (used to bind remote calls)
"""

from __future__ import annotations

import logging

from drf_spectacular.extensions import OpenApiAuthenticationExtension
from drf_spectacular.plumbing import build_bearer_security_scheme_object
from rest_framework.authentication import BaseAuthentication, get_authorization_header
from rest_framework.exceptions import AuthenticationFailed

from remote.exceptions import RemoteAuthError, RemoteStoreError
from remote.factory import build_remote_client
from users.services.auth_service import AuthService

logger = logging.getLogger(__name__)


class RemoteTokenAuthentication(BaseAuthentication):
    keyword = "Bearer"

    def authenticate(self, request):
        parts = get_authorization_header(request).split()
        if not parts or parts[0].lower() != self.keyword.lower().encode():
            return None

        if len(parts) != 2:
            raise AuthenticationFailed("Invalid bearer header.")

        try:
            token = parts[1].decode()
        except UnicodeError:
            raise AuthenticationFailed("Invalid bearer token.")

        remote = getattr(request, "remote_store", None) or build_remote_client()

        try:
            auth_user = remote.get_user(token)
            user = AuthService(remote.with_token(token)).get_current_user_data(
                str(auth_user["id"]),
                auth_user=auth_user,
            )
        except RemoteAuthError:
            raise AuthenticationFailed("Invalid or expired session.")
        except RemoteStoreError:
            logger.exception("Session verification failed")
            raise AuthenticationFailed("Unable to verify session.")

        return (user, token)

    def authenticate_header(self, request):
        return f'{self.keyword} realm="api"'


class RemoteTokenScheme(OpenApiAuthenticationExtension):
    target_class = "users.authentication.RemoteTokenAuthentication"
    name = "bearerAuth"

    def get_security_definition(self, auto_schema):
        return build_bearer_security_scheme_object(header_name="Authorization", token_prefix="Bearer")
