# users/services/auth_service.py

"""
AUTH SERVICE (APPLICATION SERVICE)

Purpose:
- Register / login / logout / password reset against the remote auth service.
- Keep the `users` profile table in step with auth identities.

Rules:
- The admin role is granted ONLY at registration (or first profile creation)
  when the email matches settings.ADMIN_EMAIL.
- A failed profile write during registration is logged, not raised:
  the auth identity already exists and login will recreate the profile.
"""

from __future__ import annotations

import logging

from django.conf import settings

from remote.exceptions import RemoteStoreError
from users.models import ROLE_ADMIN, ROLE_USER, StoreUser

logger = logging.getLogger(__name__)

USERS_TABLE = "users"


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class AuthService:
    def __init__(self, remote, *, admin_email: str | None = None):
        self.remote = remote
        if admin_email is None:
            admin_email = getattr(settings, "ADMIN_EMAIL", "") or ""
        self.admin_email = _normalize_email(admin_email)

    def role_for_email(self, email: str) -> str:
        if self.admin_email and _normalize_email(email) == self.admin_email:
            return ROLE_ADMIN
        return ROLE_USER

    def register(self, *, email: str, password: str, display_name: str) -> StoreUser:
        auth_user = self.remote.sign_up(
            email=email,
            password=password,
            metadata={"display_name": display_name},
        )

        user = StoreUser(
            id=str(auth_user["id"]),
            email=auth_user.get("email") or email,
            display_name=display_name,
            role=self.role_for_email(email),
        )

        try:
            self.remote.insert(USERS_TABLE, user.to_row())
        except RemoteStoreError:
            logger.exception("Error creating user profile", extra={"user_id": user.id})

        logger.info("User registered", extra={"user_id": user.id, "role": user.role})
        return user

    def login(self, *, email: str, password: str) -> tuple[StoreUser, dict]:
        """
        Returns (user, session). session carries access/refresh tokens.
        """
        session = self.remote.sign_in(email=email, password=password)
        auth_user = session["user"]

        bound = AuthService(
            self.remote.with_token(session["access_token"]),
            admin_email=self.admin_email,
        )
        user = bound.get_current_user_data(str(auth_user["id"]), auth_user=auth_user)
        return user, session

    def logout(self, access_token: str) -> None:
        self.remote.sign_out(access_token)

    def reset_password(self, *, email: str) -> None:
        base = (getattr(settings, "FRONTEND_BASE_URL", "") or "").rstrip("/")
        redirect_to = f"{base}/reset-password" if base else ""
        self.remote.reset_password(email=email, redirect_to=redirect_to)

    def get_current_user_data(self, user_id: str, *, auth_user: dict | None = None) -> StoreUser:
        """
        Profile row for user_id. Missing profile is created from the auth user.
        """
        row = self.remote.select_one(USERS_TABLE, filters={"id": user_id})
        if row:
            return StoreUser.from_row(row)

        if not auth_user:
            raise RemoteStoreError(f"No profile for user {user_id}", status_code=404)

        email = auth_user.get("email") or ""
        metadata = auth_user.get("user_metadata") or {}
        display_name = metadata.get("display_name") or email.split("@")[0]

        user = StoreUser(
            id=str(auth_user["id"]),
            email=email,
            display_name=display_name,
            role=self.role_for_email(email),
        )
        self.remote.insert(USERS_TABLE, user.to_row())
        logger.info("Profile created on first sign-in", extra={"user_id": user.id})
        return user
