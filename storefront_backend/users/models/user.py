"""
PATH: users/models/user.py

STORE USER

An authenticated storefront account, as resolved from the remote store:
- identity comes from the remote auth service (bearer token)
- display name + role come from the `users` profile table

Not a Django model: accounts are owned by the remote store.
Shaped so DRF treats it like request.user (is_authenticated, pk).
"""

from __future__ import annotations

from dataclasses import dataclass

ROLE_ADMIN = "admin"
ROLE_USER = "user"

ROLES = {ROLE_ADMIN, ROLE_USER}


@dataclass(frozen=True)
class StoreUser:
    id: str
    email: str
    display_name: str = ""
    role: str = ROLE_USER

    is_authenticated = True
    is_anonymous = False

    @property
    def pk(self) -> str:
        return self.id

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @classmethod
    def from_row(cls, row: dict) -> "StoreUser":
        role = (row.get("role") or ROLE_USER).strip()
        return cls(
            id=str(row["id"]),
            email=row.get("email") or "",
            display_name=row.get("display_name") or "",
            role=role if role in ROLES else ROLE_USER,
        )

    def to_row(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "display_name": self.display_name,
            "role": self.role,
        }

    def __str__(self):
        return f"{self.email} ({self.role})"
