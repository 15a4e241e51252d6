# remote/tests/fakes.py

"""
IN-MEMORY REMOTE STORE (TESTS)

Implements the RemoteStoreClient interface against plain dicts so
services and views can be tested without the hosted backend.

Extras for tests:
- seed(table, row)           insert a row directly
- register_token(token, user) make a bearer token resolve to an auth user
- fail(op, table)            make the next matching call raise RemoteStoreError
"""

from __future__ import annotations

import uuid
from copy import deepcopy
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from rest_framework.test import APIClient

from remote.exceptions import RemoteAuthError, RemoteStoreError

# embedded relation -> foreign key column on the parent row
EMBEDS = {
    "products": "product_id",
}


class InMemoryRemoteStore:
    is_configured = True

    def __init__(self, *, url: str = "https://remote.test"):
        self.url = url
        self.tables: dict[str, list[dict]] = {}
        self.accounts: dict[str, dict] = {}
        self.tokens: dict[str, dict] = {}
        self.objects: dict[tuple[str, str], bytes] = {}
        self.reset_requests: list[dict] = []
        self.signed_out: list[str] = []
        self._failures: set[tuple[str, str]] = set()
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    # -------------------------------------------------
    # test helpers
    # -------------------------------------------------

    def _now(self) -> str:
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat()

    def seed(self, table: str, row: dict) -> dict:
        stored = deepcopy(row)
        stored.setdefault("id", str(uuid.uuid4()))
        stored.setdefault("created_at", self._now())
        self.tables.setdefault(table, []).append(stored)
        return deepcopy(stored)

    def rows(self, table: str) -> list[dict]:
        return deepcopy(self.tables.get(table, []))

    def register_token(self, token: str, user: dict) -> None:
        self.tokens[token] = deepcopy(user)

    def fail(self, op: str, table: str = "*") -> None:
        self._failures.add((op, table))

    def _check(self, op: str, table: str = "*") -> None:
        for key in ((op, table), (op, "*")):
            if key in self._failures:
                self._failures.discard(key)
                raise RemoteStoreError(f"simulated {op} failure on {table}", status_code=500)

    @staticmethod
    def _matches(row: dict, filters: dict | None) -> bool:
        for column, value in (filters or {}).items():
            if value is None:
                if row.get(column) is not None:
                    return False
            elif str(row.get(column)) != str(value):
                return False
        return True

    def _embed(self, row: dict, columns: str) -> dict:
        out = deepcopy(row)
        for relation, fk in EMBEDS.items():
            if f"{relation}(" in columns:
                target = next(
                    (r for r in self.tables.get(relation, []) if str(r.get("id")) == str(row.get(fk))),
                    None,
                )
                out[relation] = deepcopy(target)
        return out

    @staticmethod
    def _sorted(rows: list[dict], order_by: str | None, descending: bool) -> list[dict]:
        if not order_by:
            return rows
        return sorted(rows, key=lambda r: str(r.get(order_by) or ""), reverse=descending)

    # -------------------------------------------------
    # interface
    # -------------------------------------------------

    def with_token(self, access_token):
        return self

    def select(self, table, *, columns="*", filters=None, order_by=None, descending=False, limit=None):
        self._check("select", table)
        rows = [r for r in self.tables.get(table, []) if self._matches(r, filters)]
        rows = self._sorted(rows, order_by, descending)
        if limit is not None:
            rows = rows[: int(limit)]
        return [self._embed(r, columns) for r in rows]

    def select_one(self, table, *, columns="*", filters=None):
        rows = self.select(table, columns=columns, filters=filters, limit=1)
        return rows[0] if rows else None

    def search(self, table, *, term, columns, order_by=None, descending=False):
        self._check("search", table)
        needle = (term or "").strip().lower()
        rows = [
            r
            for r in self.tables.get(table, [])
            if any(needle in str(r.get(c) or "").lower() for c in columns)
        ]
        return deepcopy(self._sorted(rows, order_by, descending))

    def insert(self, table, row):
        self._check("insert", table)
        return self.seed(table, row)

    def update(self, table, values, *, filters):
        self._check("update", table)
        updated = []
        for r in self.tables.get(table, []):
            if self._matches(r, filters):
                r.update(deepcopy(values))
                updated.append(deepcopy(r))
        return updated

    def delete(self, table, *, filters):
        self._check("delete", table)
        self.tables[table] = [
            r for r in self.tables.get(table, []) if not self._matches(r, filters)
        ]

    # auth

    def sign_up(self, *, email, password, metadata=None):
        self._check("sign_up")
        if email in self.accounts:
            raise RemoteAuthError("User already registered", status_code=422)
        user = {
            "id": str(uuid.uuid4()),
            "email": email,
            "user_metadata": deepcopy(metadata or {}),
        }
        self.accounts[email] = {"password": password, "user": user}
        return deepcopy(user)

    def sign_in(self, *, email, password):
        self._check("sign_in")
        account = self.accounts.get(email)
        if not account or account["password"] != password:
            raise RemoteAuthError("Invalid login credentials", status_code=400)
        token = f"token-{uuid.uuid4()}"
        self.tokens[token] = deepcopy(account["user"])
        return {
            "access_token": token,
            "refresh_token": f"refresh-{uuid.uuid4()}",
            "expires_in": 3600,
            "token_type": "bearer",
            "user": deepcopy(account["user"]),
        }

    def sign_out(self, access_token):
        self.tokens.pop(access_token, None)
        self.signed_out.append(access_token)

    def get_user(self, access_token):
        user = self.tokens.get(access_token)
        if not user:
            raise RemoteAuthError("Session is invalid or expired", status_code=401)
        return deepcopy(user)

    def reset_password(self, *, email, redirect_to=""):
        self._check("reset_password")
        self.reset_requests.append({"email": email, "redirect_to": redirect_to})

    # storage

    def upload(self, bucket, path, data, *, content_type="application/octet-stream", cache_control="3600", upsert=False):
        self._check("upload", bucket)
        if (bucket, path) in self.objects and not upsert:
            raise RemoteStoreError("The resource already exists", status_code=409)
        self.objects[(bucket, path)] = bytes(data)
        return path

    def public_url(self, bucket, path):
        return f"{self.url}/storage/v1/object/public/{bucket}/{path}"

    def remove(self, bucket, paths):
        self._check("remove", bucket)
        for p in paths:
            self.objects.pop((bucket, p), None)


# =====================================================
# API TEST SUPPORT
# =====================================================


class RemoteStoreTestMixin:
    """
    Installs a fresh InMemoryRemoteStore as every request's remote store
    and gives the test an APIClient (cookies kept, so the guest cart persists).
    """

    def setUp(self):
        super().setUp()
        self.remote = InMemoryRemoteStore()
        patcher = patch("remote.middleware.build_remote_client", return_value=self.remote)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.client = APIClient()

    def seed_product(self, title="Desk Lamp", price="149.99", **extra) -> dict:
        row = {
            "title": title,
            "price": price,
            "description": extra.pop("description", f"{title} description"),
            "category": extra.pop("category", "Home"),
            "tags": extra.pop("tags", []),
            "image_url": extra.pop("image_url", ""),
            "stock": extra.pop("stock", 10),
            "author": "Storefront",
            "author_handle": "@storefront",
        }
        row.update(extra)
        return self.remote.seed("products", row)

    def create_account(self, email="shopper@example.com", password="secret-pass", role="user") -> dict:
        user = {"id": str(uuid.uuid4()), "email": email, "user_metadata": {"display_name": "Shopper"}}
        self.remote.accounts[email] = {"password": password, "user": user}
        self.remote.seed(
            "users",
            {"id": user["id"], "email": email, "display_name": "Shopper", "role": role},
        )
        return user

    def authenticate(self, email="shopper@example.com", role="user") -> dict:
        """
        Creates an account and sends its bearer token with every request.
        """
        user = self.create_account(email=email, role=role)
        token = f"token-{user['id']}"
        self.remote.register_token(token, user)
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        return user
