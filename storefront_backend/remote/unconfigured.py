# remote/unconfigured.py
"""
UNCONFIGURED REMOTE STORE

Stand-in used when REMOTE_STORE_URL / REMOTE_STORE_ANON_KEY are missing.

Behavior:
- reads return empty results (storefront renders an empty catalog)
- writes, auth and storage uploads raise RemoteStoreNotConfigured
"""

from __future__ import annotations

from remote.exceptions import RemoteStoreNotConfigured


class UnconfiguredRemoteStore:
    is_configured = False

    def with_token(self, access_token):
        return self

    # reads
    def select(self, table, **kwargs) -> list[dict]:
        return []

    def select_one(self, table, **kwargs):
        return None

    def search(self, table, **kwargs) -> list[dict]:
        return []

    def public_url(self, bucket, path) -> str:
        return ""

    # writes
    def insert(self, table, row):
        raise RemoteStoreNotConfigured()

    def update(self, table, values, *, filters):
        raise RemoteStoreNotConfigured()

    def delete(self, table, *, filters):
        raise RemoteStoreNotConfigured()

    # auth
    def sign_up(self, **kwargs):
        raise RemoteStoreNotConfigured()

    def sign_in(self, **kwargs):
        raise RemoteStoreNotConfigured()

    def sign_out(self, access_token) -> None:
        return None

    def get_user(self, access_token):
        raise RemoteStoreNotConfigured()

    def reset_password(self, **kwargs):
        raise RemoteStoreNotConfigured()

    # storage
    def upload(self, bucket, path, data, **kwargs):
        raise RemoteStoreNotConfigured()

    def remove(self, bucket, paths):
        raise RemoteStoreNotConfigured()
