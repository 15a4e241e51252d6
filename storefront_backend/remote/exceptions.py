# remote/exceptions.py

"""
REMOTE STORE EXCEPTIONS

All failures talking to the hosted backend surface as RemoteStoreError.
Callers never see urllib errors directly.
"""

from __future__ import annotations


class RemoteStoreError(Exception):
    """
    A remote call failed (network, auth, or rejected by the remote).
    """

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class RemoteStoreNotConfigured(RemoteStoreError):
    """
    REMOTE_STORE_URL / REMOTE_STORE_ANON_KEY are missing.
    """

    def __init__(self, message: str = "Remote store is not configured"):
        super().__init__(message, status_code=None)


class RemoteAuthError(RemoteStoreError):
    """
    Credentials or session token rejected by the remote auth service.
    """
