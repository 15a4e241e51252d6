# remote/middleware.py
"""
REMOTE STORE MIDDLEWARE

Attaches one remote store handle per request as `request.remote_store`.
Views bind it to the caller's token and hand it to services.
"""

from __future__ import annotations

from remote.factory import build_remote_client


class RemoteStoreMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.remote_store = build_remote_client()
        return self.get_response(request)


def remote_for_request(request):
    """
    Remote handle for this request, authorized as the caller when signed in.
    """
    remote = getattr(request, "remote_store", None)
    if remote is None:
        remote = build_remote_client()
    token = request.auth if isinstance(getattr(request, "auth", None), str) else None
    return remote.with_token(token)
