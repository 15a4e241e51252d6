# remote/client.py
"""
REMOTE STORE CLIENT (HTTP)

Thin JSON client for the hosted backend:
- /rest/v1/<table>          table reads and writes
- /auth/v1/...              sign up, password sign in, sessions, recovery
- /storage/v1/object/...    object storage (product images)

Rules:
- No retries. A failed call raises RemoteStoreError once.
- Every call carries the anon key as `apikey`.
- Authorization is the caller's access token when bound (with_token),
  otherwise the anon key.
"""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import quote, urlencode
from urllib.request import Request, urlopen

from remote.exceptions import RemoteAuthError, RemoteStoreError

logger = logging.getLogger(__name__)

AUTH_ERROR_STATUSES = {400, 401, 403, 422}


def _safe_preview(text: str, limit: int = 500) -> str:
    text = (text or "").strip()
    if len(text) <= limit:
        return text
    return text[:limit] + " ...(truncated)"


def _parse_json_or_text(raw: str) -> dict[str, Any]:
    raw = raw or ""
    if not raw.strip():
        return {"kind": "empty", "raw": raw}
    try:
        return {"kind": "json", "json": json.loads(raw), "raw": raw}
    except ValueError:
        return {"kind": "text", "raw": raw}


def _error_message(parsed: dict[str, Any], fallback: str) -> str:
    if parsed.get("kind") == "json" and isinstance(parsed.get("json"), dict):
        j = parsed["json"]
        return str(
            j.get("message")
            or j.get("msg")
            or j.get("error_description")
            or j.get("error")
            or fallback
        )
    return _safe_preview(parsed.get("raw") or "") or fallback


def _eq_filters(filters: dict | None) -> list[tuple[str, str]]:
    params = []
    for column, value in (filters or {}).items():
        if value is None:
            params.append((column, "is.null"))
        elif isinstance(value, bool):
            params.append((column, f"eq.{str(value).lower()}"))
        else:
            params.append((column, f"eq.{value}"))
    return params


def _search_pattern(term: str) -> str:
    # Reserved characters of the or=(...) grammar cannot appear in the term.
    cleaned = "".join(ch for ch in (term or "") if ch not in ",()*%")
    return f"*{cleaned.strip()}*"


class RemoteStoreClient:
    """
    Configured handle to the hosted backend.
    """

    is_configured = True

    def __init__(
        self,
        *,
        url: str,
        anon_key: str,
        timeout: int = 15,
        access_token: str | None = None,
    ):
        self.url = (url or "").rstrip("/")
        self.anon_key = anon_key
        self.timeout = timeout
        self.access_token = access_token

    def with_token(self, access_token: str | None) -> "RemoteStoreClient":
        """
        Same backend, requests authorized as the signed-in user.
        """
        return RemoteStoreClient(
            url=self.url,
            anon_key=self.anon_key,
            timeout=self.timeout,
            access_token=access_token,
        )

    # -------------------------------------------------
    # transport
    # -------------------------------------------------

    def _headers(self, *, bearer: str | None = None, extra: dict | None = None) -> dict:
        headers = {
            "apikey": self.anon_key,
            "Authorization": f"Bearer {bearer or self.access_token or self.anon_key}",
            "Accept": "application/json",
        }
        if extra:
            headers.update(extra)
        return headers

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: list[tuple[str, str]] | None = None,
        body: Any = None,
        raw_body: bytes | None = None,
        headers: dict | None = None,
        bearer: str | None = None,
        auth_call: bool = False,
    ) -> Any:
        url = f"{self.url}{path}"
        if params:
            url = f"{url}?{urlencode(params, safe='*(),.:', quote_via=quote)}"

        data = raw_body
        extra = dict(headers or {})
        if body is not None:
            data = json.dumps(body, ensure_ascii=False, default=str).encode("utf-8")
            extra.setdefault("Content-Type", "application/json")

        req = Request(
            url,
            data=data,
            headers=self._headers(bearer=bearer, extra=extra),
            method=method,
        )

        try:
            with urlopen(req, timeout=self.timeout) as resp:
                raw = resp.read().decode("utf-8", errors="replace")
        except HTTPError as e:
            raw = ""
            try:
                raw = e.read().decode("utf-8", errors="replace")
            except OSError:
                raw = ""
            message = _error_message(_parse_json_or_text(raw), str(e.reason))
            logger.warning(
                "Remote store rejected request",
                extra={"method": method, "path": path, "status": e.code},
            )
            if auth_call and e.code in AUTH_ERROR_STATUSES:
                raise RemoteAuthError(message, status_code=e.code) from e
            raise RemoteStoreError(message, status_code=e.code) from e
        except URLError as e:
            raise RemoteStoreError(f"Remote store unreachable: {e.reason}") from e
        except TimeoutError as e:
            raise RemoteStoreError("Remote store request timed out") from e

        parsed = _parse_json_or_text(raw)
        if parsed["kind"] == "empty":
            return None
        if parsed["kind"] != "json":
            raise RemoteStoreError(
                f"Remote store returned non-JSON: {_safe_preview(parsed['raw'])}"
            )
        return parsed["json"]

    # -------------------------------------------------
    # tables
    # -------------------------------------------------

    def select(
        self,
        table: str,
        *,
        columns: str = "*",
        filters: dict | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict]:
        params = [("select", columns)] + _eq_filters(filters)
        if order_by:
            params.append(("order", f"{order_by}.{'desc' if descending else 'asc'}"))
        if limit is not None:
            params.append(("limit", str(int(limit))))
        rows = self._request("GET", f"/rest/v1/{table}", params=params)
        return list(rows or [])

    def select_one(
        self,
        table: str,
        *,
        columns: str = "*",
        filters: dict | None = None,
    ) -> dict | None:
        rows = self.select(table, columns=columns, filters=filters, limit=1)
        return rows[0] if rows else None

    def search(
        self,
        table: str,
        *,
        term: str,
        columns: list[str],
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict]:
        pattern = _search_pattern(term)
        clauses = ",".join(f"{c}.ilike.{pattern}" for c in columns)
        params = [("select", "*"), ("or", f"({clauses})")]
        if order_by:
            params.append(("order", f"{order_by}.{'desc' if descending else 'asc'}"))
        rows = self._request("GET", f"/rest/v1/{table}", params=params)
        return list(rows or [])

    def insert(self, table: str, row: dict) -> dict:
        rows = self._request(
            "POST",
            f"/rest/v1/{table}",
            body=row,
            headers={"Prefer": "return=representation"},
        )
        if not rows:
            raise RemoteStoreError(f"Insert into {table} returned no row")
        return rows[0] if isinstance(rows, list) else rows

    def update(self, table: str, values: dict, *, filters: dict) -> list[dict]:
        if not filters:
            raise ValueError("update requires at least one filter")
        rows = self._request(
            "PATCH",
            f"/rest/v1/{table}",
            params=_eq_filters(filters),
            body=values,
            headers={"Prefer": "return=representation"},
        )
        return list(rows or [])

    def delete(self, table: str, *, filters: dict) -> None:
        if not filters:
            raise ValueError("delete requires at least one filter")
        self._request("DELETE", f"/rest/v1/{table}", params=_eq_filters(filters))

    # -------------------------------------------------
    # auth
    # -------------------------------------------------

    def sign_up(self, *, email: str, password: str, metadata: dict | None = None) -> dict:
        payload = self._request(
            "POST",
            "/auth/v1/signup",
            body={"email": email, "password": password, "data": metadata or {}},
            auth_call=True,
        ) or {}
        # Depending on email confirmation, the user is top-level or nested.
        user = payload.get("user") if isinstance(payload.get("user"), dict) else payload
        if not user or not user.get("id"):
            raise RemoteAuthError("Failed to create user")
        return user

    def sign_in(self, *, email: str, password: str) -> dict:
        session = self._request(
            "POST",
            "/auth/v1/token",
            params=[("grant_type", "password")],
            body={"email": email, "password": password},
            auth_call=True,
        ) or {}
        if not session.get("access_token") or not session.get("user"):
            raise RemoteAuthError("Login failed")
        return session

    def sign_out(self, access_token: str) -> None:
        self._request("POST", "/auth/v1/logout", bearer=access_token, auth_call=True)

    def get_user(self, access_token: str) -> dict:
        user = self._request("GET", "/auth/v1/user", bearer=access_token, auth_call=True)
        if not user or not user.get("id"):
            raise RemoteAuthError("Session is invalid or expired")
        return user

    def reset_password(self, *, email: str, redirect_to: str = "") -> None:
        params = [("redirect_to", redirect_to)] if redirect_to else None
        self._request(
            "POST",
            "/auth/v1/recover",
            params=params,
            body={"email": email},
            auth_call=True,
        )

    # -------------------------------------------------
    # storage
    # -------------------------------------------------

    def upload(
        self,
        bucket: str,
        path: str,
        data: bytes,
        *,
        content_type: str = "application/octet-stream",
        cache_control: str = "3600",
        upsert: bool = False,
    ) -> str:
        self._request(
            "POST",
            f"/storage/v1/object/{bucket}/{quote(path)}",
            raw_body=data,
            headers={
                "Content-Type": content_type,
                "Cache-Control": f"max-age={cache_control}",
                "x-upsert": "true" if upsert else "false",
            },
        )
        return path

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self.url}/storage/v1/object/public/{bucket}/{quote(path)}"

    def remove(self, bucket: str, paths: list[str]) -> None:
        self._request(
            "DELETE",
            f"/storage/v1/object/{bucket}",
            body={"prefixes": list(paths)},
        )
