# remote/factory.py
"""
REMOTE CLIENT FACTORY

Builds the remote store handle from settings.REMOTE_STORE.
Services never import a shared client; they receive one.
"""

from __future__ import annotations

import logging

from django.conf import settings

from remote.client import RemoteStoreClient
from remote.unconfigured import UnconfiguredRemoteStore

logger = logging.getLogger(__name__)


def _remote_cfg() -> dict:
    cfg = getattr(settings, "REMOTE_STORE", {}) or {}
    return cfg if isinstance(cfg, dict) else {}


def build_remote_client():
    cfg = _remote_cfg()
    url = (cfg.get("URL") or "").strip()
    anon_key = (cfg.get("ANON_KEY") or "").strip()

    if not url or not anon_key:
        logger.debug(
            "Remote store not configured: set REMOTE_STORE_URL and REMOTE_STORE_ANON_KEY"
        )
        return UnconfiguredRemoteStore()

    return RemoteStoreClient(
        url=url,
        anon_key=anon_key,
        timeout=int(cfg.get("TIMEOUT") or 15),
    )


def product_bucket() -> str:
    return (_remote_cfg().get("PRODUCT_BUCKET") or "products").strip()
