# backend/exception_handler.py
"""
API ERROR NORMALIZATION

- error_response(): the {"error": {"code", "message"}} envelope views use
  for domain errors (validation, not found, illegal transition).
- storefront_exception_handler(): DRF hook. Remote store failures are
  logged here and surfaced as a generic message; no remote detail leaks.
"""

from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from remote.exceptions import RemoteStoreError, RemoteStoreNotConfigured

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Something went wrong. Please try again."
NOT_CONFIGURED_MESSAGE = "The store is temporarily unavailable."


def error_response(*, code: str, message: str, http_status: int):
    return Response(
        {"error": {"code": code, "message": message}},
        status=http_status,
    )


def storefront_exception_handler(exc, context):
    if isinstance(exc, RemoteStoreNotConfigured):
        logger.error("Remote store not configured; write rejected")
        return Response(
            {"detail": NOT_CONFIGURED_MESSAGE},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    if isinstance(exc, RemoteStoreError):
        view = context.get("view")
        logger.error(
            "Remote store call failed",
            exc_info=exc,
            extra={
                "view": view.__class__.__name__ if view else None,
                "remote_status": exc.status_code,
            },
        )
        return Response(
            {"detail": GENERIC_FAILURE_MESSAGE},
            status=status.HTTP_502_BAD_GATEWAY,
        )

    return exception_handler(exc, context)
