"""Central place to log unexpected failures in request handlers."""

from __future__ import annotations

import logging

from flask import has_request_context, request

log = logging.getLogger("salon_app.errors")


def record_exception(where: str, exc: BaseException) -> None:
    path = request.path if has_request_context() else "-"
    log.error("Unhandled error in %s (%s): %s", where, path, exc, exc_info=exc)


__all__ = ["record_exception"]
