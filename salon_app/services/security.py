"""Security headers for the local web UI."""

from __future__ import annotations

from flask import g


def init_security(app) -> None:
    @app.before_request
    def reset_nostore() -> None:
        g.nostore = False

    @app.after_request
    def apply_headers(response):
        response.headers.setdefault(
            "Content-Security-Policy",
            "default-src 'self'; "
            "img-src 'self' data:; "
            "style-src 'self' 'unsafe-inline'; "
            "form-action 'self';",
        )
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Permissions-Policy", "geolocation=(), camera=(), microphone=()")
        if getattr(g, "nostore", False):
            response.headers["Cache-Control"] = "no-store"
        return response


__all__ = ["init_security"]
