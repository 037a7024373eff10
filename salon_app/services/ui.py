"""Page rendering helpers shared by the blueprints."""

from __future__ import annotations

from urllib.parse import urlsplit

from flask import current_app, render_template, request, url_for

from salon_app.services.i18n import T


def render_page(template: str, **context):
    context.setdefault("page_title", T("app_title"))
    context.setdefault("first_weekday", current_app.config.get("FIRST_WEEKDAY", 6))
    return render_template(template, **context)


def safe_next(default_endpoint: str = "appointments.index", **default_args) -> str:
    """Return the ``next`` form/query value if it is a local path, else a default URL."""
    target = request.form.get("next") or request.args.get("next") or ""
    parts = urlsplit(target)
    if target.startswith("/") and not target.startswith("//") and not parts.netloc and not parts.scheme:
        return target
    return url_for(default_endpoint, **default_args)


__all__ = ["render_page", "safe_next"]
