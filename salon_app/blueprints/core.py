"""Landing redirect and language switch."""

from __future__ import annotations

from flask import Blueprint, current_app, redirect, url_for

from salon_app.services.i18n import SUPPORTED_LOCALES
from salon_app.services.ui import safe_next

bp = Blueprint("core", __name__)


@bp.route("/", methods=["GET"], endpoint="index")
def index():
    return redirect(url_for("appointments.index"))


@bp.route("/lang/<code>", methods=["GET"], endpoint="set_language")
def set_language(code: str):
    response = redirect(safe_next())
    code = code.lower()
    if code in SUPPORTED_LOCALES:
        response.set_cookie(
            current_app.config.get("LOCALE_COOKIE_NAME", "lang"),
            code,
            max_age=current_app.config.get("LOCALE_COOKIE_MAX_AGE"),
            httponly=True,
            samesite="Lax",
        )
    return response
