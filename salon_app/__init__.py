"""Salon appointment book exposing the Flask application factory."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping

from flask import Flask, flash, jsonify, redirect, request, url_for
from flask_wtf.csrf import CSRFError

from .blueprints import register_blueprints
from .extensions import init_extensions
from .models import ensure_base_tables
from .services.appointments import DEFAULT_STORAGE_KEY
from .services.i18n import SUPPORTED_LOCALES, T, register_jinja
from .services.registry import init_appointment_store
from .services.security import init_security

APP_HOST = "127.0.0.1"
APP_PORT = 8080


def _data_root(base_dir: Path, override: Path | None = None) -> Path:
    root = override if override else base_dir / "data"
    root.mkdir(parents=True, exist_ok=True)
    return root


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("salon_app").setLevel(level)


def create_app(config: Mapping[str, Any] | None = None) -> Flask:
    base_dir = Path(__file__).resolve().parent.parent
    template_folder = base_dir / "templates"
    static_folder = base_dir / "static"
    db_override = os.getenv("SALON_DB_PATH")
    override_root = Path(db_override).parent if db_override else None

    _configure_logging(os.getenv("SALON_LOG_LEVEL", "INFO"))

    app = Flask(
        __name__,
        template_folder=str(template_folder),
        static_folder=str(static_folder),
    )

    secret_key = os.getenv("SALON_SECRET_KEY")
    if not secret_key:
        secret_key = os.urandom(32)

    default_locale = os.getenv("SALON_DEFAULT_LOCALE", "es").lower()
    if default_locale not in SUPPORTED_LOCALES:
        default_locale = "es"

    try:
        first_weekday = int(os.getenv("SALON_FIRST_WEEKDAY", "6")) % 7
    except ValueError:
        first_weekday = 6

    app.config.update(
        SECRET_KEY=secret_key,
        SESSION_COOKIE_NAME="salon_session",
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SAMESITE="Lax",
        STORAGE_BACKEND=os.getenv("SALON_STORAGE", "sqlalchemy").lower(),
        STORAGE_KEY=os.getenv("SALON_STORAGE_KEY", DEFAULT_STORAGE_KEY),
        DEFAULT_LOCALE=default_locale,
        LOCALE_COOKIE_NAME="lang",
        LOCALE_COOKIE_MAX_AGE=60 * 60 * 24 * 365,
        FIRST_WEEKDAY=first_weekday,
    )
    if config:
        app.config.update(config)

    if "SQLALCHEMY_DATABASE_URI" not in app.config:
        if db_override:
            db_path = Path(db_override)
        else:
            db_path = _data_root(base_dir, override_root) / "app.db"
        app.config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{db_path}"
    app.config.setdefault(
        "SQLALCHEMY_ENGINE_OPTIONS", {"connect_args": {"check_same_thread": False}}
    )

    register_jinja(app)
    init_extensions(app)
    ensure_base_tables(app)
    init_appointment_store(app)
    register_blueprints(app)
    init_security(app)

    @app.errorhandler(CSRFError)
    def handle_csrf_error(e):
        app.logger.warning("CSRF validation failed on %s: %s", request.path, e.description)
        if request.accept_mimetypes.best == "application/json":
            return jsonify({"ok": False, "error": "csrf_error"}), 400
        flash(T("csrf_error"), "err")
        return redirect(url_for("appointments.index")), 303

    @app.errorhandler(400)
    def handle_bad_request(e):
        app.logger.warning("Bad request on %s: %s", request.path, e)
        if request.accept_mimetypes.best == "application/json":
            return jsonify({"ok": False, "error": "bad_request"}), 400
        flash(T("bad_request"), "err")
        return redirect(url_for("appointments.index")), 303

    return app


__all__ = ["create_app", "APP_HOST", "APP_PORT"]
