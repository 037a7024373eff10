"""Flask extension instances shared across the salon app."""

from __future__ import annotations

from flask_sqlalchemy import SQLAlchemy
from flask_wtf.csrf import CSRFProtect

db = SQLAlchemy()
csrf = CSRFProtect()


def init_extensions(app) -> None:
    db.init_app(app)
    csrf.init_app(app)


__all__ = ["db", "csrf", "init_extensions"]
