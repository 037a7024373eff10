from __future__ import annotations

import datetime as dt
from typing import Optional

from sqlalchemy import DateTime, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from salon_app.extensions import db


class Base(DeclarativeBase):
    """Declarative base for salon storage tables."""


class StorageSlot(Base):
    """One named slot of the local key-value store."""

    __tablename__ = "storage_slots"

    key: Mapped[str] = mapped_column(Text, primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[Optional[dt.datetime]] = mapped_column(DateTime, nullable=True)


def ensure_base_tables(app) -> None:
    """Create the storage tables if the SQLite file is new."""
    with app.app_context():
        Base.metadata.create_all(db.engine)
