"""Attach the appointment store to a Flask app and fetch it back."""

from __future__ import annotations

import logging

from flask import current_app

from salon_app.services.appointments import AppointmentStore
from salon_app.services.storage import storage_from_config

log = logging.getLogger(__name__)

EXTENSION_KEY = "appointment_store"


def init_appointment_store(app) -> AppointmentStore:
    """Build the store from config and load it once, at startup."""
    storage = storage_from_config(app.config.get("STORAGE_BACKEND", "sqlalchemy"))
    store = AppointmentStore(storage, key=app.config["STORAGE_KEY"])
    with app.app_context():
        store.load()
    app.extensions[EXTENSION_KEY] = store
    log.debug("Appointment store ready (%s, slot %s)", type(storage).__name__, store.key)
    return store


def get_store() -> AppointmentStore:
    return current_app.extensions[EXTENSION_KEY]


__all__ = ["get_store", "init_appointment_store"]
