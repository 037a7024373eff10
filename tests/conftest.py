import json

import pytest

from salon_app import create_app
from salon_app.services.appointments import Appointment, AppointmentStatus, AppointmentStore
from salon_app.services.storage import MemoryStorage


def make_config(tmp_path, **overrides):
    config = {
        "TESTING": True,
        "WTF_CSRF_ENABLED": False,
        "SECRET_KEY": "test-secret",
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'app.db'}",
        "DEFAULT_LOCALE": "en",
    }
    config.update(overrides)
    return config


@pytest.fixture
def app(tmp_path):
    return create_app(make_config(tmp_path))


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def memory_store():
    return AppointmentStore(MemoryStorage(), key="test-slot")


def appt(appt_id, name="Ana", date="2024-01-01", time="09:00", status=AppointmentStatus.SCHEDULED):
    return Appointment(id=appt_id, client_name=name, date=date, time=time, status=status)


def stored_blob(*records):
    return json.dumps([r.to_dict() for r in records])
