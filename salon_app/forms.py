"""Flask-WTF forms for the appointment book."""

from __future__ import annotations

from flask_wtf import FlaskForm
from wtforms import DateField, HiddenField, SelectField, StringField, TimeField
from wtforms.validators import DataRequired, InputRequired

from salon_app.services.appointments import (
    AppointmentDraft,
    AppointmentStatus,
    parse_date,
    parse_time,
)


def _strip(value):
    return value.strip() if isinstance(value, str) else value


class AppointmentForm(FlaskForm):
    client_name = StringField(
        "client_name",
        filters=[_strip],
        validators=[DataRequired(message="appointment_error_client_name")],
    )
    date = DateField("date", validators=[InputRequired(message="appointment_error_date")])
    time = TimeField("time", validators=[InputRequired(message="appointment_error_time")])
    next = HiddenField()

    def to_draft(self) -> AppointmentDraft:
        return AppointmentDraft(
            client_name=self.client_name.data or "",
            date=self.date.data.isoformat(),
            time=self.time.data.strftime("%H:%M"),
        )

    def fill_from(self, appt) -> None:
        self.client_name.data = appt.client_name
        self.date.data = parse_date(appt.date)
        self.time.data = parse_time(appt.time)


class StatusForm(FlaskForm):
    status = SelectField(
        "status",
        choices=[(status.value, status.value) for status in AppointmentStatus],
        validators=[DataRequired(message="appointment_error_status")],
    )
    next = HiddenField()


class DeleteForm(FlaskForm):
    next = HiddenField()


__all__ = ["AppointmentForm", "DeleteForm", "StatusForm"]
