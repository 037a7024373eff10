"""Tiny translation table for the Spanish and English UI."""

from __future__ import annotations

import calendar

from flask import current_app, g, has_request_context, request

from salon_app.services.appointments import parse_date

SUPPORTED_LOCALES = ("es", "en")

_STRINGS: dict[str, dict[str, str]] = {
    "es": {
        "app_title": "DamiNails",
        "app_tagline": "Gestión de citas profesional",
        "stats_title": "Estadísticas",
        "stats_total": "Total",
        "stats_today": "Hoy",
        "stats_scheduled": "Pendientes",
        "stats_completed": "Completadas",
        "stats_cancelled": "Canceladas",
        "search_placeholder": "Buscar clienta...",
        "search_submit": "Buscar",
        "view_list": "Lista",
        "view_calendar": "Calendario",
        "empty_title": "No hay citas agendadas",
        "empty_hint": "Comienza agregando tu primera cita",
        "empty_search_title": "No se encontraron citas",
        "empty_search_hint": "Intenta con otro nombre",
        "calendar_day_empty": "No hay citas para este día",
        "calendar_day_title": "Citas del {date}",
        "calendar_prev": "Mes anterior",
        "calendar_next": "Mes siguiente",
        "appointment_new": "Nueva cita",
        "appointment_edit": "Editar cita",
        "form_client_name": "Nombre de la clienta",
        "form_client_placeholder": "Ej: María González",
        "form_date": "Fecha",
        "form_time": "Hora",
        "form_add": "Agregar",
        "form_save": "Guardar",
        "form_cancel": "Cancelar",
        "action_edit": "Editar",
        "action_delete": "Eliminar",
        "action_mark_completed": "Marcar como Asistió",
        "action_mark_cancelled": "Marcar como Canceló",
        "action_mark_scheduled": "Marcar como Pendiente",
        "appointment_status_scheduled": "Pendiente",
        "appointment_status_completed": "Asistió",
        "appointment_status_cancelled": "Canceló",
        "appointment_added": "Cita agregada",
        "appointment_saved": "Cita guardada",
        "appointment_deleted": "Cita eliminada",
        "appointment_not_found": "La cita no existe",
        "appointment_error_client_name": "El nombre de la clienta es obligatorio",
        "appointment_error_date": "La fecha no es válida",
        "appointment_error_time": "La hora no es válida",
        "appointment_error_status": "Estado desconocido",
        "csrf_error": "La sesión expiró, vuelve a intentarlo",
        "bad_request": "La solicitud no es válida",
    },
    "en": {
        "app_title": "DamiNails",
        "app_tagline": "Professional appointment book",
        "stats_title": "Statistics",
        "stats_total": "Total",
        "stats_today": "Today",
        "stats_scheduled": "Scheduled",
        "stats_completed": "Completed",
        "stats_cancelled": "Cancelled",
        "search_placeholder": "Search client...",
        "search_submit": "Search",
        "view_list": "List",
        "view_calendar": "Calendar",
        "empty_title": "No appointments booked",
        "empty_hint": "Start by adding your first appointment",
        "empty_search_title": "No appointments found",
        "empty_search_hint": "Try another name",
        "calendar_day_empty": "No appointments on this day",
        "calendar_day_title": "Appointments on {date}",
        "calendar_prev": "Previous month",
        "calendar_next": "Next month",
        "appointment_new": "New appointment",
        "appointment_edit": "Edit appointment",
        "form_client_name": "Client name",
        "form_client_placeholder": "e.g. Maria Gonzalez",
        "form_date": "Date",
        "form_time": "Time",
        "form_add": "Add",
        "form_save": "Save",
        "form_cancel": "Cancel",
        "action_edit": "Edit",
        "action_delete": "Delete",
        "action_mark_completed": "Mark as attended",
        "action_mark_cancelled": "Mark as cancelled",
        "action_mark_scheduled": "Mark as pending",
        "appointment_status_scheduled": "Pending",
        "appointment_status_completed": "Attended",
        "appointment_status_cancelled": "Cancelled",
        "appointment_added": "Appointment added",
        "appointment_saved": "Appointment saved",
        "appointment_deleted": "Appointment deleted",
        "appointment_not_found": "Appointment not found",
        "appointment_error_client_name": "Client name is required",
        "appointment_error_date": "Invalid date",
        "appointment_error_time": "Invalid time",
        "appointment_error_status": "Unknown status",
        "csrf_error": "Your session expired, please try again",
        "bad_request": "The request could not be understood",
    },
}

_MONTHS = {
    "es": [
        "enero", "febrero", "marzo", "abril", "mayo", "junio",
        "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
    ],
    "en": [
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ],
}

# Monday first, matching calendar.weekday().
_WEEKDAYS_SHORT = {
    "es": ["Lun", "Mar", "Mié", "Jue", "Vie", "Sáb", "Dom"],
    "en": ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"],
}
_WEEKDAYS_LONG = {
    "es": ["lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo"],
    "en": ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"],
}


def current_locale() -> str:
    if has_request_context():
        locale = getattr(g, "locale", None)
        if locale in SUPPORTED_LOCALES:
            return locale
    try:
        locale = current_app.config.get("DEFAULT_LOCALE", "es")
    except RuntimeError:
        locale = "es"
    return locale if locale in SUPPORTED_LOCALES else "es"


def T(key: str, locale: str | None = None, **params) -> str:
    """Translate ``key``; unknown keys come back unchanged."""
    table = _STRINGS.get(locale or current_locale(), _STRINGS["es"])
    text = table.get(key, key)
    return text.format(**params) if params else text


def month_title(year: int, month: int, locale: str | None = None) -> str:
    locale = locale or current_locale()
    name = _MONTHS[locale][month - 1]
    if locale == "es":
        return f"{name} de {year}"
    return f"{name} {year}"


def weekday_headers(first_weekday: int = calendar.SUNDAY, locale: str | None = None) -> list[str]:
    names = _WEEKDAYS_SHORT[locale or current_locale()]
    return [names[(first_weekday + i) % 7] for i in range(7)]


def long_date(value: str, locale: str | None = None) -> str:
    """Render ``YYYY-MM-DD`` as a spelled-out date; malformed input is returned as is."""
    day = parse_date(value)
    if day is None:
        return value
    locale = locale or current_locale()
    weekday = _WEEKDAYS_LONG[locale][day.weekday()]
    month = _MONTHS[locale][day.month - 1]
    if locale == "es":
        return f"{weekday}, {day.day} de {month} de {day.year}"
    return f"{weekday}, {month} {day.day}, {day.year}"


def time_12h(value: str) -> str:
    """``HH:MM`` to ``h:MM AM/PM``."""
    hours, _, minutes = value.partition(":")
    try:
        hour = int(hours)
    except ValueError:
        return value
    suffix = "PM" if hour >= 12 else "AM"
    return f"{hour % 12 or 12}:{minutes} {suffix}"


def select_locale() -> None:
    cookie_name = current_app.config.get("LOCALE_COOKIE_NAME", "lang")
    locale = (request.cookies.get(cookie_name) or "").lower()
    g.locale = locale if locale in SUPPORTED_LOCALES else current_app.config.get("DEFAULT_LOCALE", "es")


def register_jinja(app) -> None:
    app.before_request(select_locale)
    app.jinja_env.globals.update(
        T=T,
        month_title=month_title,
        weekday_headers=weekday_headers,
        current_locale=current_locale,
    )
    app.jinja_env.filters["long_date"] = long_date
    app.jinja_env.filters["time_12h"] = time_12h


__all__ = [
    "SUPPORTED_LOCALES",
    "T",
    "current_locale",
    "long_date",
    "month_title",
    "register_jinja",
    "select_locale",
    "time_12h",
    "weekday_headers",
]
