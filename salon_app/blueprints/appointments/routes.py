from __future__ import annotations

import datetime
from dataclasses import replace

from flask import Blueprint, current_app, flash, g, jsonify, redirect, request, url_for

from salon_app.forms import AppointmentForm, DeleteForm, StatusForm
from salon_app.services.appointments import (
    AppointmentStatus,
    AppointmentValidationError,
    parse_date,
)
from salon_app.services.calendar_grid import build_month_grid, weeks
from salon_app.services.errors import record_exception
from salon_app.services.i18n import T
from salon_app.services.projections import (
    appointments_on,
    compute_stats,
    group_by_date,
    project,
    search_filter,
)
from salon_app.services.registry import get_store
from salon_app.services.ui import render_page, safe_next
from salon_app.services.view_state import ViewState

bp = Blueprint("appointments", __name__)


@bp.before_request
def _no_store() -> None:
    g.nostore = True


def _wants_json() -> bool:
    return request.is_json or "application/json" in (request.headers.get("Accept") or "")


def _status_actions(status: AppointmentStatus) -> list[tuple[str, str]]:
    """Menu entries for every status other than the current one."""
    order = (
        AppointmentStatus.COMPLETED,
        AppointmentStatus.CANCELLED,
        AppointmentStatus.SCHEDULED,
    )
    return [(s.value, T("action_mark_" + s.value)) for s in order if s != status]


def _form_errors(form: AppointmentForm) -> list[str]:
    return [T(message) for messages in form.errors.values() for message in messages]


@bp.route("/appointments", methods=["GET"], endpoint="index")
def appointments_index():
    """List or calendar view, recomputed from the store on every request."""
    try:
        today = datetime.date.today()
        state = ViewState.from_args(request.args, today=today)
        items = get_store().all()
        stats = compute_stats(items, today=today)
        current_url = url_for("appointments.index", **state.to_args())

        context = dict(
            state=state,
            stats=stats,
            current_url=current_url,
            status_actions=_status_actions,
            list_url=url_for("appointments.index", **state.with_view("list").to_args()),
            calendar_url=url_for("appointments.index", **state.with_view("calendar").to_args()),
        )

        if state.view == "calendar":
            matching = search_filter(items, state.q)
            grid = build_month_grid(
                state.year,
                state.month,
                matching,
                selected_date=state.date,
                today=today,
                first_weekday=current_app.config.get("FIRST_WEEKDAY", 6),
            )
            day_items = appointments_on(matching, state.date)
            context.update(
                grid=grid,
                grid_weeks=weeks(grid),
                day_groups=group_by_date(day_items),
                prev_url=url_for("appointments.index", **state.navigate_month(-1).to_args()),
                next_url=url_for("appointments.index", **state.navigate_month(1).to_args()),
                select_url=lambda day: url_for(
                    "appointments.index", **state.select_date(day).to_args()
                ),
            )
        else:
            displayed = project(items, state.q, state.date)
            context.update(
                displayed_count=len(displayed),
                day_groups=group_by_date(displayed),
            )

        return render_page("appointments/index.html", **context)
    except Exception as exc:
        record_exception("appointments.index", exc)
        raise


@bp.route("/appointments/new", methods=["GET", "POST"], endpoint="new")
def new_appointment():
    form = AppointmentForm()
    if request.method == "GET":
        form.next.data = safe_next()
        day = request.args.get("date")
        if day:
            form.date.data = parse_date(day)
    if form.validate_on_submit():
        try:
            appt = get_store().add(form.to_draft())
        except AppointmentValidationError as exc:
            flash(T(str(exc)), "err")
        else:
            flash(T("appointment_added"), "ok")
            current_app.logger.info("Appointment %s created from form", appt.id)
            return redirect(safe_next())
    status = 400 if request.method == "POST" else 200
    return (
        render_page(
            "appointments/form.html",
            form=form,
            editing=False,
            errors=_form_errors(form),
            cancel_url=form.next.data or url_for("appointments.index"),
        ),
        status,
    )


@bp.route("/appointments/<appt_id>/edit", methods=["GET", "POST"], endpoint="edit")
def edit_appointment(appt_id):
    store = get_store()
    existing = store.get(appt_id)
    if existing is None:
        flash(T("appointment_not_found"), "err")
        return redirect(safe_next())

    form = AppointmentForm()
    if request.method == "GET":
        form.fill_from(existing)
        form.next.data = safe_next()
    if form.validate_on_submit():
        draft = form.to_draft()
        try:
            updated = store.update(
                replace(existing, client_name=draft.client_name, date=draft.date, time=draft.time)
            )
        except AppointmentValidationError as exc:
            flash(T(str(exc)), "err")
        else:
            if updated is None:
                flash(T("appointment_not_found"), "err")
            else:
                flash(T("appointment_saved"), "ok")
            return redirect(safe_next())
    status = 400 if request.method == "POST" else 200
    return (
        render_page(
            "appointments/form.html",
            form=form,
            editing=True,
            appointment=existing,
            errors=_form_errors(form),
            cancel_url=form.next.data or url_for("appointments.index"),
        ),
        status,
    )


@bp.route("/appointments/<appt_id>/status", methods=["POST"], endpoint="status")
def change_status(appt_id):
    form = StatusForm()
    if not form.validate_on_submit():
        if _wants_json():
            return jsonify({"ok": False, "error": "appointment_error_status"}), 400
        flash(T("appointment_error_status"), "err")
        return redirect(safe_next())

    try:
        updated = get_store().set_status(appt_id, form.status.data)
    except AppointmentValidationError as exc:
        if _wants_json():
            return jsonify({"ok": False, "error": str(exc)}), 400
        flash(T(str(exc)), "err")
        return redirect(safe_next())

    if _wants_json():
        if updated is None:
            return jsonify({"ok": False, "error": "appointment_not_found"}), 404
        return jsonify({"ok": True, "id": updated.id, "status": updated.status.value})
    if updated is not None:
        flash(T("appointment_status_" + updated.status.value), "ok")
    return redirect(safe_next())


@bp.route("/appointments/<appt_id>/delete", methods=["POST"], endpoint="delete")
def delete_appointment(appt_id):
    form = DeleteForm()
    if not form.validate_on_submit():
        flash(T("csrf_error"), "err")
        return redirect(safe_next())
    if get_store().remove(appt_id):
        flash(T("appointment_deleted"), "ok")
    return redirect(safe_next())

