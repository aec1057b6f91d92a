from __future__ import annotations

from flask import Flask, flash, g, redirect, render_template, request, url_for

from ..container import Container
from ..core.exceptions import EventLockedError, ValidationError
from .forms import form_values, parse_attendance_form
from .view_models import EventFormViewModel


def register(app: Flask, container: Container) -> None:
    def _flag(value) -> bool:
        return str(value or "").strip().lower() in {"true", "1", "on", "yes"}

    @app.route("/Event/Index", endpoint="event_index")
    @app.route("/Event", endpoint="event_index")
    def event_index():
        show_historic = _flag(request.args.get("showHistoricEvents"))
        model = container.event_service.list_events(show_historic=show_historic, cancel=g.cancel)
        return render_template("event/index.html", model=model, active_page="events")

    @app.route("/Event/Details/<int:event_id>", endpoint="event_details")
    def event_details(event_id: int):
        model = container.event_service.get_details(event_id, cancel=g.cancel)
        return render_template("event/details.html", model=model, active_page="events")

    @app.route("/Event/Create", methods=["GET", "POST"], endpoint="event_create")
    def event_create():
        if request.method == "POST":
            try:
                event = container.event_service.create_event(request.form, cancel=g.cancel)
                flash("Event created.", "success")
                return redirect(url_for("event_details", event_id=event.event_id))
            except ValidationError as e:
                model = EventFormViewModel(values=form_values(request.form), errors=e.errors)
                return render_template("event/create.html", model=model, active_page="events"), 400

        return render_template("event/create.html", model=EventFormViewModel(), active_page="events")

    @app.route("/Event/Edit/<int:event_id>", methods=["GET", "POST"], endpoint="event_edit")
    def event_edit(event_id: int):
        try:
            if request.method == "POST":
                attendance: dict[int, bool] = {}
                try:
                    attendance = parse_attendance_form(request.form)
                    container.event_service.update_event(event_id, request.form, attendance, cancel=g.cancel)
                    flash("Event updated.", "success")
                    return redirect(url_for("event_details", event_id=event_id))
                except ValidationError as e:
                    model = container.event_service.build_rejected_edit_view(
                        event_id, request.form, attendance, e, cancel=g.cancel
                    )
                    return render_template("event/edit.html", model=model, active_page="events"), 400

            model = container.event_service.get_edit_view(event_id, cancel=g.cancel)
            return render_template("event/edit.html", model=model, active_page="events")
        except EventLockedError:
            flash("This event has already started and can no longer be edited.", "warning")
            return redirect(url_for("event_details", event_id=event_id))

    @app.route("/Event/Delete/<int:event_id>", methods=["GET", "POST"], endpoint="event_delete")
    def event_delete(event_id: int):
        container.event_service.delete_event(event_id, cancel=g.cancel)
        flash("Event deleted.", "success")
        return redirect(url_for("event_index"))
