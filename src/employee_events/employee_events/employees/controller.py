from __future__ import annotations

from flask import Flask, g, render_template

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/Employee/Index", endpoint="employee_index")
    @app.route("/Employee", endpoint="employee_index")
    def employee_index():
        model = container.employee_service.list_employees(cancel=g.cancel)
        return render_template("employee/index.html", model=model, active_page="employees")

    @app.route("/Employee/Details/<int:employee_id>", endpoint="employee_details")
    def employee_details(employee_id: int):
        model = container.employee_service.get_details(employee_id, cancel=g.cancel)
        return render_template("employee/details.html", model=model, active_page="employees")
