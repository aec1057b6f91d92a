from __future__ import annotations

from flask import Flask, g, render_template

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/Home/Index", endpoint="home")
    @app.route("/Home", endpoint="home")
    @app.route("/", endpoint="home")
    def home():
        model = container.home_service.build_home(cancel=g.cancel)
        return render_template("home/index.html", model=model, active_page="home")
