from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import auth_required, current_principal
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required = auth_required(container.tokens)

    @app.route("/employees", methods=["GET"], endpoint="employees")
    @login_required
    def employees():
        users = container.user_service.list_employees(current_principal())
        return jsonify([u.public_dict() for u in users])
