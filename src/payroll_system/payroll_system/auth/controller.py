from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import auth_required, current_principal, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required = auth_required(container.tokens)

    @app.route("/auth/signup", methods=["POST"], endpoint="signup")
    def signup():
        data = json_body()
        user, token = container.auth_service.signup(
            email=data.get("email"),
            password=data.get("password"),
            name=data.get("name"),
            role=data.get("role") or "employee",
            department=data.get("department"),
        )
        return jsonify({"token": token, "user": user.public_dict()}), 201

    @app.route("/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        user, token = container.auth_service.login(
            email=data.get("email"),
            password=data.get("password"),
        )
        return jsonify({"token": token, "user": user.public_dict()})

    @app.route("/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        user = container.user_service.get_profile(current_principal())
        return jsonify(user.public_dict())
