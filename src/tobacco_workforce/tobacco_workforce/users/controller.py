from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, session

from ..common.web import json_body, login_required
from ..container import Container
from ..core.constants import DEFAULT_SESSION_DAYS


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.clear()
        session.permanent = bool(data.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)
        session["email"] = s_user.email
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value
        return jsonify({"email": s_user.email, "full_name": s_user.full_name, "role": s_user.role.value})

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"ok": True})

    @app.route("/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify({"email": session["email"], "full_name": session.get("name"), "role": session.get("role")})
