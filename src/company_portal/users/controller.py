from __future__ import annotations

from flask import Flask

from ..common.http import json_body, message
from ..container import Container
from ..security.guard import current_identity


def register(app: Flask, container: Container) -> None:
    guard = container.guard

    @app.route("/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        result = container.auth_service.login(data.get("email", ""), data.get("password", ""))
        return message("Logged in successfully", token=result.token, user=result.user.to_dict())

    @app.route("/auth/me", methods=["GET"], endpoint="me")
    @guard.require()
    def me():
        user = container.auth_service.current_user(current_identity())
        return message("Authenticated", user=user.to_dict())

    @app.route("/profile/change-password", methods=["POST"], endpoint="change_password")
    @guard.require()
    def change_password():
        data = json_body()
        container.auth_service.change_password(
            current_identity(),
            data.get("currentPassword", ""),
            data.get("newPassword", ""),
        )
        return message("Password changed successfully")
