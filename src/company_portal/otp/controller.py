from __future__ import annotations

from flask import Flask

from ..common.http import json_body, message
from ..container import Container


def _code(data: dict) -> str:
    # Older clients post the code under "otp".
    return data.get("code") or data.get("otp") or ""


def register(app: Flask, container: Container) -> None:
    service = container.password_reset_service

    @app.route("/auth/forgot-password", methods=["POST"], endpoint="forgot_password")
    def forgot_password():
        data = json_body()
        service.forgot_password(data.get("email", ""))
        return message("OTP sent to your email")

    @app.route("/auth/verify-otp", methods=["POST"], endpoint="verify_otp")
    def verify_otp():
        data = json_body()
        service.verify_code(data.get("email", ""), _code(data))
        return message("OTP verified successfully")

    @app.route("/auth/reset-password", methods=["POST"], endpoint="reset_password")
    def reset_password():
        data = json_body()
        service.reset_password(data.get("email", ""), _code(data), data.get("newPassword", ""))
        return message("Password reset successfully")
