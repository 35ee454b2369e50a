from __future__ import annotations

from ..core.constants import OTP_TTL_MINUTES

OTP_SUBJECT = "Password Reset OTP - Company Dashboard"


def otp_email(code: str, ttl_minutes: int = OTP_TTL_MINUTES) -> tuple[str, str]:
    body = (
        f"Your OTP for password reset is: {code}. "
        f"This OTP will expire in {ttl_minutes} minutes.\n\n"
        "If you didn't request this password reset, please ignore this email "
        "and contact your administrator."
    )
    return OTP_SUBJECT, body
