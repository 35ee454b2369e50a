"""Company portal backend package.

This package is organized by feature modules (users, otp, attendance, ...)
with a thin Flask controller layer and service/repository layers underneath.
"""
