from __future__ import annotations

import logging
from typing import Any

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def message(text: str, *, http_status: int = 200, **extra: Any):
    payload: dict[str, Any] = {"message": text}
    payload.update(extra)
    return jsonify(payload), http_status


def register_error_handlers(app: Flask) -> None:
    """Turn exceptions into ``{"message": ...}`` JSON responses."""

    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        return message(str(exc), http_status=exc.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return message(exc.description or exc.name, http_status=exc.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return message("Internal server error", http_status=500)
