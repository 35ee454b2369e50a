from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .common.http import register_error_handlers
from .common.logging_utils import configure_logging
from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_demo_users, list_tables
from .otp.controller import register as register_otp
from .settings import Settings, load_settings
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def create_app(settings: Optional[Settings] = None, container: Optional[Container] = None) -> Flask:
    if settings is None and container is None:
        load_dotenv(override=False)
        settings = load_settings()
    settings = settings or container.settings

    configure_logging(settings.log_level)
    app = Flask(__name__)
    app.config["DEBUG"] = settings.debug
    app.json.sort_keys = False

    logger.info(
        "Starting company portal (env=%s, db=%s, debug=%s)",
        settings.environment,
        settings.db.describe(),
        settings.debug,
    )

    if container is None:
        if settings.auto_init_db:
            apply_schema(settings.db, schema_path=SCHEMA_PATH)
            logger.info("Schema ready (tables=%s)", len(list_tables(settings.db)))
        if settings.auto_seed_db:
            ensure_demo_users(settings.db)
            logger.info("Demo accounts ready")
        container = build_container(settings)

    if container.tokens.uses_fallback_secret and settings.environment == "production":
        logger.error("Production is running with the development-only JWT key; set JWT_SECRET")

    register_error_handlers(app)
    register_users(app, container)
    register_otp(app, container)
    register_attendance(app, container)

    return app
