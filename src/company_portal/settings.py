from __future__ import annotations

import importlib
from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_DB_CONNECT_TIMEOUT, DEFAULT_DB_LOCK_WAIT_TIMEOUT, DEFAULT_MAIL_FROM
from .database.connection import DBConfig


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, built once at startup and passed to the container."""

    db: DBConfig
    jwt_secret: Optional[str] = None
    resend_api_key: Optional[str] = None
    mail_from: str = DEFAULT_MAIL_FROM
    debug: bool = False
    log_level: str = "INFO"
    auto_init_db: bool = False
    auto_seed_db: bool = False
    expose_account_existence: bool = True
    environment: str = "development"


def load_settings(environment: str | None = None) -> Settings:
    """Build ``Settings`` from the ``config.<env>`` module for ``environment``.

    ``None`` reads ``APP_ENV``; aliases such as ``prod`` or ``test`` are accepted.
    """

    from config import get_settings_module, resolve_environment

    environment = resolve_environment(environment)
    module = importlib.import_module(get_settings_module(environment))

    db_config = dict(getattr(module, "DB_CONFIG"))
    return Settings(
        db=DBConfig(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "company_portal")),
            connect_timeout=int(db_config.get("connect_timeout", DEFAULT_DB_CONNECT_TIMEOUT)),
            lock_wait_timeout=int(db_config.get("lock_wait_timeout", DEFAULT_DB_LOCK_WAIT_TIMEOUT)),
        ),
        jwt_secret=getattr(module, "JWT_SECRET", None) or None,
        resend_api_key=getattr(module, "RESEND_API_KEY", None) or None,
        mail_from=getattr(module, "MAIL_FROM", DEFAULT_MAIL_FROM),
        debug=bool(getattr(module, "DEBUG", False)),
        log_level=str(getattr(module, "LOG_LEVEL", "INFO")),
        auto_init_db=bool(getattr(module, "AUTO_INIT_DB", False)),
        auto_seed_db=bool(getattr(module, "AUTO_SEED_DB", False)),
        expose_account_existence=bool(getattr(module, "EXPOSE_ACCOUNT_EXISTENCE", True)),
        environment=environment,
    )
