from __future__ import annotations

import logging
from dataclasses import dataclass

import mysql.connector
from mysql.connector.constants import ClientFlag

from ..core.constants import DEFAULT_DB_CONNECT_TIMEOUT, DEFAULT_DB_LOCK_WAIT_TIMEOUT
from ..core.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    connect_timeout: int = DEFAULT_DB_CONNECT_TIMEOUT
    lock_wait_timeout: int = DEFAULT_DB_LOCK_WAIT_TIMEOUT

    def describe(self) -> str:
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class DatabaseConnection:
    """DB connection factory.

    Note: We create short-lived connections per operation, so several processes
    can share one database without holding locks across requests. A failed
    connect is retried once before the store is reported unavailable.
    """

    def __init__(self, config: DBConfig, *, attempts: int = 2):
        self._config = config
        self._attempts = max(1, int(attempts))

    @property
    def config(self) -> DBConfig:
        return self._config

    def _open(self):
        conn = mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            connection_timeout=int(self._config.connect_timeout),
            # rowcount reports matched rows, not only changed ones
            client_flags=[ClientFlag.FOUND_ROWS],
        )
        cur = conn.cursor()
        try:
            cur.execute("SET SESSION innodb_lock_wait_timeout = %s", (int(self._config.lock_wait_timeout),))
        finally:
            cur.close()
        return conn

    def connect(self):
        last_error: Exception | None = None
        for attempt in range(1, self._attempts + 1):
            try:
                return self._open()
            except (mysql.connector.errors.InterfaceError, mysql.connector.errors.OperationalError) as exc:
                last_error = exc
                logger.warning(
                    "Database connect failed (attempt %s/%s, db=%s): %s",
                    attempt,
                    self._attempts,
                    self._config.describe(),
                    exc,
                )
        raise StoreUnavailableError("Service temporarily unavailable, please retry") from last_error
