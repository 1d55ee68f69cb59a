from __future__ import annotations

from dataclasses import dataclass

import mysql.connector

from ..core.constants import DEFAULT_DATASTORE_TIMEOUT_SECONDS


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    timeout_seconds: float = DEFAULT_DATASTORE_TIMEOUT_SECONDS

    @classmethod
    def from_dict(cls, db_config: dict, *, timeout_seconds: float | None = None) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "payroll_db")),
            timeout_seconds=float(timeout_seconds or db_config.get("timeout_seconds") or DEFAULT_DATASTORE_TIMEOUT_SECONDS),
        )


class DatabaseConnection:
    """DB connection factory.

    Note: We create short-lived connections per operation. `connection_timeout`
    bounds the TCP connect and every socket read/write of the pure connector.
    """

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def timeout_seconds(self) -> float:
        return self._config.timeout_seconds

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            connection_timeout=max(1, int(round(self._config.timeout_seconds))),
            use_pure=True,
        )
