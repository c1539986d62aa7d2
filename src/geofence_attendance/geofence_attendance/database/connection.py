from __future__ import annotations

from dataclasses import dataclass

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "attendance_db")),
        )

    def describe(self) -> str:
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class DatabaseConnection:
    """Injected DB handle.

    Must be opened before repositories use it and closed at shutdown.
    Each repository operation takes a short-lived connection from `connect()`.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._opened = False

    @property
    def config(self) -> DBConfig:
        return self._config

    @property
    def is_open(self) -> bool:
        return self._opened

    def open(self) -> "DatabaseConnection":
        # Fail fast on bad credentials instead of on the first request.
        conn = self._raw_connect()
        conn.close()
        self._opened = True
        return self

    def close(self) -> None:
        self._opened = False

    def connect(self):
        if not self._opened:
            raise RuntimeError("DatabaseConnection used before open() or after close()")
        return self._raw_connect()

    def _raw_connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )
