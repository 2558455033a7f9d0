from __future__ import annotations

import logging
from dataclasses import dataclass

import mysql.connector

from ..core.exceptions import DataStoreError

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config["host"]),
            port=int(db_config.get("port", 3306)),
            user=str(db_config["user"]),
            password=str(db_config["password"]),
            database=str(db_config["database"]),
        )


class DatabaseConnection:
    """Explicitly owned DB connection factory.

    Construct it, `open()` it (or use it as a context manager) and pass it to
    the repositories. Each operation gets a short-lived connection from
    `connect()`, so worker threads never share a MySQL connection.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> "DatabaseConnection":
        # Fail fast: an unreachable server aborts the caller before any work.
        try:
            check = self._raw_connect()
            try:
                check.ping(reconnect=False)
            finally:
                check.close()
        except mysql.connector.Error as e:
            raise DataStoreError(f"Cannot connect to {self.describe()}: {e}") from e
        self._open = True
        logger.debug("Opened data store %s", self.describe())
        return self

    def close(self) -> None:
        if self._open:
            logger.debug("Closed data store %s", self.describe())
        self._open = False

    def connect(self):
        if not self._open:
            raise DataStoreError("Data store is closed")
        return self._raw_connect()

    def describe(self) -> str:
        c = self._config
        return f"{c.user}@{c.host}:{c.port}/{c.database}"

    def _raw_connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )

    def __enter__(self) -> "DatabaseConnection":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
