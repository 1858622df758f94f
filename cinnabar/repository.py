"""Persistent storage of pipelines in SQLite."""

from __future__ import annotations

import sqlite3
from types import TracebackType

from cinnabar.pipeline import PipelineStatus

_SCHEMA = """
CREATE TABLE IF NOT EXISTS pipelines (
    id INTEGER PRIMARY KEY AUTOINCREMENT NOT NULL,
    status TEXT NOT NULL
)
"""


class RepositoryError(Exception):
    """Raised when the database cannot be reached or written."""


class PipelinesRepository:
    """Stores pipeline records in the ``pipelines`` table."""

    def __init__(self, database_url: str) -> None:
        try:
            self._connection = sqlite3.connect(
                database_url, uri=database_url.startswith("file:")
            )
            with self._connection:
                self._connection.execute(_SCHEMA)
        except sqlite3.Error as error:
            raise RepositoryError(
                f"Could not establish database connection: {error}"
            ) from error

    def create_new(self) -> int:
        """Insert a pending pipeline and return its id."""
        try:
            with self._connection:
                cursor = self._connection.execute(
                    "INSERT INTO pipelines (status) VALUES (?)",
                    (PipelineStatus.PENDING.value,),
                )
        except sqlite3.Error as error:
            raise RepositoryError(f"Could not create pipeline: {error}") from error
        if cursor.lastrowid is None:
            raise RepositoryError("Could not create pipeline: no id returned")
        return cursor.lastrowid

    def close(self) -> None:
        self._connection.close()

    def __enter__(self) -> PipelinesRepository:
        return self

    def __exit__(
        self,
        *args: type[BaseException] | BaseException | TracebackType | None,
    ) -> None:
        self.close()