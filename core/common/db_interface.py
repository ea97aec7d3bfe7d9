"""
core/common/db_interface.py
===========================

Shared interface + helpers for SQLite-backed stores (signature repository,
event logger).
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union
import sqlite3

MEMORY_DB = ":memory:"


def create_sqlite_connection(
    db_path: Union[Path, str],
    *,
    check_same_thread: bool = False,
) -> sqlite3.Connection:
    """Create a sqlite3 connection with common defaults (parent dir is created)."""
    if str(db_path) != MEMORY_DB:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path), check_same_thread=check_same_thread)
    conn.row_factory = sqlite3.Row
    return conn


class DatabaseAccess(ABC):
    """Interface for modules that depend on a database."""

    @property
    @abstractmethod
    def db_path(self) -> Union[Path, str]:
        raise NotImplementedError

    @abstractmethod
    def connect(self) -> sqlite3.Connection:
        raise NotImplementedError


class SQLiteRepository(DatabaseAccess):
    """
    Default SQLite implementation with one lazily opened, shared connection.

    Subclasses create their schema in ``_ensure_schema``; it runs once, on the
    first connect, so constructing a repository performs no I/O.
    """

    def __init__(self, db_path: Union[Path, str], *, check_same_thread: bool = False) -> None:
        self._db_path = db_path if str(db_path) == MEMORY_DB else Path(db_path)
        self._conn: Optional[sqlite3.Connection] = None
        self._check_same_thread = check_same_thread

    @property
    def db_path(self) -> Union[Path, str]:
        return self._db_path

    def connect(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = create_sqlite_connection(
                self._db_path,
                check_same_thread=self._check_same_thread,
            )
            self._ensure_schema(self._conn)
        return self._conn

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        conn = self.connect()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise

    def _ensure_schema(self, conn: sqlite3.Connection) -> None:
        """Hook for subclasses."""

    def close(self) -> None:
        if self._conn is not None:
            try:
                self._conn.close()
            finally:
                self._conn = None
