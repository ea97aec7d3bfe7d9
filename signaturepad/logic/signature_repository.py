# signaturepad/logic/signature_repository.py
from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Union

from core.common.db_interface import SQLiteRepository

if TYPE_CHECKING:
    from core.logging.logic.logger import Logger

_FEATURE_ID = "core_signature"

log = logging.getLogger(__name__)


class SignatureRepository(SQLiteRepository):
    """
    Stores one encoded signature per owner.

    Values are stored verbatim (compact or legacy JSON); the repository never
    decodes them. Saves and deletes are recorded in the event logger; a
    repository built directly without one (tests, tools) records nothing.
    """

    def __init__(self, db_path: Union[Path, str], *, logger: Optional["Logger"] = None) -> None:
        super().__init__(db_path)
        self._logger = logger

    @classmethod
    def from_config(cls, *, logger: Optional["Logger"] = None) -> "SignatureRepository":
        """Repository on the configured database, logging to the core event logger by default."""
        from core.config.config_service import config_service  # lazy
        if logger is None:
            from core.logging.logic.logger import logger  # lazy
        return cls(config_service.database.signatures, logger=logger)

    # -------- Schema ---------------------------------------------------------
    def _ensure_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS signatures (
                owner_id TEXT PRIMARY KEY,
                payload TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """
        )
        conn.commit()

    # -------- API ------------------------------------------------------------
    def save(self, owner_id: str, payload: str) -> None:
        if not payload:
            raise ValueError("Refusing to store an empty signature; use delete() instead.")
        ts = datetime.now(timezone.utc).isoformat()
        with self.transaction() as conn:
            conn.execute(
                """
                INSERT INTO signatures (owner_id, payload, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(owner_id) DO UPDATE SET payload = excluded.payload,
                                                    updated_at = excluded.updated_at
                """,
                (str(owner_id), payload, ts),
            )
        log.debug("Stored signature for %s (%d chars)", owner_id, len(payload))
        self._log("SignatureSaved", owner_id, f"{len(payload)} chars")

    def load(self, owner_id: str) -> Optional[str]:
        row = self.connect().execute(
            "SELECT payload FROM signatures WHERE owner_id = ?", (str(owner_id),)
        ).fetchone()
        return row["payload"] if row else None

    def delete(self, owner_id: str) -> bool:
        with self.transaction() as conn:
            cur = conn.execute("DELETE FROM signatures WHERE owner_id = ?", (str(owner_id),))
        deleted = cur.rowcount > 0
        if deleted:
            self._log("SignatureDeleted", owner_id)
        return deleted

    def list_owners(self) -> List[str]:
        rows = self.connect().execute("SELECT owner_id FROM signatures ORDER BY owner_id").fetchall()
        return [r["owner_id"] for r in rows]

    # -------- Internal -------------------------------------------------------
    def _log(self, event: str, owner_id: str, message: Optional[str] = None) -> None:
        if self._logger is not None:
            self._logger.log(_FEATURE_ID, event, reference_id=str(owner_id), message=message)
