# pos_core/db.py
"""
Snapshot store: the whole database state lives as one JSON document in a
single-row-per-key SQLite table. Every save replaces the row.
"""
import json
import logging
import sqlite3
import threading
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from pos_core.config import Config, load_config
from pos_core.errors import MalformedSnapshot
from pos_core.models import DBState, Settings, Store, new_id

logger = logging.getLogger(__name__)

DEFAULT_STORE_NAME = "Main Store"


def default_state(config: Optional[Config] = None) -> DBState:
    """First-run state: one store, nothing else, and a usable login."""
    config = config or load_config()
    return DBState(
        items=(),
        customers=(),
        stores=(Store(id=new_id(), name=DEFAULT_STORE_NAME),),
        sales=(),
        settings=Settings(
            company_name=config.company_name,
            currency=config.currency,
            username=config.default_username or "admin",
            password=config.default_password or "admin",
        ),
    )


def snapshot_to_json(state: DBState, indent: Optional[int] = None) -> str:
    return json.dumps(state.to_dict(), ensure_ascii=False, indent=indent)


def snapshot_from_json(blob: Union[bytes, str]) -> DBState:
    if isinstance(blob, bytes):
        try:
            blob = blob.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedSnapshot(f"Snapshot is not valid UTF-8: {e}") from e
    try:
        data = json.loads(blob)
    except (TypeError, ValueError) as e:
        raise MalformedSnapshot(f"Snapshot is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise MalformedSnapshot("Snapshot must be a JSON object")
    return DBState.from_dict(data)


def backup_filename(now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"pos_backup_{now.strftime('%Y%m%d_%H%M%S')}.json"


class SnapshotStore:
    def __init__(self, db_path: Union[str, Path] = None, key: str = None, config: Optional[Config] = None):
        self.config = config or load_config()
        self.db_path = str(db_path or self.config.db_path)
        self.key = key or self.config.snapshot_key
        self._write_lock = threading.Lock()
        self.init_db()

    def get_connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self):
        conn = self.get_connection()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS snapshots (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT DEFAULT (datetime('now'))
                );
                """
            )
            conn.commit()
        finally:
            conn.close()

    # -------- LOAD / SAVE --------

    def load(self) -> DBState:
        conn = self.get_connection()
        try:
            row = conn.execute("SELECT value FROM snapshots WHERE key = ?", (self.key,)).fetchone()
        finally:
            conn.close()

        if row is None:
            logger.info("No snapshot stored under '%s', starting from the default state", self.key)
            return default_state(self.config)
        return snapshot_from_json(row["value"])

    def save(self, state: DBState):
        payload = snapshot_to_json(state)
        with self._write_lock:
            conn = self.get_connection()
            try:
                with conn:
                    conn.execute(
                        """
                        INSERT OR REPLACE INTO snapshots (key, value, updated_at)
                        VALUES (?, ?, datetime('now'))
                        """,
                        (self.key, payload),
                    )
            finally:
                conn.close()
        logger.debug("Saved snapshot '%s' (%d bytes)", self.key, len(payload))

    # -------- BACKUP / RESTORE --------

    def export(self, state: DBState) -> bytes:
        return snapshot_to_json(state, indent=2).encode("utf-8")

    def import_(self, blob: Union[bytes, str]) -> DBState:
        """Decode a backup. Raises MalformedSnapshot; does not persist anything."""
        try:
            return snapshot_from_json(blob)
        except MalformedSnapshot as e:
            logger.warning("Rejected backup: %s", e)
            raise

    def backup_to(self, path: Union[str, Path], state: DBState) -> Path:
        path = Path(path)
        if path.is_dir():
            path = path / backup_filename()
        path.write_bytes(self.export(state))
        logger.info("Backup written to %s", path)
        return path

    def restore_from(self, path: Union[str, Path]) -> DBState:
        return self.import_(Path(path).read_bytes())
