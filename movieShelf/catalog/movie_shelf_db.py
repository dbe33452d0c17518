# movie_shelf_db.py
from __future__ import annotations
import sqlite3, threading
from pathlib import Path

from movieShelf.settings import DATABASE_PATH as _DB_PATH, SCHEMA_PATH as _SCHEMA_PATH


class ShelfDB:
    """
    SQLite access with one connection per thread.

    The first connection runs the schema script; later ones only switch on
    foreign keys (needed for the reviews → movies cascade). Use a file
    path: ``:memory:`` would give every thread its own empty database.
    """

    def __init__(
        self,
        path: str | Path = _DB_PATH,
        schema_path: Path = _SCHEMA_PATH,
        serialise_writes: bool = True,
    ) -> None:
        self.path        = str(path)
        self.schema_path = Path(schema_path)
        self.serialise_writes = serialise_writes   # avoids "database is locked"

        self._conns: dict[int, sqlite3.Connection] = {}   # thread ident → conn
        self._conns_lock  = threading.Lock()
        self._init_lock   = threading.Lock()
        self._write_lock  = threading.RLock()
        self._schema_done = False

    # ─── internal helpers ───────────────────────────────────────────────
    def _new_connection(self) -> sqlite3.Connection:
        """Create a fresh connection and run the schema SQL once per instance."""
        conn = sqlite3.connect(
            self.path,
            check_same_thread=False,    # closed by whichever thread calls close()
            isolation_level="DEFERRED",
            timeout=30,
        )
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")

        if not self._schema_done:
            with self._init_lock:
                if not self._schema_done:
                    conn.executescript(self.schema_path.read_text(encoding="utf-8"))
                    conn.commit()
                    self._schema_done = True
        return conn

    def _prune_dead_threads(self) -> None:
        alive = {t.ident for t in threading.enumerate()}
        for ident in [i for i in self._conns if i not in alive]:
            self._conns.pop(ident).close()

    # ─── public helpers ────────────────────────────────────────────────
    def connection(self) -> sqlite3.Connection:
        """Return this thread's connection, creating it on first use."""
        ident = threading.get_ident()
        with self._conns_lock:
            conn = self._conns.get(ident)
            if conn is None:
                self._prune_dead_threads()
                conn = self._conns[ident] = self._new_connection()
            return conn

    def attach_thread(self) -> None:
        """Call once at the start of a worker thread before any SQL helpers."""
        self.connection()

    def execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        """Like `connection().execute(...)`, but can serialise writes."""
        cur = self.connection().cursor()
        if self.serialise_writes and sql.lstrip().upper().startswith(
            ("INSERT", "UPDATE", "DELETE", "REPLACE")
        ):
            with self._write_lock:
                return cur.execute(sql, params)
        return cur.execute(sql, params)

    def commit(self) -> None:
        """Commit the current thread's connection."""
        self.connection().commit()

    def rollback(self) -> None:
        self.connection().rollback()

    def close(self) -> None:
        """Close every connection handed out so far."""
        with self._conns_lock:
            for conn in self._conns.values():
                conn.close()
            self._conns.clear()
