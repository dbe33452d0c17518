"""catalog.clients.sqlite_client
Local store: the query-client contract on top of SQLite.

All SQL lives here; repositories call these helpers instead of touching
`sqlite3` directly.
"""

from __future__ import annotations
import json
import sqlite3
from typing import Any, Dict, Iterable, List, Optional, Set

from movieShelf.catalog.errors import StoreError
from movieShelf.catalog.movie_shelf_db import ShelfDB
from movieShelf.utils import log_debug, new_id, utc_now_iso

_TABLE_COLS: Dict[str, Set[str]] = {
    "movies": {
        "id", "title", "year", "poster", "genres", "director", "cast_members",
        "country", "language", "synopsis", "watched", "favorite", "created_at",
    },
    "reviews": {"id", "movie_id", "text", "spoiler", "created_at"},
}
_JSON_COLS = {"genres", "cast_members"}
_BOOL_COLS = {"watched", "favorite", "spoiler"}


def _check(table: str, cols: Iterable[str]) -> None:
    if table not in _TABLE_COLS:
        raise ValueError(f"Unknown table: {table}")
    unknown = set(cols) - _TABLE_COLS[table]
    if unknown:
        raise ValueError(f"Unknown {table} columns: {', '.join(sorted(unknown))}")


def _encode(col: str, value: Any) -> Any:
    if col in _JSON_COLS:
        return json.dumps(list(value or []))
    if col in _BOOL_COLS:
        return int(bool(value))
    return value


def _decode(row: sqlite3.Row) -> Dict[str, Any]:
    out = dict(row)
    for col in _JSON_COLS & out.keys():
        out[col] = json.loads(out[col] or "[]")
    for col in _BOOL_COLS & out.keys():
        out[col] = bool(out[col])
    return out


def _where(eq: Optional[Dict[str, Any]]) -> tuple[str, tuple]:
    if not eq:
        return "", ()
    clause = " AND ".join(f"{col}=?" for col in eq)
    return f" WHERE {clause}", tuple(_encode(c, v) for c, v in eq.items())


class SqliteClient:
    """Query client for a local SQLite file."""

    def __init__(self, db: ShelfDB | None = None) -> None:
        self.db = db or ShelfDB()

    def _run(self, sql: str, params: tuple = (), *, write: bool = False) -> sqlite3.Cursor:
        try:
            cur = self.db.execute(sql, params)
            if write:
                self.db.commit()
            return cur
        except sqlite3.Error as e:
            if write:
                self.db.rollback()
            log_debug(f"sqlite error: {e} ({sql})")
            raise StoreError(str(e)) from e

    # ───────────────────────────── readers ─────────────────────────────
    def select(
        self,
        table: str,
        *,
        eq: Optional[Dict[str, Any]] = None,
        columns: Optional[List[str]] = None,
        order_by: str = "created_at",
        descending: bool = True,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Rows of *table* matching *eq*, newest first by default."""
        _check(table, [*(eq or {}), *(columns or []), order_by])
        cols = ", ".join(columns) if columns else "*"
        where, params = _where(eq)
        direction = "DESC" if descending else "ASC"
        # rowid breaks created_at ties in insertion order
        sql = f"SELECT {cols} FROM {table}{where} ORDER BY {order_by} {direction}, rowid {direction}"
        if limit is not None:
            sql += " LIMIT ?"
            params += (int(limit),)
        rows = self._run(sql, params).fetchall()
        return [_decode(r) for r in rows]

    def count(self, table: str, *, eq: Optional[Dict[str, Any]] = None) -> int:
        _check(table, eq or {})
        where, params = _where(eq)
        return self._run(f"SELECT COUNT(*) AS n FROM {table}{where}", params).fetchone()["n"]

    # ───────────────────────────── writers ─────────────────────────────
    def insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        """Insert one row and return it as stored (id / created_at filled in)."""
        data = {"id": new_id(), "created_at": utc_now_iso(), **row}
        _check(table, data)
        cols = ", ".join(data)
        ph   = ", ".join("?" for _ in data)
        self._run(
            f"INSERT INTO {table} ({cols}) VALUES ({ph})",
            tuple(_encode(c, v) for c, v in data.items()),
            write=True,
        )
        return self.select(table, eq={"id": data["id"]}, limit=1)[0]

    def update(self, table: str, row_id: str, fields: Dict[str, Any]) -> int:
        """Update columns on row *row_id*; returns the number of rows touched."""
        if not fields:
            return 0
        _check(table, fields)
        if "id" in fields or "created_at" in fields:
            raise ValueError("id and created_at are immutable")
        sets = ", ".join(f"{col}=?" for col in fields)
        params = tuple(_encode(c, v) for c, v in fields.items()) + (row_id,)
        return self._run(f"UPDATE {table} SET {sets} WHERE id=?", params, write=True).rowcount

    def delete(self, table: str, row_id: str) -> int:
        """Delete row *row_id*; dependent rows go with it (FK cascade)."""
        _check(table, ())
        return self._run(f"DELETE FROM {table} WHERE id=?", (row_id,), write=True).rowcount

    def close(self) -> None:
        self.db.close()
