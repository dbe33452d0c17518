from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

from movieShelf.catalog.errors import StoreError
from movieShelf.settings import REQUEST_TIMEOUT, SUPABASE_ANON_KEY, SUPABASE_URL
from movieShelf.utils import log_debug


class RestClient:
    """Thin wrapper around a hosted PostgREST endpoint (Supabase ``/rest/v1``)."""

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        session: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.base_url = (base_url or SUPABASE_URL or "").rstrip("/")
        self.api_key = api_key or SUPABASE_ANON_KEY
        if not self.base_url:
            raise EnvironmentError("Missing SUPABASE_URL in .env")
        if not self.api_key:
            raise EnvironmentError("Missing SUPABASE_ANON_KEY in .env")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
        })

    def _request(self, method: str, table: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}/rest/v1/{table}"
        try:
            r = self.session.request(method, url, timeout=self.timeout, **kwargs)
            r.raise_for_status()
        except requests.RequestException as e:
            log_debug(f"PostgREST {method} {table} failed: {e}")
            raise StoreError(f"{method} {table} failed: {e}") from e
        return r

    @staticmethod
    def _json(r: requests.Response, table: str) -> Any:
        try:
            return r.json()
        except (ValueError, requests.RequestException) as e:
            log_debug(f"PostgREST {table} returned an unreadable body: {e}")
            raise StoreError(f"Unreadable response for {table}: {e}") from e

    @staticmethod
    def _filters(eq: Optional[Dict[str, Any]]) -> Dict[str, str]:
        out = {}
        for col, val in (eq or {}).items():
            if isinstance(val, bool):
                val = "true" if val else "false"
            out[col] = f"eq.{val}"
        return out

    # ------------------------------------------------------------------
    # Readers
    # ------------------------------------------------------------------
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
        params = {
            "select": ",".join(columns) if columns else "*",
            "order": f"{order_by}.{'desc' if descending else 'asc'}",
            **self._filters(eq),
        }
        if limit is not None:
            params["limit"] = str(int(limit))
        return self._json(self._request("GET", table, params=params), table) or []

    def count(self, table: str, *, eq: Optional[Dict[str, Any]] = None) -> int:
        """Exact row count read from the ``Content-Range`` header (``0-4/57``)."""
        r = self._request(
            "HEAD", table,
            params={"select": "*", **self._filters(eq)},
            headers={"Prefer": "count=exact"},
        )
        total = r.headers.get("Content-Range", "").rpartition("/")[2]
        if not total.isdigit():
            raise StoreError(f"No exact count in response for {table}")
        return int(total)

    # ------------------------------------------------------------------
    # Writers
    # ------------------------------------------------------------------
    def insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        r = self._request(
            "POST", table, json=row,
            headers={"Prefer": "return=representation"},
        )
        body = self._json(r, table)
        if isinstance(body, list):
            if not body:
                raise StoreError(f"Insert into {table} returned no row")
            body = body[0]
        return body

    def update(self, table: str, row_id: str, fields: Dict[str, Any]) -> int:
        if not fields:
            return 0
        r = self._request(
            "PATCH", table, json=fields,
            params={"id": f"eq.{row_id}"},
            headers={"Prefer": "return=representation"},
        )
        return len(self._json(r, table) or [])

    def delete(self, table: str, row_id: str) -> int:
        r = self._request(
            "DELETE", table,
            params={"id": f"eq.{row_id}"},
            headers={"Prefer": "return=representation"},
        )
        return len(self._json(r, table) or [])

    def close(self) -> None:
        self.session.close()
