import logging
from dataclasses import dataclass
from typing import Any

import httpx

from app.exceptions.custom import RateLimitError, SupabaseError

logger = logging.getLogger(__name__)

REST_PATH = "/rest/v1"

LISTING_TABLE = "schwimmschule"
IMPORTED_TABLE = "schwimmschulen_import"
GEOLOCATION_TABLE = "geolocations"
REGISTRATION_TABLE = "schwimmschule_registrations"

RATING_ORDER = "rating.desc.nullslast"


@dataclass
class PageResult:
    rows: list[dict[str, Any]]
    total: int


def parse_content_range(header: str | None) -> int | None:
    """Total from a PostgREST ``Content-Range`` header, e.g. ``0-9/123``."""
    if not header or "/" not in header:
        return None
    total = header.rsplit("/", 1)[1]
    return int(total) if total.isdigit() else None


class SupabaseService:
    """Thin PostgREST client: table reads, RPC calls and inserts."""

    def __init__(self, client: httpx.AsyncClient, base_url: str, api_key: str):
        self._client = client
        self._rest_url = base_url.rstrip("/") + REST_PATH
        self._headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    def _check(self, resp: httpx.Response) -> None:
        if resp.status_code == 429:
            raise RateLimitError("Supabase")
        if resp.status_code >= 400:
            raise SupabaseError(resp.text, status_code=resp.status_code)

    def _json(self, resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            # Gateways can answer 200 with an HTML page
            raise SupabaseError(f"Invalid JSON response: {exc}", status_code=resp.status_code)

    async def select(
        self,
        table: str,
        filters: dict[str, str] | None = None,
        order: str | None = None,
        limit: int | None = None,
        columns: str = "*",
    ) -> list[dict[str, Any]]:
        params: dict[str, str] = {"select": columns}
        params.update(filters or {})
        if order:
            params["order"] = order
        if limit is not None:
            params["limit"] = str(limit)

        resp = await self._client.get(
            f"{self._rest_url}/{table}", params=params, headers=self._headers
        )
        self._check(resp)

        rows = self._json(resp)
        logger.debug("Selected %d rows from %s", len(rows), table)
        return rows

    async def select_range(
        self,
        table: str,
        start: int,
        end: int,
        order: str | None = RATING_ORDER,
    ) -> PageResult:
        params = {"select": "*", "offset": str(start), "limit": str(end - start + 1)}
        if order:
            params["order"] = order
        headers = {**self._headers, "Prefer": "count=exact"}

        resp = await self._client.get(
            f"{self._rest_url}/{table}", params=params, headers=headers
        )
        self._check(resp)

        rows = self._json(resp)
        total = parse_content_range(resp.headers.get("content-range"))
        if total is None:
            total = start + len(rows)
        logger.info("Fetched rows %d-%d of %s (total=%d)", start, end, table, total)
        return PageResult(rows=rows, total=total)

    async def select_one(self, table: str, column: str, value: str) -> dict[str, Any] | None:
        rows = await self.select(table, filters={column: f"eq.{value}"}, limit=1)
        return rows[0] if rows else None

    async def rpc(self, function: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        resp = await self._client.post(
            f"{self._rest_url}/rpc/{function}", json=params, headers=self._headers
        )
        self._check(resp)

        data = self._json(resp)
        if data is None:
            return []
        return data if isinstance(data, list) else [data]

    async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        headers = {**self._headers, "Prefer": "return=representation"}
        resp = await self._client.post(
            f"{self._rest_url}/{table}", json=row, headers=headers
        )
        self._check(resp)

        logger.info("Inserted row into %s", table)
        data = self._json(resp) if resp.content else []
        if isinstance(data, list):
            return data[0] if data else {}
        return data
