"""Minimal async client for the Supabase PostgREST API."""

import logging

import httpx

from core.config import NotifierConfig

logger = logging.getLogger(__name__)


class SupabaseError(Exception):
    """Raised when a PostgREST request fails or returns a non-2xx status."""

    pass


class SupabaseClient:
    """
    Thin wrapper over httpx for `{SUPABASE_URL}/rest/v1/...` requests.

    The httpx.AsyncClient is owned by the caller (the app lifespan), so one
    connection pool is shared by every client built on top of it.
    """

    def __init__(self, config: NotifierConfig, http: httpx.AsyncClient):
        self._config = config
        self._http = http

    def _get_headers(self) -> dict[str, str]:
        key = self._config.supabase_service_key
        return {
            "Content-Type": "application/json",
            "apikey": key,
            "Authorization": f"Bearer {key}",
            "Prefer": "return=representation",
        }

    async def request(
        self,
        method: str,
        table: str,
        params: dict[str, str] | None = None,
        json: dict | None = None,
    ) -> httpx.Response:
        """
        Send a request against one table resource.

        Args:
            method: HTTP method
            table: Table name (e.g., "tasks")
            params: PostgREST filter/select query parameters
            json: Request body

        Returns:
            The httpx response (always 2xx)

        Raises:
            SupabaseError: On transport failure or non-2xx status
        """
        url = f"{self._config.rest_url}/{table}"
        try:
            response = await self._http.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._get_headers(),
            )
        except httpx.HTTPError as e:
            raise SupabaseError(f"{method} {table} failed: {e}") from e

        if response.status_code >= 300:
            raise SupabaseError(
                f"{method} {table} failed: HTTP {response.status_code} {response.text}"
            )
        return response

    async def select(self, table: str, params: dict[str, str]) -> list[dict]:
        """
        GET rows from a table.

        Anything other than a JSON list (error object, invalid JSON) is
        logged and treated as no rows.
        """
        response = await self.request("GET", table, params=params)
        try:
            data = response.json()
        except ValueError:
            logger.warning(f"Non-JSON response selecting from {table}")
            return []
        if not isinstance(data, list):
            logger.warning(f"Unexpected response shape selecting from {table}: {data!r}")
            return []
        return data
