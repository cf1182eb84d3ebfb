"""Supabase REST (PostgREST) client for single-row inserts.

Only what the insert endpoints need: ``POST /rest/v1/<table>`` asking for the
inserted row back as a single JSON object.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from fastapi.encoders import jsonable_encoder

from meetdesk.services.backend import BackendError, Row

logger = logging.getLogger(__name__)

# Ask PostgREST for exactly one object instead of a one-element array
_SINGLE_OBJECT = "application/vnd.pgrst.object+json"


class SupabaseClient:
    """Thin async wrapper over the Supabase REST API.

    Authenticates with the service-role key, so inserts bypass row-level
    security. The key is only ever placed in request headers.
    """

    def __init__(
        self,
        url: str,
        service_role_key: str,
        *,
        schema: str = "public",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.rest_url = url.rstrip("/") + "/rest/v1"
        self.schema = schema
        self._key = service_role_key
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazily initialize the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.rest_url,
                headers={
                    "apikey": self._key,
                    "Authorization": f"Bearer {self._key}",
                },
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def insert(self, table: str, record: Row) -> Row:
        """Insert ``record`` into ``table`` and return the stored row.

        Raises:
            BackendError: PostgREST answered with an error, or the request
                never completed.
        """
        headers = {
            "Prefer": "return=representation",
            "Accept": _SINGLE_OBJECT,
        }
        if self.schema and self.schema != "public":
            headers["Content-Profile"] = self.schema

        try:
            response = await self.client.post(
                f"/{table}",
                params={"select": "*"},
                json=jsonable_encoder(record),
                headers=headers,
            )
        except httpx.HTTPError as exc:
            logger.warning("Supabase insert into %s failed: %s", table, exc)
            raise BackendError(str(exc) or type(exc).__name__) from exc

        if response.is_error:
            message, code = _error_details(response)
            logger.warning(
                "Supabase rejected insert into %s (%s %s): %s",
                table,
                response.status_code,
                code or "no code",
                message,
            )
            raise BackendError(message, code=code, status_code=response.status_code)

        return response.json()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def _error_details(response: httpx.Response) -> tuple[str, Optional[str]]:
    """Pull ``message`` and ``code`` out of a PostgREST error body."""
    try:
        payload: Any = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        message = payload.get("message") or payload.get("error") or payload.get("msg")
        code = payload.get("code")
        if message:
            return str(message), str(code) if code is not None else None

    text = response.text.strip()
    return (text or response.reason_phrase or f"HTTP {response.status_code}"), None
