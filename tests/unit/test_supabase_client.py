"""Unit tests for the Supabase REST client.

These tests avoid network calls by routing requests through ``httpx.MockTransport``.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from uuid import UUID

import httpx
import pytest

from meetdesk.services.backend import BackendError
from meetdesk.services.supabase_client import SupabaseClient

ROW = {
    "id": "0b7c1b7e-5a52-4d0f-9d55-0c5c9f1d8a11",
    "created_at": "2026-10-19T12:00:00+00:00",
    "name": "Dylan Pan",
}


def _client(handler, **kwargs) -> SupabaseClient:
    return SupabaseClient(
        "https://project.supabase.co/",
        "service-role-key",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


async def test_insert_posts_to_rest_endpoint_and_returns_row() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json=ROW)

    client = _client(handler)
    row = await client.insert("athletes", {"name": "Dylan Pan"})
    await client.aclose()

    assert row == ROW
    request = seen[0]
    assert request.method == "POST"
    assert request.url.host == "project.supabase.co"
    assert request.url.path == "/rest/v1/athletes"
    assert request.url.params["select"] == "*"
    assert json.loads(request.content) == {"name": "Dylan Pan"}


async def test_insert_sends_service_role_and_single_row_headers() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json=ROW)

    client = _client(handler)
    await client.insert("athletes", {"name": "Dylan Pan"})

    headers = seen[0].headers
    assert headers["apikey"] == "service-role-key"
    assert headers["authorization"] == "Bearer service-role-key"
    assert headers["prefer"] == "return=representation"
    assert headers["accept"] == "application/vnd.pgrst.object+json"
    assert "content-profile" not in headers


async def test_non_public_schema_sets_content_profile() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json=ROW)

    client = _client(handler, schema="track")
    await client.insert("athletes", {"name": "Dylan Pan"})

    assert seen[0].headers["content-profile"] == "track"


async def test_uuid_and_datetime_values_are_serialized() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"id": "x"})

    client = _client(handler)
    await client.insert(
        "meets",
        {
            "name": "Meet #1",
            "date": datetime(2026, 4, 15, 9, tzinfo=timezone.utc),
            "location": "Groton",
            "num_teams": 3,
            "season": UUID("58269bd3-9896-4790-a528-52ac2ba7eae3"),
        },
    )

    body = json.loads(seen[0].content)
    assert body["season"] == "58269bd3-9896-4790-a528-52ac2ba7eae3"
    assert datetime.fromisoformat(body["date"]) == datetime(2026, 4, 15, 9, tzinfo=timezone.utc)


async def test_postgrest_error_becomes_backend_error() -> None:
    message = (
        'insert or update on table "athletes_to_meets" violates foreign key '
        'constraint "athletes_to_meets_meet_fkey"'
    )

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            409,
            json={
                "code": "23503",
                "details": 'Key (meet)=(7c6d0a72-3d94-48fc-8f8f-256400de247e) is not present in table "meets".',
                "hint": None,
                "message": message,
            },
        )

    client = _client(handler)
    with pytest.raises(BackendError) as exc_info:
        await client.insert("athletes_to_meets", {"points": 1})

    assert exc_info.value.message == message
    assert exc_info.value.code == "23503"
    assert exc_info.value.status_code == 409


async def test_non_json_error_uses_response_text() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="upstream unavailable")

    client = _client(handler)
    with pytest.raises(BackendError) as exc_info:
        await client.insert("seasons", {})

    assert exc_info.value.message == "upstream unavailable"
    assert exc_info.value.code is None


async def test_transport_failure_becomes_backend_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)
    with pytest.raises(BackendError) as exc_info:
        await client.insert("seasons", {})

    assert exc_info.value.message == "connection refused"
    assert exc_info.value.status_code is None


async def test_client_is_reused_until_closed() -> None:
    client = _client(lambda request: httpx.Response(201, json=ROW))

    first = client.client
    assert client.client is first
    await client.aclose()
    assert client.client is not first
    await client.aclose()
