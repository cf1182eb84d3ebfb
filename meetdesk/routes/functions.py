"""Insert endpoints, served under ``/functions/v1``.

Each route reads the raw body itself so malformed JSON and schema failures can
be told apart (500 vs 400); the request schema is still published in OpenAPI.
"""

from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from meetdesk.services.backend import BackendProvider, get_backend_provider
from meetdesk.services.insert_service import (
    ADD_ATHLETE,
    ADD_ATHLETE_TO_MEET,
    ADD_MEET,
    ADD_SEASON,
    run_insert,
)

router = APIRouter(prefix="/functions/v1", tags=["functions"])


def _json_body(schema: type[BaseModel]) -> dict[str, Any]:
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": schema.model_json_schema()}},
        }
    }


@router.post(
    f"/{ADD_ATHLETE.name}",
    status_code=201,
    openapi_extra=_json_body(ADD_ATHLETE.schema),
)
async def add_athlete(
    request: Request,
    provide_backend: BackendProvider = Depends(get_backend_provider),
) -> JSONResponse:
    """Insert one athlete."""
    return await run_insert(ADD_ATHLETE, request, provide_backend)


@router.post(
    f"/{ADD_ATHLETE_TO_MEET.name}",
    status_code=201,
    openapi_extra=_json_body(ADD_ATHLETE_TO_MEET.schema),
)
async def add_athlete_to_meet(
    request: Request,
    provide_backend: BackendProvider = Depends(get_backend_provider),
) -> JSONResponse:
    """Record an athlete's participation and points at a meet."""
    return await run_insert(ADD_ATHLETE_TO_MEET, request, provide_backend)


@router.post(
    f"/{ADD_MEET.name}",
    status_code=201,
    openapi_extra=_json_body(ADD_MEET.schema),
)
async def add_meet(
    request: Request,
    provide_backend: BackendProvider = Depends(get_backend_provider),
) -> JSONResponse:
    """Insert one meet within an existing season."""
    return await run_insert(ADD_MEET, request, provide_backend)


@router.post(
    f"/{ADD_SEASON.name}",
    status_code=201,
    openapi_extra=_json_body(ADD_SEASON.schema),
)
async def add_season(
    request: Request,
    provide_backend: BackendProvider = Depends(get_backend_provider),
) -> JSONResponse:
    """Insert one season."""
    return await run_insert(ADD_SEASON, request, provide_backend)
