"""Shared request pipeline for the insert endpoints.

Every endpoint runs the same steps: read the body, validate it against the
endpoint schema, insert one row, render the outcome. Only the schema and the
target table differ, so each endpoint is an ``InsertEndpoint`` entry.

Outcomes:
- 201 ``{"success": true, <row key>: row}``
- 400 ``{"error": "Invalid input", "details": {...}}`` (nothing written)
- 500 ``{"error": <backend message>}`` when the insert fails
- 500 ``{"error": "Internal server error"}`` for malformed JSON or anything
  unexpected; the cause is logged only
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from meetdesk.config import settings
from meetdesk.models.entries import (
    AthleteCreate,
    AthleteToMeetCreate,
    MeetCreate,
    SeasonCreate,
)
from meetdesk.models.errors import failed_fields, format_validation_errors
from meetdesk.services.backend import (
    BackendConfigError,
    BackendError,
    BackendProvider,
)

logger = logging.getLogger(__name__)

INVALID_INPUT_MESSAGE = "Invalid input"
INTERNAL_ERROR_MESSAGE = "Internal server error"
LEGACY_ROW_KEY = "season"


@dataclass(frozen=True)
class InsertEndpoint:
    name: str  # path segment, e.g. "addAthlete"
    table: str
    schema: type[BaseModel]
    entity_key: str  # row key when legacy_row_key is off

    @property
    def row_key(self) -> str:
        return LEGACY_ROW_KEY if settings.legacy_row_key else self.entity_key


ADD_ATHLETE = InsertEndpoint("addAthlete", "athletes", AthleteCreate, "athlete")
ADD_ATHLETE_TO_MEET = InsertEndpoint(
    "addAthleteToMeet", "athletes_to_meets", AthleteToMeetCreate, "association"
)
ADD_MEET = InsertEndpoint("addMeet", "meets", MeetCreate, "meet")
ADD_SEASON = InsertEndpoint("addSeason", "seasons", SeasonCreate, "season")

ENDPOINTS: tuple[InsertEndpoint, ...] = (
    ADD_ATHLETE,
    ADD_ATHLETE_TO_MEET,
    ADD_MEET,
    ADD_SEASON,
)


def _json(content: dict[str, Any], status_code: int) -> JSONResponse:
    return JSONResponse(content=jsonable_encoder(content), status_code=status_code)


def _internal_error() -> JSONResponse:
    return _json({"error": INTERNAL_ERROR_MESSAGE}, 500)


def _is_malformed_json(exc: ValidationError) -> bool:
    return any(error["type"] == "json_invalid" for error in exc.errors())


async def run_insert(
    endpoint: InsertEndpoint,
    request: Request,
    provide_backend: BackendProvider,
) -> JSONResponse:
    """Validate the request body and insert it as one row of ``endpoint.table``.

    The backend is resolved only after validation succeeds.
    """
    try:
        body = await request.body()
        try:
            payload = endpoint.schema.model_validate_json(body)
        except ValidationError as exc:
            if _is_malformed_json(exc):
                logger.error("%s: request body is not valid JSON: %s", endpoint.name, exc)
                return _internal_error()
            details = format_validation_errors(exc)
            logger.info(
                "%s: rejected invalid input (fields: %s)",
                endpoint.name,
                ", ".join(failed_fields(details)) or "<body>",
            )
            return _json({"error": INVALID_INPUT_MESSAGE, "details": details}, 400)

        # Only the validated fields; unknown keys were dropped by the schema
        record = payload.model_dump()

        try:
            backend = await provide_backend()
        except BackendConfigError as exc:
            logger.error("%s: storage backend is not configured: %s", endpoint.name, exc)
            return _internal_error()

        try:
            row = await backend.insert(endpoint.table, record)
        except BackendError as exc:
            return _json({"error": exc.message}, 500)

        logger.info("%s: inserted row %s into %s", endpoint.name, row.get("id"), endpoint.table)
        return _json({"success": True, endpoint.row_key: row}, 201)
    except Exception:
        logger.exception("%s: unexpected error", endpoint.name)
        return _internal_error()
