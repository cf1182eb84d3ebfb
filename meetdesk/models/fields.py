"""
Annotated field types shared by the request schemas.

Integer fields take JSON numbers only: ``"3"`` and ``true`` are not integers,
``3.0`` is. Timestamps take UTC strings of the form
``YYYY-MM-DDTHH:MM:SS[.fff]Z`` and nothing else.
"""
import re
from typing import Annotated, Any
from uuid import UUID

from pydantic import AwareDatetime, BeforeValidator, StringConstraints
from pydantic import Field as PydField

UTC_TIMESTAMP_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?Z$")


def _json_number(value: Any) -> Any:
    # bool is an int subclass; reject it along with numeric strings
    if isinstance(value, (str, bool)):
        raise ValueError("Input should be a number")
    return value


def _utc_timestamp_string(value: Any) -> Any:
    if not isinstance(value, str):
        raise ValueError("Input should be a string")
    if not UTC_TIMESTAMP_PATTERN.match(value):
        raise ValueError("Invalid datetime, expected YYYY-MM-DDTHH:MM:SS[.fff]Z")
    return value


NON_EMPTY_TEXT = Annotated[str, StringConstraints(min_length=1)]
TEXT = str

TIMESTAMP = Annotated[AwareDatetime, BeforeValidator(_utc_timestamp_string)]

# Identifier of an existing row; existence is checked by the backend
ROW_ID = UUID

POINTS = Annotated[int, BeforeValidator(_json_number), PydField(ge=0)]
TEAM_COUNT = Annotated[int, BeforeValidator(_json_number), PydField(ge=2)]
