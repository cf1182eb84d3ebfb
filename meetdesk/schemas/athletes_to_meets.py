"""Association of an athlete with a meet, with the points they scored there."""

from typing import Any
from uuid import UUID

from sqlalchemy import Column, ForeignKey
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.dialects.postgresql import UUID as PGUUID
from sqlmodel import Field

from meetdesk.schemas.base import RowIdentityMixin


class AthleteToMeet(RowIdentityMixin, table=True):  # type: ignore[call-arg]
    __tablename__ = "athletes_to_meets"

    athlete: UUID = Field(
        sa_column=Column(
            PGUUID(as_uuid=True),
            ForeignKey("athletes.id"),
            nullable=False,
            index=True,
        )
    )
    meet: UUID = Field(
        sa_column=Column(
            PGUUID(as_uuid=True),
            ForeignKey("meets.id"),
            nullable=False,
            index=True,
        )
    )
    points: int = Field(default=0)
    # Free-form per-meet detail (events, marks, places)
    details: dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSONB, nullable=False),
    )
