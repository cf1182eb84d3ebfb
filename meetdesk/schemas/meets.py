"""Meets table. A meet belongs to exactly one season."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Column, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import UUID as PGUUID
from sqlmodel import Field

from meetdesk.schemas.base import RowIdentityMixin


class Meet(RowIdentityMixin, table=True):  # type: ignore[call-arg]
    __tablename__ = "meets"

    name: str
    date: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))
    location: str
    num_teams: int
    season: UUID = Field(
        sa_column=Column(
            PGUUID(as_uuid=True),
            ForeignKey("seasons.id"),
            nullable=False,
            index=True,
        )
    )
