from datetime import datetime

from sqlalchemy import Column, DateTime
from sqlmodel import Field

from meetdesk.schemas.base import RowIdentityMixin


class Season(RowIdentityMixin, table=True):  # type: ignore[call-arg]
    __tablename__ = "seasons"

    start: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))
    end: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))
