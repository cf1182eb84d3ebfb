from sqlmodel import Field

from meetdesk.schemas.base import RowIdentityMixin


class Athlete(RowIdentityMixin, table=True):  # type: ignore[call-arg]
    __tablename__ = "athletes"

    name: str = Field(index=True)
