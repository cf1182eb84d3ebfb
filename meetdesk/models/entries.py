"""Request schemas for the insert endpoints.

Each schema lists exactly the columns forwarded to the backend. Unknown keys in
the request body are ignored and never reach the insert.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict

from meetdesk.models.fields import (
    NON_EMPTY_TEXT,
    POINTS,
    ROW_ID,
    TEAM_COUNT,
    TEXT,
    TIMESTAMP,
)


class EntryBase(BaseModel):
    model_config = ConfigDict(extra="ignore")


class AthleteCreate(EntryBase):
    """Body of ``addAthlete``."""

    name: NON_EMPTY_TEXT


class AthleteToMeetCreate(EntryBase):
    """Body of ``addAthleteToMeet``: an athlete's result at one meet."""

    athlete: ROW_ID
    meet: ROW_ID
    points: POINTS
    details: dict[str, Any]


class MeetCreate(EntryBase):
    """Body of ``addMeet``."""

    name: NON_EMPTY_TEXT
    date: TIMESTAMP
    location: TEXT
    num_teams: TEAM_COUNT
    season: ROW_ID


class SeasonCreate(EntryBase):
    """Body of ``addSeason``."""

    start: TIMESTAMP
    end: TIMESTAMP
