"""Table definitions. Importing this package registers all four tables."""

from meetdesk.schemas.athletes import Athlete
from meetdesk.schemas.athletes_to_meets import AthleteToMeet
from meetdesk.schemas.meets import Meet
from meetdesk.schemas.seasons import Season

__all__ = ["Athlete", "AthleteToMeet", "Meet", "Season"]
