"""Unified game record shared by every source parser."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from schedule_app.ingestion.leagues import League

SourceId = Union[int, str]


class UnifiedGameRecord(BaseModel):
    """
    One schedule entry, normalized from any provider. Serializes with camelCase keys.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    game_id: Optional[SourceId] = None
    date: str
    time: str
    location: str = "TBD"
    home_team: str = "TBD"
    away_team: str = "TBD"
    home_team_id: Optional[SourceId] = None
    away_team_id: Optional[SourceId] = None
    home_tricode: Optional[str] = None
    away_tricode: Optional[str] = None
    home_logo: Optional[str] = None
    away_logo: Optional[str] = None
    league: League
    ticket_link: Optional[str] = None
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    link_to_summary: Optional[str] = None
    overtime: bool = False
    shootout: bool = False
