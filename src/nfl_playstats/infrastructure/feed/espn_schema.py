# src/nfl_playstats/infrastructure/feed/espn_schema.py - Play-by-play feed payload models

"""
Pydantic models for the upstream play-by-play JSON (ESPN game summary shape
served through RapidAPI). Only the structure the import needs is modelled;
every other key is ignored. A payload missing the competition or either
competitor fails validation.
"""

from typing import Annotated, Any, Dict, List, Optional

from pydantic import (
    AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field, ValidationError, field_validator,
    model_validator
)

from ...domain.exceptions import FeedValidationError


def _as_text(value: Any) -> Any:
    # ESPN sends ids as strings most of the time, occasionally as numbers
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(int(value))
    return value


FeedId = Annotated[str, BeforeValidator(_as_text)]


class FeedModel(BaseModel):
    model_config = ConfigDict(extra='ignore', populate_by_name=True)


class TeamRef(FeedModel):
    id: Optional[FeedId] = None


class Logo(FeedModel):
    href: Optional[str] = None


class FeedTeam(FeedModel):
    id: FeedId
    abbreviation: str
    name: Optional[str] = None
    display_name: Optional[str] = Field(default=None, alias='displayName')
    location: Optional[str] = None
    color: Optional[str] = None
    alternate_color: Optional[str] = Field(default=None, alias='alternateColor')
    logos: List[Logo] = Field(default_factory=list)

    @property
    def logo(self) -> Optional[str]:
        return self.logos[0].href if self.logos else None


class Competitor(FeedModel):
    home_away: str = Field(alias='homeAway')
    team: FeedTeam
    score: Optional[int] = None


class WeekInfo(FeedModel):
    number: Optional[int] = None


class SeasonInfo(FeedModel):
    year: Optional[int] = None
    type: Optional[int] = None


class Competition(FeedModel):
    date: Optional[str] = None
    week: Optional[WeekInfo] = None
    competitors: List[Competitor] = Field(min_length=2)

    @model_validator(mode='after')
    def _home_and_away(self) -> 'Competition':
        sides = {competitor.home_away for competitor in self.competitors}
        if not {'home', 'away'} <= sides:
            raise ValueError("competition must list a home and an away competitor")
        return self

    def competitor(self, home_away: str) -> Competitor:
        return next(c for c in self.competitors if c.home_away == home_away)


class PlayStart(FeedModel):
    down: Optional[int] = None
    distance: Optional[int] = None
    yards_to_endzone: Optional[int] = Field(default=None, alias='yardsToEndzone')
    team: Optional[TeamRef] = None


class Period(FeedModel):
    number: Optional[int] = None


class Clock(FeedModel):
    display_value: Optional[str] = Field(default=None, alias='displayValue')


class FeedPlay(FeedModel):
    id: Optional[FeedId] = None
    sequence_number: Optional[FeedId] = Field(default=None, alias='sequenceNumber')
    text: Optional[str] = None
    description: Optional[str] = None
    stat_yardage: Optional[float] = Field(default=None, alias='statYardage')
    scoring_play: Optional[bool] = Field(default=None, alias='scoringPlay')
    period: Optional[Period] = None
    clock: Optional[Clock] = None
    start: PlayStart = Field(default_factory=PlayStart)
    team: Optional[TeamRef] = None


class Drive(FeedModel):
    id: Optional[FeedId] = None
    team: Optional[TeamRef] = None
    plays: List[FeedPlay] = Field(default_factory=list)


class Drives(FeedModel):
    previous: List[Drive] = Field(default_factory=list)


class BoxScoreTeamRef(FeedModel):
    id: Optional[FeedId] = None
    abbreviation: str


class BoxScoreStat(FeedModel):
    name: Optional[str] = None
    value: Any = None
    display_value: Optional[str] = Field(default=None, alias='displayValue')

    @property
    def reported(self) -> Any:
        return self.value if self.value is not None else self.display_value


class BoxScoreTeam(FeedModel):
    team: BoxScoreTeamRef
    statistics: List[BoxScoreStat] = Field(default_factory=list)


class BoxScore(FeedModel):
    teams: List[BoxScoreTeam] = Field(default_factory=list)


class GameFeed(FeedModel):
    """Validated game payload."""
    id: FeedId
    season: Optional[SeasonInfo] = None
    week: Optional[WeekInfo] = None
    competitions: List[Competition] = Field(min_length=1)
    drives: Optional[Drives] = None
    box_score: Optional[BoxScore] = Field(
        default=None, validation_alias=AliasChoices('boxScore', 'boxscore', 'box_score')
    )

    @field_validator('week', mode='before')
    @classmethod
    def _bare_week_number(cls, value: Any) -> Any:
        # Some payloads carry the week as a plain number
        if isinstance(value, int) and not isinstance(value, bool):
            return {'number': value}
        return value

    @property
    def competition(self) -> Competition:
        return self.competitions[0]

    @property
    def all_drives(self) -> List[Drive]:
        return self.drives.previous if self.drives else []


def parse_game_feed(payload: Dict[str, Any], game_id: Optional[str] = None) -> GameFeed:
    """Validate a raw payload, raising FeedValidationError on a shape mismatch."""
    try:
        return GameFeed.model_validate(payload)
    except ValidationError as e:
        errors = e.errors(include_url=False)
        locations = ', '.join('.'.join(str(part) for part in error['loc']) for error in errors[:5])
        raise FeedValidationError(
            f"Invalid play-by-play payload for game {game_id}: {locations}",
            game_id, errors
        ) from e
