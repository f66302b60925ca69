# src/nfl_playstats/application/dto.py - Data Transfer Objects with input validation

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union
from ..domain.entities import GroupBy
from ..domain.exceptions import DataValidationError
from ..domain.utilities import PlayFilters
from ..domain.validation import NFLValidator


@dataclass
class ImportGameRequest:
    """Request to import one game from the play-by-play feed."""
    game_id: str
    
    def __post_init__(self):
        self._validate_game_id()
    
    def _validate_game_id(self):
        """Feed game ids are numeric strings."""
        if self.game_id is None or isinstance(self.game_id, bool):
            raise DataValidationError("Missing gameId", 'game_id', self.game_id)
        
        normalized = str(self.game_id).strip()
        if not normalized.isdigit():
            raise DataValidationError("gameId must be numeric", 'game_id', self.game_id)
        self.game_id = normalized


@dataclass
class ImportGameResponse:
    game_id: str
    season: Optional[int]
    week: Optional[int]
    phase: Optional[str]
    plays_imported: int
    plays_skipped: int = 0
    team_stats_imported: int = 0
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            'gameId': self.game_id,
            'season': self.season,
            'week': self.week,
            'phase': self.phase,
            'playsImported': self.plays_imported,
            'playsSkipped': self.plays_skipped,
            'teamStatsImported': self.team_stats_imported,
        }


@dataclass
class TeamStatsRequest:
    """Request for team aggregates with the advanced filters."""
    season: Optional[int] = None
    week: Optional[int] = None
    team: Optional[str] = None
    group_by: Union[GroupBy, str, None] = GroupBy.TEAM
    side: str = 'offense'
    play_type: Optional[str] = 'all'
    shotgun: bool = False
    no_huddle: bool = False
    
    def __post_init__(self):
        """Validate input data after initialization."""
        if self.season is not None:
            self.season = NFLValidator.validate_season_year(self.season, "season")
        if self.week is not None:
            self.week = NFLValidator.validate_week(self.week, "week")
        if self.team is not None:
            self.team = NFLValidator.validate_team_abbreviation(self.team, "team")
        self.group_by = NFLValidator.validate_group_by(self.group_by, "group_by")
        self.side = NFLValidator.validate_side(self.side, "side")
        self.play_type = NFLValidator.validate_play_type_filter(self.play_type, "play_type")
        self._validate_flags()
    
    def _validate_flags(self):
        for name in ('shotgun', 'no_huddle'):
            if not isinstance(getattr(self, name), bool):
                raise DataValidationError(f"{name} must be a boolean", name, getattr(self, name))
    
    def to_filters(self, season: Optional[int]) -> PlayFilters:
        """Play filters for a resolved season; the team selects the side's team column."""
        on_defense = self.side == 'defense'
        return PlayFilters(
            season=season,
            week=self.week,
            play_type=self.play_type,
            shotgun=self.shotgun,
            no_huddle=self.no_huddle,
            offense_team=None if on_defense else self.team,
            defense_team=self.team if on_defense else None
        )


@dataclass
class TeamStatsResponse:
    """Aggregate rows plus the resolved request context."""
    rows: List[Any]
    season: Optional[int]
    filters: PlayFilters
    side: str
    group_by: GroupBy
    meta: Dict[str, Any] = field(default_factory=dict)
    
    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready payload; ``_meta`` appears only when there is something to report."""
        result = {
            'side': self.side,
            'groupBy': self.group_by.value,
            'season': self.season,
            'filters': self.filters.to_dict(),
            'rows': [row.to_dict() for row in self.rows],
        }
        if self.meta:
            result['_meta'] = dict(self.meta)
        return result
