# src/nfl_playstats/domain/entities.py - Core domain entities

from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping, Optional
from enum import Enum


class PlayType(Enum):
    """Closed vocabulary of play-type tags produced by the classifier."""
    PUNT = "punt"
    KICKOFF_ONSIDE = "kickoff-onside"
    KICKOFF = "kickoff"
    FIELD_GOAL = "field-goal"
    EXTRA_POINT = "extra-point"
    TWO_POINT_ATTEMPT = "two-point-attempt"
    QB_SPIKE = "qb-spike"
    QB_KNEEL = "qb-kneel"
    PENALTY_OFFENSE = "penalty-offense"
    PENALTY_DEFENSE = "penalty-defense"
    PENALTY = "penalty"
    PASS_SACK = "pass-sack"
    QB_SCRAMBLE = "qb-scramble"
    PASS_SCREEN_LEFT = "pass-screen-left"
    PASS_SCREEN_RIGHT = "pass-screen-right"
    PASS_SCREEN_MIDDLE = "pass-screen-middle"
    PASS_SHORT_LEFT = "pass-short-left"
    PASS_SHORT_RIGHT = "pass-short-right"
    PASS_SHORT_MIDDLE = "pass-short-middle"
    PASS_DEEP_LEFT = "pass-deep-left"
    PASS_DEEP_RIGHT = "pass-deep-right"
    PASS_DEEP_MIDDLE = "pass-deep-middle"
    RUSH_LEFT_END = "rush-left-end"
    RUSH_LEFT_TACKLE = "rush-left-tackle"
    RUSH_LEFT_GUARD = "rush-left-guard"
    RUSH_RIGHT_END = "rush-right-end"
    RUSH_RIGHT_TACKLE = "rush-right-tackle"
    RUSH_RIGHT_GUARD = "rush-right-guard"
    RUSH_MIDDLE = "rush-middle"
    RUSH_RIGHT = "rush-right"
    RUSH_LEFT = "rush-left"
    RUSH = "rush"
    OTHER = "other"

    @classmethod
    def values(cls) -> frozenset:
        return frozenset(member.value for member in cls)

    @property
    def is_pass(self) -> bool:
        """Pass attempts; sacks and scrambles are counted separately."""
        return self.value.startswith(("pass-short-", "pass-deep-", "pass-screen-"))

    @property
    def is_run(self) -> bool:
        return self.value.startswith("rush") or self is PlayType.QB_SCRAMBLE


class SeasonPhase(Enum):
    PRESEASON = "PRE"
    REGULAR = "REG"
    PLAYOFF = "POST"

    @classmethod
    def from_season_type(cls, season_type: Optional[int]) -> Optional['SeasonPhase']:
        """Map the feed's numeric season type (1 pre, 2 regular, 3 post)."""
        return _SEASON_TYPES.get(season_type)


_SEASON_TYPES = {
    1: SeasonPhase.PRESEASON,
    2: SeasonPhase.REGULAR,
    3: SeasonPhase.PLAYOFF,
}


class GroupBy(Enum):
    """Grouping key selectors for team aggregation."""
    TEAM = "team"
    TEAM_WEEK = "team_week"
    TEAM_PHASE = "team_phase"


# Domain flag -> persisted column name in the plays table
FLAG_COLUMNS = {
    'is_pass': 'calc_is_pass',
    'is_run': 'calc_is_run',
    'is_sack': 'calc_is_sack',
    'is_scramble': 'calc_is_scramble',
    'is_first_down': 'calc_is_first_down',
    'is_interception': 'calc_is_int',
    'is_stop': 'calc_stop',
    'shotgun': 'calc_shotgun',
    'no_huddle': 'calc_no_huddle',
}


def _to_int(value: Any) -> Optional[int]:
    """Coerce store/feed values to int, None when blank or not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text == "":
        return None
    try:
        return int(float(text))
    except (ValueError, OverflowError):
        return None


def _to_bool(value: Any) -> Optional[bool]:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "t", "yes", "y"):
        return True
    if text in ("0", "false", "f", "no", "n"):
        return False
    return None


def _to_str(value: Any) -> Optional[str]:
    if value is None or (isinstance(value, float) and value != value):
        return None
    text = str(value).strip()
    return text or None


@dataclass
class Play:
    """One offensive snap, classified.

    ``success`` stays None unless down, distance and yards are all known.
    """
    game_id: Optional[int]
    play_id: Optional[int]
    description: str = ""
    down: Optional[int] = None
    distance: Optional[int] = None
    result_yards: Optional[int] = None
    offense_team: Optional[str] = None
    defense_team: Optional[str] = None
    play_type: str = PlayType.OTHER.value
    success: Optional[bool] = None
    shotgun: bool = False
    no_huddle: bool = False
    is_pass: bool = False
    is_run: bool = False
    is_sack: bool = False
    is_scramble: bool = False
    is_first_down: bool = False
    is_interception: bool = False
    is_stop: bool = False

    # Game context carried over from the feed
    season: Optional[int] = None
    week: Optional[int] = None
    phase: Optional[str] = None
    quarter: Optional[int] = None
    clock: Optional[str] = None
    sequence_number: Optional[int] = None
    yards_to_endzone: Optional[int] = None
    drive_id: Optional[str] = None
    scoring_play: Optional[bool] = None
    game_date: Optional[str] = None

    def to_record(self) -> Dict[str, Any]:
        """Row layout of the plays table."""
        record = asdict(self)
        for flag, column in FLAG_COLUMNS.items():
            record[column] = record.pop(flag)
        return record

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> 'Play':
        """Build a Play from a stored row; missing keys become None."""
        # Embedded ``games!inner(season, week)`` join
        games = record.get('games') or {}
        if isinstance(games, list):
            games = games[0] if games else {}

        def pick(*keys):
            for key in keys:
                if record.get(key) is not None:
                    return record[key]
            return None

        flags = {
            flag: bool(_to_bool(pick(column, flag)))
            for flag, column in FLAG_COLUMNS.items()
        }
        play_type = _to_str(pick('play_type'))
        season = _to_int(pick('season'))
        if season is None:
            season = _to_int(games.get('season'))
        week = _to_int(pick('week'))
        if week is None:
            week = _to_int(games.get('week'))

        return cls(
            game_id=_to_int(pick('game_id')),
            play_id=_to_int(pick('play_id')),
            description=_to_str(pick('description')) or "",
            down=_to_int(pick('down')),
            distance=_to_int(pick('distance')),
            result_yards=_to_int(pick('result_yards', 'yards_gained')),
            offense_team=_to_str(pick('offense_team')),
            defense_team=_to_str(pick('defense_team')),
            play_type=play_type if play_type in PlayType.values() else PlayType.OTHER.value,
            success=_to_bool(pick('success')),
            season=season,
            week=week,
            phase=_to_str(pick('phase')),
            quarter=_to_int(pick('quarter', 'qtr')),
            clock=_to_str(pick('clock')),
            sequence_number=_to_int(pick('sequence_number')),
            yards_to_endzone=_to_int(pick('yards_to_endzone')),
            drive_id=_to_str(pick('drive_id')),
            scoring_play=_to_bool(pick('scoring_play')),
            game_date=_to_str(pick('game_date')),
            **flags
        )


@dataclass
class Game:
    """Game header upserted alongside its plays."""
    game_id: str
    season: Optional[int]
    week: Optional[int]
    phase: Optional[str]
    home_team: Optional[str]
    away_team: Optional[str]
    home_score: int = 0
    away_score: int = 0
    game_date: Optional[str] = None

    def to_record(self) -> Dict[str, Any]:
        return {
            'id': self.game_id,
            'season': self.season,
            'week': self.week,
            'season_type': self.phase,
            'home_team_id': self.home_team,
            'away_team_id': self.away_team,
            'home_score': self.home_score,
            'away_score': self.away_score,
            'date': self.game_date,
        }


@dataclass
class Team:
    """Team reference row, keyed by abbreviation."""
    team_id: str
    feed_team_id: Optional[str] = None
    name: Optional[str] = None
    display_name: Optional[str] = None
    location: Optional[str] = None
    logo: Optional[str] = None
    color: Optional[str] = None
    alternate_color: Optional[str] = None

    def to_record(self) -> Dict[str, Any]:
        return {
            'id': self.team_id,
            'espn_team_id': self.feed_team_id,
            'name': self.name,
            'display_name': self.display_name,
            'abbreviation': self.team_id,
            'location': self.location,
            'logo': self.logo,
            'color': self.color,
            'alternate_color': self.alternate_color,
        }


@dataclass
class TeamGameStats:
    """One team's box-score line for a game.

    Stat values are stored as the feed reports them; time of possession
    arrives as ``"MM:SS"`` text.
    """
    game_id: str
    team_id: str
    home_away: str
    points: int = 0
    first_downs: Any = None
    total_yards: Any = None
    passing_yards: Any = None
    rushing_yards: Any = None
    turnovers: Any = None
    sacks: Any = None
    time_of_possession: Any = None

    def to_record(self) -> Dict[str, Any]:
        return asdict(self)


class _AggregateRow:
    """Shared serialization for aggregate rows."""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class TeamAggregateRow(_AggregateRow):
    """Offensive summary for one team x grouping bucket."""
    team_id: str
    season: Optional[int] = None
    week: Optional[int] = None
    phase: Optional[str] = None
    group_label: Optional[str] = None

    games: int = 0
    plays: int = 0
    pass_plays: int = 0
    run_plays: int = 0
    sacks: int = 0
    scrambles: int = 0
    dropbacks: int = 0
    interceptions: int = 0
    first_downs: int = 0
    successful_plays: int = 0
    total_yards: int = 0
    pass_yards: int = 0
    rush_yards: int = 0
    explosive_pass: int = 0
    explosive_run: int = 0
    third_down_att: int = 0
    third_down_conv: int = 0
    red_zone_plays: int = 0
    red_zone_successes: int = 0
    shotgun_plays: int = 0
    no_huddle_plays: int = 0

    # Rates are fractions in [0, 1]; zero when the denominator is zero
    sack_rate: float = 0.0
    success_rate: float = 0.0
    yards_per_play: float = 0.0
    first_down_rate: float = 0.0
    shotgun_rate: float = 0.0
    no_huddle_rate: float = 0.0
    third_down_pct: float = 0.0
    red_zone_success_rate: float = 0.0
    explosive_rate: float = 0.0
    yards_per_game: float = 0.0
    plays_per_game: float = 0.0

    @classmethod
    def empty(cls, team_id: str, season: Optional[int] = None) -> 'TeamAggregateRow':
        """Create an empty row with all zero values.

        Used when a team has no plays in the requested scope.
        """
        return cls(team_id=team_id, season=season, group_label=team_id)


@dataclass
class DefenseAggregateRow(_AggregateRow):
    """Defensive summary for one team x grouping bucket."""
    team_id: str
    season: Optional[int] = None
    week: Optional[int] = None
    phase: Optional[str] = None
    group_label: Optional[str] = None

    games: int = 0
    plays_defended: int = 0
    pass_plays_defended: int = 0
    run_plays_defended: int = 0
    sacks_made: int = 0
    interceptions: int = 0
    stops: int = 0
    yards_allowed: int = 0
    explosive_allowed_pass: int = 0
    explosive_allowed_run: int = 0
    # Sack count standing in for pressures; no QB-hit data is available
    pressure_proxy: int = 0
    pressure_proxy_is_approximate: bool = True

    sack_rate: float = 0.0
    stop_rate: float = 0.0
    yards_per_play_allowed: float = 0.0


@dataclass
class SpecialTeamsAggregateRow(_AggregateRow):
    """Special-teams volume for one team x grouping bucket."""
    team_id: str
    season: Optional[int] = None
    week: Optional[int] = None
    phase: Optional[str] = None
    group_label: Optional[str] = None

    plays: int = 0
    punts: int = 0
    kickoffs: int = 0
    field_goals: int = 0
    extra_points: int = 0
    two_point_attempts: int = 0
