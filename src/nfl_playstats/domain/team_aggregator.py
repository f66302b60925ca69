# src/nfl_playstats/domain/team_aggregator.py - Team aggregation over classified plays

import logging
from dataclasses import asdict, fields
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union
import pandas as pd

from .entities import (
    Play, PlayType, GroupBy, TeamAggregateRow, DefenseAggregateRow,
    SpecialTeamsAggregateRow
)
from .play_classifier import PlayClassifier
from .utilities import PlayFilter
from ..config.constants import EXPLOSIVE_PLAY_YARDS, UNKNOWN_TEAM

logger = logging.getLogger(__name__)

PLAY_COLUMNS = [f.name for f in fields(Play)]

PlayInput = Union[Play, Mapping[str, Any], None]


def safe_divide(numerator, denominator) -> float:
    """Zero-safe division: 0.0 instead of an error or NaN when the denominator is 0."""
    return float(numerator) / float(denominator) if denominator > 0 else 0.0


def _is_missing(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _optional_int(value) -> Optional[int]:
    return None if _is_missing(value) else int(value)


def _team_key(value) -> str:
    """Grouping key for a team column; missing teams land in the unknown bucket."""
    return UNKNOWN_TEAM if _is_missing(value) else str(value)


def _bucket_label(team: str, week, phase, group_by: GroupBy) -> str:
    if group_by is GroupBy.TEAM_WEEK:
        week = _optional_int(week)
        return f"{team} week {week if week is not None else UNKNOWN_TEAM}"
    if group_by is GroupBy.TEAM_PHASE:
        return f"{team} {phase if not _is_missing(phase) else UNKNOWN_TEAM}"
    return team


class TeamAggregator:
    """Aggregates classified plays into per-team summary rows.

    Grouping is a plain key -> bucket partition. Groups come back in the order
    their first play appeared, not sorted; use sort_league_summary for the
    league view ordering. Rows with a missing team are aggregated into an
    ``unknown`` bucket rather than dropped.
    """

    def __init__(self):
        self._play_filter = PlayFilter()

    def _safe_sum(self, series, default=0):
        """Safely sum a pandas series with default."""
        values = pd.to_numeric(series, errors='coerce')
        return int(values.sum()) if len(values) > 0 else default

    def _count(self, mask) -> int:
        return int(mask.sum()) if len(mask) > 0 else 0

    # === Input normalization ===

    def to_frame(self, plays: Union[pd.DataFrame, Iterable[PlayInput]]) -> pd.DataFrame:
        """Normalize Play objects or stored rows into a play frame."""
        if isinstance(plays, pd.DataFrame):
            records = plays.to_dict('records')
        else:
            records = list(plays)

        normalized = [asdict(self._to_play(record)) for record in records]
        frame = pd.DataFrame(normalized, columns=PLAY_COLUMNS)

        if len(frame) > 0:
            # Stored rows may lack a success value
            missing_success = frame['success'].isna()
            if missing_success.any():
                backfilled = PlayClassifier.compute_success_series(frame[missing_success])
                frame['success'] = frame['success'].astype(object)
                frame.loc[missing_success, 'success'] = backfilled

        return frame

    @staticmethod
    def _to_play(record: PlayInput) -> Play:
        if isinstance(record, Play):
            return record
        return Play.from_record(record or {})

    # === Grouping ===

    def group_plays(self, plays: Iterable[PlayInput], group_by: GroupBy = GroupBy.TEAM,
                    team_field: str = 'offense_team') -> Dict[str, List[Play]]:
        """Partition plays into buckets keyed by their group label."""
        buckets: Dict[str, List[Play]] = {}
        for record in plays:
            play = self._to_play(record)
            team = _team_key(getattr(play, team_field))
            label = _bucket_label(team, play.week, play.phase, group_by)
            buckets.setdefault(label, []).append(play)
        return buckets

    def _grouped(self, frame: pd.DataFrame, group_by: GroupBy, team_field: str):
        frame = frame.copy()
        frame['_team_key'] = frame[team_field].map(_team_key)
        frame['_group_label'] = [
            _bucket_label(team, week, phase, group_by)
            for team, week, phase in zip(frame['_team_key'], frame['week'], frame['phase'])
        ]
        return frame.groupby('_group_label', sort=False)

    def _bucket_keys(self, label: str, bucket: pd.DataFrame, group_by: GroupBy) -> Dict[str, Any]:
        first = bucket.iloc[0]
        return {
            'team_id': first['_team_key'],
            'season': _optional_int(first['season']),
            'week': _optional_int(first['week']) if group_by is GroupBy.TEAM_WEEK else None,
            'phase': (None if _is_missing(first['phase']) else first['phase'])
            if group_by is GroupBy.TEAM_PHASE else None,
            'group_label': label,
        }

    # === Offense ===

    def aggregate_offense(self, plays, group_by: GroupBy = GroupBy.TEAM) -> List[TeamAggregateRow]:
        """One offensive summary row per team bucket (keyed on offense_team)."""
        return self._offense_rows(self.to_frame(plays), group_by)

    def _offense_rows(self, frame: pd.DataFrame, group_by: GroupBy) -> List[TeamAggregateRow]:
        if len(frame) == 0:
            return []

        rows = [
            self._build_offense_row(self._bucket_keys(label, bucket, group_by), bucket)
            for label, bucket in self._grouped(frame, group_by, 'offense_team')
        ]
        logger.debug(f"Aggregated {len(frame)} plays into {len(rows)} offense rows")
        return rows

    def _build_offense_row(self, keys: Dict[str, Any], bucket: pd.DataFrame) -> TeamAggregateRow:
        yards = pd.to_numeric(bucket['result_yards'], errors='coerce')
        pass_plays = self._play_filter.get_pass_plays(bucket)
        run_plays = self._play_filter.get_run_plays(bucket)
        sack_plays = self._play_filter.get_sack_plays(bucket)
        third_downs = self._play_filter.get_third_down_attempts(bucket)
        red_zone = self._play_filter.get_red_zone_plays(bucket)

        plays = len(bucket)
        games = int(bucket['game_id'].dropna().nunique())
        sacks = len(sack_plays)
        dropbacks = len(pass_plays) + sacks
        successful = self._count(bucket['success'].eq(True))
        first_downs = self._count(bucket['is_first_down'].eq(True))
        total_yards = self._safe_sum(yards)
        explosive_pass = self._count(yards[pass_plays.index] >= EXPLOSIVE_PLAY_YARDS)
        explosive_run = self._count(yards[run_plays.index] >= EXPLOSIVE_PLAY_YARDS)
        third_down_conv = self._count(third_downs['is_first_down'].eq(True))
        red_zone_successes = self._count(red_zone['success'].eq(True))
        shotgun_plays = self._count(bucket['shotgun'].eq(True))
        no_huddle_plays = self._count(bucket['no_huddle'].eq(True))

        return TeamAggregateRow(
            **keys,
            games=games,
            plays=plays,
            pass_plays=len(pass_plays),
            run_plays=len(run_plays),
            sacks=sacks,
            scrambles=self._count(bucket['is_scramble'].eq(True)),
            dropbacks=dropbacks,
            interceptions=self._count(bucket['is_interception'].eq(True)),
            first_downs=first_downs,
            successful_plays=successful,
            total_yards=total_yards,
            pass_yards=self._safe_sum(yards[pass_plays.index]),
            rush_yards=self._safe_sum(yards[run_plays.index]),
            explosive_pass=explosive_pass,
            explosive_run=explosive_run,
            third_down_att=len(third_downs),
            third_down_conv=third_down_conv,
            red_zone_plays=len(red_zone),
            red_zone_successes=red_zone_successes,
            shotgun_plays=shotgun_plays,
            no_huddle_plays=no_huddle_plays,
            sack_rate=safe_divide(sacks, dropbacks),
            success_rate=safe_divide(successful, plays),
            yards_per_play=safe_divide(total_yards, plays),
            first_down_rate=safe_divide(first_downs, plays),
            shotgun_rate=safe_divide(shotgun_plays, plays),
            no_huddle_rate=safe_divide(no_huddle_plays, plays),
            third_down_pct=safe_divide(third_down_conv, len(third_downs)),
            red_zone_success_rate=safe_divide(red_zone_successes, len(red_zone)),
            explosive_rate=safe_divide(explosive_pass + explosive_run, len(pass_plays) + len(run_plays)),
            yards_per_game=safe_divide(total_yards, games),
            plays_per_game=safe_divide(plays, games)
        )

    def summarize_team(self, plays, team_id: str, season: Optional[int] = None) -> TeamAggregateRow:
        """Single offensive row for one team; an all-zero row when it has no plays."""
        frame = self.to_frame(plays)
        if len(frame) > 0:
            frame = frame[frame['offense_team'].map(_team_key) == team_id]

        if len(frame) == 0:
            logger.info(f"No plays found for {team_id}, returning empty summary")
            return TeamAggregateRow.empty(team_id, season)

        row = self._offense_rows(frame, GroupBy.TEAM)[0]
        if season is not None:
            row.season = season
        return row

    # === Defense ===

    def aggregate_defense(self, plays, group_by: GroupBy = GroupBy.TEAM) -> List[DefenseAggregateRow]:
        """One defensive summary row per team bucket (keyed on defense_team)."""
        frame = self.to_frame(plays)
        if len(frame) == 0:
            return []

        rows = [
            self._build_defense_row(self._bucket_keys(label, bucket, group_by), bucket)
            for label, bucket in self._grouped(frame, group_by, 'defense_team')
        ]
        logger.debug(f"Aggregated {len(frame)} plays into {len(rows)} defense rows")
        return rows

    def _build_defense_row(self, keys: Dict[str, Any], bucket: pd.DataFrame) -> DefenseAggregateRow:
        yards = pd.to_numeric(bucket['result_yards'], errors='coerce')
        pass_plays = self._play_filter.get_pass_plays(bucket)
        run_plays = self._play_filter.get_run_plays(bucket)

        plays = len(bucket)
        sacks = len(self._play_filter.get_sack_plays(bucket))
        stops = self._count(bucket['is_stop'].eq(True))
        yards_allowed = self._safe_sum(yards)

        return DefenseAggregateRow(
            **keys,
            games=int(bucket['game_id'].dropna().nunique()),
            plays_defended=plays,
            pass_plays_defended=len(pass_plays),
            run_plays_defended=len(run_plays),
            sacks_made=sacks,
            interceptions=self._count(bucket['is_interception'].eq(True)),
            stops=stops,
            yards_allowed=yards_allowed,
            explosive_allowed_pass=self._count(yards[pass_plays.index] >= EXPLOSIVE_PLAY_YARDS),
            explosive_allowed_run=self._count(yards[run_plays.index] >= EXPLOSIVE_PLAY_YARDS),
            pressure_proxy=sacks,
            sack_rate=safe_divide(sacks, len(pass_plays) + sacks),
            stop_rate=safe_divide(stops, plays),
            yards_per_play_allowed=safe_divide(yards_allowed, plays)
        )

    # === Special teams ===

    def aggregate_special_teams(self, plays, group_by: GroupBy = GroupBy.TEAM) -> List[SpecialTeamsAggregateRow]:
        """Special-teams play volume per team bucket (keyed on offense_team)."""
        frame = self.to_frame(plays)
        if len(frame) == 0:
            return []

        rows = []
        for label, bucket in self._grouped(frame, group_by, 'offense_team'):
            select = self._play_filter.get_special_teams_plays
            rows.append(SpecialTeamsAggregateRow(
                **self._bucket_keys(label, bucket, group_by),
                plays=len(bucket),
                punts=len(select(bucket, [PlayType.PUNT.value])),
                kickoffs=len(select(bucket, [PlayType.KICKOFF.value, PlayType.KICKOFF_ONSIDE.value])),
                field_goals=len(select(bucket, [PlayType.FIELD_GOAL.value])),
                extra_points=len(select(bucket, [PlayType.EXTRA_POINT.value])),
                two_point_attempts=len(select(bucket, [PlayType.TWO_POINT_ATTEMPT.value]))
            ))
        return rows

    # === Ordering ===

    @staticmethod
    def sort_league_summary(rows: List[TeamAggregateRow]) -> List[TeamAggregateRow]:
        """League view order: total yards descending, then team id ascending."""
        return sorted(rows, key=lambda row: (-row.total_yards, row.team_id))
