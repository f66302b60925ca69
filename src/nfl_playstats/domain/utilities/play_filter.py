# src/nfl_playstats/domain/utilities/play_filter.py

import logging
from dataclasses import dataclass
from typing import List, Optional
import pandas as pd

from ...config.constants import RED_ZONE_YARDLINE

logger = logging.getLogger(__name__)


@dataclass
class PlayFilters:
    """Advanced filters shared by the team stat views."""
    season: Optional[int] = None
    week: Optional[int] = None
    play_type: str = 'all'
    shotgun: bool = False
    no_huddle: bool = False
    offense_team: Optional[str] = None
    defense_team: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'season': self.season,
            'week': self.week,
            'playType': self.play_type,
            'shotgun': self.shotgun,
            'noHuddle': self.no_huddle,
        }


class PlayFilter:
    """Handles filtering of plays for different aggregation contexts."""

    def apply_filters(self, data: pd.DataFrame, filters: Optional[PlayFilters]) -> pd.DataFrame:
        """Apply season/week/team and advanced filters to a play frame."""
        if len(data) == 0 or filters is None:
            return data

        mask = pd.Series(True, index=data.index)

        if filters.season is not None and 'season' in data.columns:
            mask &= data['season'] == filters.season
        if filters.week is not None and 'week' in data.columns:
            mask &= data['week'] == filters.week
        if filters.offense_team:
            mask &= data['offense_team'] == filters.offense_team
        if filters.defense_team:
            mask &= data['defense_team'] == filters.defense_team
        if filters.shotgun:
            mask &= data['shotgun'].eq(True)
        if filters.no_huddle:
            mask &= data['no_huddle'].eq(True)

        if filters.play_type == 'pass':
            mask &= data['is_pass'].eq(True)
        elif filters.play_type == 'run':
            mask &= data['is_run'].eq(True)
        elif filters.play_type == 'sack':
            mask &= data['is_sack'].eq(True)

        filtered = data[mask].copy()
        logger.debug(f"Filtered plays from {len(data)} to {len(filtered)}")
        return filtered

    def get_pass_plays(self, data: pd.DataFrame) -> pd.DataFrame:
        """Get pass attempts (sacks and scrambles excluded)."""
        if len(data) == 0:
            return data
        return data[data['is_pass'].eq(True)]

    def get_run_plays(self, data: pd.DataFrame) -> pd.DataFrame:
        """Get designed runs and scrambles."""
        if len(data) == 0:
            return data
        return data[data['is_run'].eq(True)]

    def get_sack_plays(self, data: pd.DataFrame) -> pd.DataFrame:
        if len(data) == 0:
            return data
        return data[data['is_sack'].eq(True)]

    def get_third_down_attempts(self, data: pd.DataFrame) -> pd.DataFrame:
        """Get third down pass, run and sack plays."""
        if len(data) == 0:
            return data

        if not self._has_required_columns(data, ['down', 'is_pass', 'is_run', 'is_sack']):
            logger.warning("Missing required columns for third down filter")
            return data.iloc[0:0]

        scrimmage = data['is_pass'].eq(True) | data['is_run'].eq(True) | data['is_sack'].eq(True)
        return data[(pd.to_numeric(data['down'], errors='coerce') == 3) & scrimmage]

    def get_red_zone_plays(self, data: pd.DataFrame) -> pd.DataFrame:
        """Get pass and run plays snapped inside the opponent's 20."""
        if len(data) == 0:
            return data

        if 'yards_to_endzone' not in data.columns:
            logger.warning("Missing 'yards_to_endzone' column for red zone filter")
            return data.iloc[0:0]

        yards_to_endzone = pd.to_numeric(data['yards_to_endzone'], errors='coerce')
        return data[
            (yards_to_endzone <= RED_ZONE_YARDLINE) &
            (yards_to_endzone > 0) &
            (data['is_pass'].eq(True) | data['is_run'].eq(True))
        ]

    def get_special_teams_plays(self, data: pd.DataFrame, play_types: List[str]) -> pd.DataFrame:
        """Get plays whose tag is one of the given special-teams tags."""
        if len(data) == 0:
            return data
        return data[data['play_type'].isin(play_types)]

    def _has_required_columns(self, data: pd.DataFrame, required_columns: List[str]) -> bool:
        """Check if all required columns exist in the dataframe."""
        missing_columns = [col for col in required_columns if col not in data.columns]
        return len(missing_columns) == 0
