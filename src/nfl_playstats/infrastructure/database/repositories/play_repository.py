# src/nfl_playstats/infrastructure/database/repositories/play_repository.py

import logging
from typing import Any, Dict, List, Optional

from ....config.constants import (
    PLAYS_TABLE, GAMES_TABLE, TEAMS_TABLE, TEAM_GAME_STATS_TABLE,
    PLAYS_CONFLICT_KEY, GAMES_CONFLICT_KEY, TEAMS_CONFLICT_KEY, TEAM_GAME_STATS_CONFLICT_KEY
)
from ....domain.entities import Game, Play, Team, TeamGameStats, FLAG_COLUMNS
from ....domain.interfaces.repository import PlayRepositoryInterface
from ....domain.utilities import PlayFilters
from ....utils.error_handling import handle_data_access_errors
from ..query_executor import SupabaseQueryExecutor

logger = logging.getLogger(__name__)

# Embedded game join used to filter plays by season and week
PLAY_COLUMNS = '*,games!inner(season,week)'

PLAY_TYPE_COLUMNS = {
    'pass': FLAG_COLUMNS['is_pass'],
    'run': FLAG_COLUMNS['is_run'],
    'sack': FLAG_COLUMNS['is_sack'],
}


class SupabasePlayRepository(PlayRepositoryInterface):
    """Play store backed by the Supabase ``nfl_plays``, ``games``, ``teams`` and ``team_game_stats`` tables."""
    
    def __init__(self, query_executor: SupabaseQueryExecutor):
        self._query_executor = query_executor
    
    @handle_data_access_errors("upsert game")
    def upsert_game(self, game: Game) -> None:
        self._query_executor.upsert(GAMES_TABLE, [game.to_record()], GAMES_CONFLICT_KEY)
        logger.info(f"Upserted game {game.game_id}")
    
    @handle_data_access_errors("upsert teams")
    def upsert_teams(self, teams: List[Team]) -> int:
        records = {team.team_id: team.to_record() for team in teams}
        return self._query_executor.upsert(TEAMS_TABLE, list(records.values()), TEAMS_CONFLICT_KEY)
    
    @handle_data_access_errors("upsert team game stats")
    def upsert_team_game_stats(self, stats: List[TeamGameStats]) -> int:
        records = {(line.game_id, line.team_id): line.to_record() for line in stats}
        written = self._query_executor.upsert(
            TEAM_GAME_STATS_TABLE, list(records.values()), TEAM_GAME_STATS_CONFLICT_KEY
        )
        logger.info(f"Upserted {written} team box-score lines")
        return written
    
    @handle_data_access_errors("upsert plays")
    def upsert_plays(self, plays: List[Play]) -> int:
        """Upsert plays keyed by (game_id, play_id); re-importing a game overwrites its rows."""
        # One upsert statement cannot touch the same key twice; the last copy wins
        records = {}
        for play in plays:
            records[(play.game_id, play.play_id)] = play.to_record()
        
        if len(records) < len(plays):
            logger.warning(f"Dropped {len(plays) - len(records)} duplicate plays before upsert")
        
        written = self._query_executor.upsert(PLAYS_TABLE, list(records.values()), PLAYS_CONFLICT_KEY)
        logger.info(f"Upserted {written} plays")
        return written
    
    def _build_filter_params(self, filters: PlayFilters) -> Dict[str, Any]:
        """Build equality filters for the plays query."""
        params = {
            'games.season': filters.season,
            'games.week': filters.week,
            'offense_team': filters.offense_team,
            'defense_team': filters.defense_team,
        }
        if filters.shotgun:
            params[FLAG_COLUMNS['shotgun']] = True
        if filters.no_huddle:
            params[FLAG_COLUMNS['no_huddle']] = True
        if filters.play_type in PLAY_TYPE_COLUMNS:
            params[PLAY_TYPE_COLUMNS[filters.play_type]] = True
        return params
    
    @handle_data_access_errors("fetch plays")
    def fetch_plays(self, filters: PlayFilters) -> List[Dict[str, Any]]:
        rows = self._query_executor.select_all(
            PLAYS_TABLE,
            columns=PLAY_COLUMNS,
            filters=self._build_filter_params(filters),
            order='game_id,play_id'
        )
        
        if not rows:
            logger.info(f"No plays found for filters {filters.to_dict()}")
        return rows
    
    @handle_data_access_errors("resolve latest season")
    def latest_season(self) -> Optional[int]:
        rows = self._query_executor.select(
            GAMES_TABLE, columns='season', order='season.desc.nullslast', limit=1
        )
        if not rows or rows[0].get('season') is None:
            return None
        return int(rows[0]['season'])
