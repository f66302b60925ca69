# src/nfl_playstats/application/use_cases.py - Application use cases

import logging
from typing import Any, Dict, List, Optional, Tuple

from ..domain.entities import GroupBy
from ..domain.exceptions import DataAccessError
from ..domain.game_processor import GameProcessor
from ..domain.interfaces.repository import GameFeedInterface, PlayRepositoryInterface
from ..domain.team_aggregator import TeamAggregator
from ..domain.utilities import PlayFilter
from ..utils.error_handling import handle_service_errors
from .dto import ImportGameRequest, ImportGameResponse, TeamStatsRequest, TeamStatsResponse

logger = logging.getLogger(__name__)


class ImportGameUseCase:
    """Fetch one game from the feed and upsert its header, teams, box score and plays."""
    
    def __init__(self, feed: GameFeedInterface, repository: PlayRepositoryInterface,
                 processor: GameProcessor = None):
        self._feed = feed
        self._repository = repository
        self._processor = processor or GameProcessor()
    
    @handle_service_errors("import game")
    def execute(self, request: ImportGameRequest) -> ImportGameResponse:
        logger.info(f"Importing game {request.game_id}")
        
        feed_game = self._feed.fetch_game(request.game_id)
        imported = self._processor.process(feed_game)
        
        self._repository.upsert_game(imported.game)
        self._repository.upsert_teams(imported.teams)
        team_stats = self._repository.upsert_team_game_stats(imported.team_stats)
        written = self._repository.upsert_plays(imported.plays)
        
        game = imported.game
        return ImportGameResponse(
            game_id=game.game_id,
            season=game.season,
            week=game.week,
            phase=game.phase,
            plays_imported=written,
            plays_skipped=imported.skipped_plays,
            team_stats_imported=team_stats
        )


class GetTeamStatsUseCase:
    """Aggregate stored plays into offense, defense or special-teams rows."""
    
    def __init__(self, repository: PlayRepositoryInterface, aggregator: TeamAggregator = None):
        self._repository = repository
        self._aggregator = aggregator or TeamAggregator()
        self._play_filter = PlayFilter()
    
    def _resolve_season(self, requested: Optional[int]) -> Tuple[Optional[int], Dict[str, Any]]:
        """Requested season, else the latest one in the store."""
        if requested is not None:
            return requested, {}
        
        try:
            return self._repository.latest_season(), {}
        except DataAccessError as e:
            logger.warning(f"Season lookup failed, continuing without a season filter: {e}")
            return None, {'seasonLookupError': str(e)}
    
    @handle_service_errors("get team stats")
    def execute(self, request: TeamStatsRequest) -> TeamStatsResponse:
        season, meta = self._resolve_season(request.season)
        filters = request.to_filters(season)
        
        records = self._repository.fetch_plays(filters)
        frame = self._play_filter.apply_filters(self._aggregator.to_frame(records), filters)
        logger.info(f"Aggregating {len(frame)} plays for {request.side} ({request.group_by.value})")
        
        return TeamStatsResponse(
            rows=self._aggregate(frame, request, season),
            season=season,
            filters=filters,
            side=request.side,
            group_by=request.group_by,
            meta=meta
        )
    
    def _aggregate(self, frame, request: TeamStatsRequest, season: Optional[int]) -> List[Any]:
        if request.side == 'defense':
            return self._aggregator.aggregate_defense(frame, request.group_by)
        if request.side == 'special':
            return self._aggregator.aggregate_special_teams(frame, request.group_by)
        
        if request.team and request.group_by is GroupBy.TEAM:
            # A single-team summary always has a row, even without plays
            return [self._aggregator.summarize_team(frame, request.team, season)]
        return self._aggregator.aggregate_offense(frame, request.group_by)


class GetLeagueSummaryUseCase:
    """League-wide offensive table ordered by total yards."""
    
    def __init__(self, repository: PlayRepositoryInterface, aggregator: TeamAggregator = None):
        self._aggregator = aggregator or TeamAggregator()
        self._team_stats = GetTeamStatsUseCase(repository, self._aggregator)
    
    @handle_service_errors("get league summary")
    def execute(self, season: Optional[int] = None, week: Optional[int] = None,
                play_type: str = 'all', shotgun: bool = False,
                no_huddle: bool = False) -> TeamStatsResponse:
        request = TeamStatsRequest(
            season=season,
            week=week,
            group_by=GroupBy.TEAM,
            side='offense',
            play_type=play_type,
            shotgun=shotgun,
            no_huddle=no_huddle
        )
        response = self._team_stats.execute(request)
        response.rows = self._aggregator.sort_league_summary(response.rows)
        return response
