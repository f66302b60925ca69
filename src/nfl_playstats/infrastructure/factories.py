# src/nfl_playstats/infrastructure/factories.py - Factory functions for dependency creation

import logging
from typing import Optional

from ..config.settings import Settings
from ..domain.game_processor import GameProcessor
from ..domain.team_aggregator import TeamAggregator
from .database import SupabaseClient, SupabaseQueryExecutor, SupabasePlayRepository
from .feed import GameFeedClient

logger = logging.getLogger(__name__)


def create_play_repository(settings: Optional[Settings] = None) -> SupabasePlayRepository:
    """Create the Supabase-backed play repository."""
    settings = settings or Settings.from_env()
    client = SupabaseClient(settings.supabase_url, settings.supabase_key)
    executor = SupabaseQueryExecutor(client, timeout=settings.request_timeout)
    return SupabasePlayRepository(executor)


def create_game_feed(settings: Optional[Settings] = None) -> GameFeedClient:
    settings = settings or Settings.from_env()
    return GameFeedClient(
        api_key=settings.rapidapi_key,
        host=settings.rapidapi_host,
        timeout=settings.request_timeout
    )


def create_import_game_use_case(settings: Optional[Settings] = None):
    """Create the game import use case with feed and store adapters."""
    from ..application.use_cases import ImportGameUseCase
    
    settings = settings or Settings.from_env()
    logger.info("Created import game use case")
    return ImportGameUseCase(
        feed=create_game_feed(settings),
        repository=create_play_repository(settings),
        processor=GameProcessor()
    )


def create_team_stats_use_case(settings: Optional[Settings] = None):
    from ..application.use_cases import GetTeamStatsUseCase
    
    return GetTeamStatsUseCase(create_play_repository(settings), TeamAggregator())


def create_league_summary_use_case(settings: Optional[Settings] = None):
    from ..application.use_cases import GetLeagueSummaryUseCase
    
    return GetLeagueSummaryUseCase(create_play_repository(settings), TeamAggregator())
