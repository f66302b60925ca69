"""Infrastructure layer - external adapters and implementations."""

from .factories import (
    create_play_repository, create_game_feed, create_import_game_use_case,
    create_team_stats_use_case, create_league_summary_use_case
)
