"""Domain layer - business entities and core logic."""

# Core entities
from .entities import (
    Play, Game, PlayType, SeasonPhase, GroupBy,
    TeamAggregateRow, DefenseAggregateRow, SpecialTeamsAggregateRow
)

# Domain exceptions
from .exceptions import (
    PlayStatsException,
    DataAccessError, DataNotFoundError,
    DataValidationError, FeedValidationError, UseCaseError
)

# Classification and aggregation
from .play_classifier import PlayClassifier, classify_play_type, compute_success
from .team_aggregator import TeamAggregator, safe_divide
from .game_processor import GameProcessor, GameImport

# Validation
from .validation import NFLValidator, validate_positive_integer
