"""Application layer - Data Transfer Objects and Use Cases."""

# Data Transfer Objects
from .dto import (
    ImportGameRequest, ImportGameResponse, TeamStatsRequest, TeamStatsResponse
)

# Use cases
from .use_cases import (
    ImportGameUseCase, GetTeamStatsUseCase, GetLeagueSummaryUseCase
)
