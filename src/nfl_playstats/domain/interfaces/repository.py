# src/nfl_playstats/domain/interfaces/repository.py - Repository interfaces for the domain layer

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..entities import Game, Play, Team, TeamGameStats
from ..utilities import PlayFilters


class PlayRepositoryInterface(ABC):
    """Data-access interface injected into the use cases."""
    
    @abstractmethod
    def upsert_game(self, game: Game) -> None:
        pass
    
    @abstractmethod
    def upsert_teams(self, teams: List[Team]) -> int:
        """Insert or refresh team reference rows keyed by abbreviation."""
        pass
    
    @abstractmethod
    def upsert_team_game_stats(self, stats: List[TeamGameStats]) -> int:
        """Insert or overwrite box-score lines keyed by (game_id, team_id)."""
        pass
    
    @abstractmethod
    def upsert_plays(self, plays: List[Play]) -> int:
        """Insert or overwrite plays keyed by (game_id, play_id); returns rows written."""
        pass
    
    @abstractmethod
    def fetch_plays(self, filters: PlayFilters) -> List[Dict[str, Any]]:
        """Stored play rows matching the filters."""
        pass
    
    @abstractmethod
    def latest_season(self) -> Optional[int]:
        """Most recent season with games in the store, used when none is requested."""
        pass


class GameFeedInterface(ABC):
    """Upstream play-by-play feed."""
    
    @abstractmethod
    def fetch_game(self, game_id: str) -> Any:
        """Validated play-by-play payload for one game."""
        pass
