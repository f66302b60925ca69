# src/nfl_playstats/infrastructure/feed/game_feed_client.py

import logging
from typing import Any, Dict, Optional
import requests

from ...config.settings import DEFAULT_RAPIDAPI_HOST, DEFAULT_REQUEST_TIMEOUT
from ...domain.exceptions import DataAccessError, DataNotFoundError, DataValidationError
from ...domain.interfaces.repository import GameFeedInterface
from .espn_schema import GameFeed, parse_game_feed

logger = logging.getLogger(__name__)


class GameFeedClient(GameFeedInterface):
    """RapidAPI play-by-play client."""
    
    def __init__(self, api_key: str, host: str = DEFAULT_RAPIDAPI_HOST,
                 timeout: int = DEFAULT_REQUEST_TIMEOUT):
        if not api_key:
            raise ValueError("RAPIDAPI_KEY environment variable is required")
        
        self.api_key = api_key
        self.host = host or DEFAULT_RAPIDAPI_HOST
        self.timeout = timeout
    
    def _headers(self) -> Dict[str, str]:
        return {
            'X-RapidAPI-Key': self.api_key,
            'X-RapidAPI-Host': self.host,
        }
    
    def game_url(self, game_id: str) -> str:
        return f"https://{self.host}/nfl/play-by-play/{game_id}"
    
    def fetch_payload(self, game_id: str) -> Dict[str, Any]:
        """Raw JSON for one game."""
        if not game_id:
            raise DataValidationError("game_id is required", 'game_id', game_id)
        
        try:
            response = requests.get(self.game_url(game_id), headers=self._headers(), timeout=self.timeout)
            if response.status_code == 404:
                raise DataNotFoundError(f"Game {game_id} not found in the play-by-play feed")
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            logger.error(f"Play-by-play request failed for game {game_id}: {e}")
            raise DataAccessError(f"Play-by-play request failed for game {game_id}: {e}")
        except ValueError as e:
            raise DataAccessError(f"Play-by-play response for game {game_id} is not JSON: {e}")
        
        if not isinstance(payload, dict):
            raise DataAccessError(f"Unexpected play-by-play response for game {game_id}")
        
        logger.debug(f"Fetched play-by-play payload for game {game_id}")
        return payload
    
    def fetch_game(self, game_id: str) -> GameFeed:
        """Fetch and validate one game."""
        return parse_game_feed(self.fetch_payload(game_id), game_id)
