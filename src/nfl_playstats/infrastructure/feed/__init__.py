# Feed adapters - upstream play-by-play access

from .espn_schema import GameFeed, parse_game_feed
from .game_feed_client import GameFeedClient

__all__ = ['GameFeed', 'parse_game_feed', 'GameFeedClient']
