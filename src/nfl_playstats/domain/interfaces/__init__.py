# Domain interfaces - Essential abstractions only

from .database import (
    StoreConnectionInterface,
    DatabaseError
)
from .repository import (
    PlayRepositoryInterface,
    GameFeedInterface
)

__all__ = [
    'StoreConnectionInterface',
    'DatabaseError',
    'PlayRepositoryInterface',
    'GameFeedInterface'
]
