# src/nfl_playstats/domain/interfaces/database.py - Hosted store connection contract

from abc import ABC, abstractmethod
from typing import Dict, Optional


class DatabaseError(Exception):
    """A store request failed.

    Carries the table and the request kind (select, upsert) so the data-access
    layer can report which write or read broke.
    """

    def __init__(self, message: str, table: Optional[str] = None, operation: Optional[str] = None):
        self.table = table
        self.operation = operation
        super().__init__(message)


class StoreConnectionInterface(ABC):
    """Endpoint and credentials of a PostgREST-style store."""

    @abstractmethod
    def rest_url(self, table: str) -> str:
        """REST endpoint of one table."""
        pass

    @abstractmethod
    def request_headers(self) -> Dict[str, str]:
        """Auth and content headers sent with every request."""
        pass
