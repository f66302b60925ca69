# src/nfl_playstats/domain/exceptions.py - Domain exceptions for standardized error handling

class PlayStatsException(Exception):
    """Base exception for the play statistics package."""
    pass


class DataAccessError(PlayStatsException):
    """Raised when data access operations fail."""
    
    def __init__(self, message: str, table: str = None):
        self.table = table
        super().__init__(message)


class DataNotFoundError(DataAccessError):
    """Raised when the requested game does not exist upstream.
    
    Distinct from general access failures, which may succeed on retry.
    """
    pass


class DataValidationError(PlayStatsException):
    """Raised when data validation fails.
    
    Used for input validation errors, not data access errors.
    """
    
    def __init__(self, message: str, field_name: str = None, field_value=None):
        self.field_name = field_name
        self.field_value = field_value
        super().__init__(message)


class FeedValidationError(DataValidationError):
    """Raised when an upstream play-by-play payload does not match the expected shape."""
    
    def __init__(self, message: str, game_id: str = None, errors: list = None):
        self.game_id = game_id
        self.errors = errors or []
        super().__init__(message, 'feed', game_id)


class UseCaseError(PlayStatsException):
    """Raised when use case execution fails.
    
    High-level exception for business logic failures.
    """
    
    def __init__(self, message: str, operation: str = None, context: dict = None):
        self.operation = operation
        self.context = context or {}
        super().__init__(message)
