# src/nfl_playstats/utils/error_handling.py - Standardized error handling utilities

import logging
import functools
from typing import Any, Callable, Type
from ..domain.exceptions import UseCaseError, DataAccessError, PlayStatsException

logger = logging.getLogger(__name__)

_LOG_METHODS = {
    'error': logger.error,
    'warning': logger.warning,
    'info': logger.info,
}


def handle_service_errors(
    operation: str,
    error_type: Type[Exception] = UseCaseError,
    default_return: Any = None,
    log_level: str = "error",
    passthrough: tuple = (PlayStatsException,)
):
    """
    Decorator for standardized service-level error handling.
    
    Args:
        operation: Description of the operation for error messages
        error_type: Exception type to raise on errors
        default_return: Default value to return on error (if not raising)
        log_level: Logging level ('error', 'warning', 'info')
        passthrough: Exception types re-raised untouched (already domain errors)
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except passthrough:
                raise
            except Exception as e:
                error_msg = f"Failed to {operation}: {str(e)}"
                _LOG_METHODS.get(log_level, logger.error)(error_msg)
                
                if default_return is not None:
                    return default_return
                raise _build_error(error_type, error_msg, operation, e) from e
        
        return wrapper
    return decorator


def handle_data_access_errors(operation: str, default_return: Any = None):
    """Specialized decorator for data access operations.
    
    Store failures (DatabaseError, requests errors) surface as DataAccessError.
    """
    return handle_service_errors(
        operation=operation,
        error_type=DataAccessError,
        default_return=default_return,
        log_level="error"
    )


def _build_error(error_type: Type[Exception], message: str, operation: str,
                 cause: Exception) -> Exception:
    if issubclass(error_type, UseCaseError):
        return error_type(message, operation, {})
    if issubclass(error_type, DataAccessError):
        # Store errors name the table they failed on
        return error_type(message, getattr(cause, 'table', None))
    return error_type(message)

