# Utils package

from .error_handling import (
    handle_service_errors, handle_data_access_errors
)

__all__ = [
    'handle_service_errors', 'handle_data_access_errors'
]
