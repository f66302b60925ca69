# src/nfl_playstats/config/settings.py - Runtime settings read from the environment

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_RAPIDAPI_HOST = 'sports-information.p.rapidapi.com'
DEFAULT_REQUEST_TIMEOUT = 30


@dataclass(frozen=True)
class Settings:
    """Credentials and endpoints for the external collaborators."""
    supabase_url: Optional[str]
    supabase_key: Optional[str]
    rapidapi_key: Optional[str]
    rapidapi_host: str = DEFAULT_RAPIDAPI_HOST
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT

    @classmethod
    def from_env(cls) -> 'Settings':
        """Build settings from environment variables."""
        timeout = os.getenv('NFL_PLAYSTATS_TIMEOUT')
        return cls(
            supabase_url=os.getenv('SUPABASE_URL'),
            supabase_key=os.getenv('SUPABASE_KEY') or os.getenv('SUPABASE_SERVICE_ROLE_KEY'),
            rapidapi_key=os.getenv('RAPIDAPI_KEY'),
            rapidapi_host=os.getenv('RAPIDAPI_HOST', DEFAULT_RAPIDAPI_HOST),
            request_timeout=int(timeout) if timeout else DEFAULT_REQUEST_TIMEOUT
        )
