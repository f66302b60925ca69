# src/nfl_playstats/infrastructure/database/supabase_client.py

import logging
from typing import Dict

from ...config.settings import Settings
from ...domain.interfaces.database import StoreConnectionInterface

logger = logging.getLogger(__name__)

# Legacy JWT keys and the newer opaque secret/publishable keys
_KEY_PREFIXES = ('eyJ', 'sb_')


class SupabaseClient(StoreConnectionInterface):
    """Supabase project URL and service key for the play store."""

    def __init__(self, url: str = None, key: str = None):
        if url is None or key is None:
            settings = Settings.from_env()
            url = url or settings.supabase_url
            key = key or settings.supabase_key

        if not url:
            raise ValueError("SUPABASE_URL environment variable is required")
        if not key:
            raise ValueError("SUPABASE_KEY environment variable is required")

        if not url.startswith(('http://', 'https://')):
            raise ValueError("SUPABASE_URL must be a valid HTTP/HTTPS URL")

        if not key.startswith(_KEY_PREFIXES):
            raise ValueError("SUPABASE_KEY appears to be invalid (expected a JWT or sb_ key)")

        self.url = url.rstrip('/')
        self.key = key

        # Log safely without exposing credentials
        masked_url = f"{self.url.split('/')[0]}//{self.url.split('/')[2]}/*****"
        logger.info(f"Initialized Supabase client for URL: {masked_url}")

    def rest_url(self, table: str) -> str:
        return f"{self.url}/rest/v1/{table}"

    def request_headers(self) -> Dict[str, str]:
        return {
            'apikey': self.key,
            'Authorization': f'Bearer {self.key}',
            'Content-Type': 'application/json'
        }
