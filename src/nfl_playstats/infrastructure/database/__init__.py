# Database adapters - Supabase over PostgREST

from .supabase_client import SupabaseClient
from .query_executor import SupabaseQueryExecutor
from .repositories import SupabasePlayRepository

__all__ = ['SupabaseClient', 'SupabaseQueryExecutor', 'SupabasePlayRepository']
