from .play_repository import SupabasePlayRepository

__all__ = ['SupabasePlayRepository']
