"""Domain utilities - play selection helpers."""

from .play_filter import PlayFilter, PlayFilters
