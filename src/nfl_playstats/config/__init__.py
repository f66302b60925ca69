"""Configuration - constants, environment settings and logging."""

from .constants import (
    NFL_TEAMS, VALID_TEAMS, UNKNOWN_TEAM, NFL_DATA_START_YEAR, NFL_MAX_WEEK,
    FIRST_DOWN_SUCCESS_THRESHOLD, SECOND_DOWN_SUCCESS_THRESHOLD,
    CONVERSION_SUCCESS_THRESHOLD, EXPLOSIVE_PLAY_YARDS, RED_ZONE_YARDLINE,
    PLAY_TYPE_FILTERS, STAT_SIDES
)
from .settings import Settings
from .log_config import configure_logging
