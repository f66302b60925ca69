# src/nfl_playstats/domain/validation.py - Domain validation rules for NFL data

import re
from datetime import datetime
from typing import Any, Union
from ..config.constants import (
    NFL_TEAMS, VALID_TEAMS, NFL_DATA_START_YEAR, NFL_MAX_WEEK,
    PLAY_TYPE_FILTERS, STAT_SIDES
)
from .entities import GroupBy
from .exceptions import DataValidationError


class NFLValidator:
    """Domain validator for NFL-specific business rules."""
    
    @staticmethod
    def validate_season_year(season_year: Any, field_name: str = "season") -> int:
        """Validate and convert season year to integer.
        
        Business rules:
        - Must be within NFL data availability range
        - Cannot be more than one year in the future
        """
        if season_year is None:
            raise DataValidationError(f"{field_name} cannot be None", field_name, season_year)
        
        if isinstance(season_year, bool):
            raise DataValidationError(f"{field_name} must be a valid integer", field_name, season_year)
        
        try:
            year = int(season_year)
        except (ValueError, TypeError):
            raise DataValidationError(f"{field_name} must be a valid integer", field_name, season_year)
        
        current_year = datetime.now().year
        
        if year < NFL_DATA_START_YEAR:
            raise DataValidationError(
                f"{field_name} must be {NFL_DATA_START_YEAR} or later (NFL data availability)",
                field_name, year
            )
        
        if year > current_year + 1:
            raise DataValidationError(
                f"{field_name} cannot be more than one year in the future",
                field_name, year
            )
        
        return year
    
    @staticmethod
    def validate_week(week: Any, field_name: str = "week") -> int:
        """Validate week number (1 through the last playoff week)."""
        week_number = validate_positive_integer(week, field_name)
        
        if week_number > NFL_MAX_WEEK:
            raise DataValidationError(
                f"{field_name} cannot be greater than {NFL_MAX_WEEK}",
                field_name, week_number
            )
        
        return week_number
    
    @staticmethod
    def validate_team_abbreviation(team_abbr: Any, field_name: str = "team") -> str:
        """Validate NFL team abbreviation.
        
        Business rules:
        - Must be valid NFL team abbreviation
        - Format: 2-4 uppercase letters
        """
        if team_abbr is None:
            raise DataValidationError(f"{field_name} cannot be None", field_name, team_abbr)
        
        if not isinstance(team_abbr, str):
            raise DataValidationError(f"{field_name} must be a string", field_name, team_abbr)
        
        # Normalize: uppercase and strip whitespace
        normalized = team_abbr.upper().strip()
        
        if not re.match(r'^[A-Z]{2,4}$', normalized):
            raise DataValidationError(f"{field_name} must be 2-4 uppercase letters only", field_name, normalized)
        
        if normalized not in VALID_TEAMS:
            sorted_teams = sorted(NFL_TEAMS)
            raise DataValidationError(
                f"Invalid team abbreviation: {normalized}. Must be one of: {', '.join(sorted_teams)}",
                field_name, normalized
            )
        
        return normalized
    
    @staticmethod
    def validate_play_type_filter(play_type: Any, field_name: str = "play_type") -> str:
        """Validate the advanced play-type filter (all, pass, run, sack)."""
        if play_type is None:
            return 'all'
        
        if not isinstance(play_type, str):
            raise DataValidationError(f"{field_name} must be a string", field_name, play_type)
        
        normalized = play_type.lower().strip()
        
        if normalized not in PLAY_TYPE_FILTERS:
            raise DataValidationError(
                f"Invalid play type filter: {normalized}. Must be one of: {', '.join(PLAY_TYPE_FILTERS)}",
                field_name, normalized
            )
        
        return normalized
    
    @staticmethod
    def validate_side(side: Any, field_name: str = "side") -> str:
        """Validate which side of the ball is being summarized."""
        if not isinstance(side, str):
            raise DataValidationError(f"{field_name} must be a string", field_name, side)
        
        normalized = side.lower().strip()
        
        if normalized not in STAT_SIDES:
            raise DataValidationError(
                f"Invalid side: {normalized}. Must be one of: {', '.join(STAT_SIDES)}",
                field_name, normalized
            )
        
        return normalized
    
    @staticmethod
    def validate_group_by(group_by: Union[GroupBy, str, None], field_name: str = "group_by") -> GroupBy:
        """Validate and convert a grouping selector to GroupBy."""
        if group_by is None:
            return GroupBy.TEAM
        
        if isinstance(group_by, GroupBy):
            return group_by
        
        try:
            return GroupBy(str(group_by).lower().strip())
        except ValueError:
            valid = ', '.join(g.value for g in GroupBy)
            raise DataValidationError(
                f"Invalid grouping: {group_by}. Must be one of: {valid}",
                field_name, group_by
            )


# Generic validation utilities (not NFL-specific)
def validate_positive_integer(value: Any, field_name: str) -> int:
    """Validate that a value is a positive integer.
    
    This is a generic validation utility, not NFL-specific.
    """
    if value is None:
        raise DataValidationError(f"{field_name} cannot be None", field_name, value)
    
    if isinstance(value, bool):
        raise DataValidationError(f"{field_name} must be a valid integer", field_name, value)
    
    try:
        int_value = int(value)
    except (ValueError, TypeError):
        raise DataValidationError(f"{field_name} must be a valid integer", field_name, value)
    
    if int_value <= 0:
        raise DataValidationError(f"{field_name} must be positive", field_name, int_value)
    
    return int_value
