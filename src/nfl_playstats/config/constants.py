# src/nfl_playstats/config/constants.py - Centralized NFL constants and configuration

# NFL Teams
NFL_TEAMS = [
    'ARI', 'ATL', 'BAL', 'BUF', 'CAR', 'CHI', 'CIN', 'CLE', 'DAL', 'DEN',
    'DET', 'GB', 'HOU', 'IND', 'JAX', 'KC', 'LA', 'LAC', 'LV', 'MIA',
    'MIN', 'NE', 'NO', 'NYG', 'NYJ', 'PHI', 'PIT', 'SEA', 'SF', 'TB', 'TEN', 'WAS'
]

# Valid team abbreviation set (for fast lookup)
VALID_TEAMS = set(NFL_TEAMS)

# Label used for plays whose team could not be resolved
UNKNOWN_TEAM = 'unknown'

# Season configuration
NFL_DATA_START_YEAR = 1999
NFL_MAX_WEEK = 22  # regular season plus playoff weeks

# Success rate calculation thresholds
FIRST_DOWN_SUCCESS_THRESHOLD = 0.4
SECOND_DOWN_SUCCESS_THRESHOLD = 0.6
CONVERSION_SUCCESS_THRESHOLD = 1.0

# Explosive play threshold (yards), fixed
EXPLOSIVE_PLAY_YARDS = 20

# Field positions
RED_ZONE_YARDLINE = 20

# Advanced filter values
PLAY_TYPE_FILTERS = ('all', 'pass', 'run', 'sack')
STAT_SIDES = ('offense', 'defense', 'special')

# Store layout
PLAYS_TABLE = 'nfl_plays'
GAMES_TABLE = 'games'
TEAMS_TABLE = 'teams'
TEAM_GAME_STATS_TABLE = 'team_game_stats'
PLAYS_CONFLICT_KEY = 'game_id,play_id'
GAMES_CONFLICT_KEY = 'id'
TEAMS_CONFLICT_KEY = 'id'
TEAM_GAME_STATS_CONFLICT_KEY = 'game_id,team_id'

# Box-score statistic name -> team_game_stats column
BOX_SCORE_STATS = {
    'firstDowns': 'first_downs',
    'totalYards': 'total_yards',
    'passingYards': 'passing_yards',
    'rushingYards': 'rushing_yards',
    'turnovers': 'turnovers',
    'sacks': 'sacks',
    'timeOfPossession': 'time_of_possession',
}

# Supabase returns at most this many rows per request
SUPABASE_PAGE_SIZE = 1000
