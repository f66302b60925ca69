# src/nfl_playstats/domain/game_processor.py - Turn one validated feed game into stored rows

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .entities import Game, Play, SeasonPhase, Team, TeamGameStats
from .play_classifier import PlayClassifier
from ..config.constants import BOX_SCORE_STATS

logger = logging.getLogger(__name__)


@dataclass
class GameImport:
    """Everything one game import writes: header, teams, box score and plays."""
    game: Game
    plays: List[Play] = field(default_factory=list)
    skipped_plays: int = 0
    teams: List[Team] = field(default_factory=list)
    team_stats: List[TeamGameStats] = field(default_factory=list)


def _numeric_id(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    text = str(value).strip()
    return int(text) if text.isdigit() else None


class GameProcessor:
    """Classify every play of a validated feed game.

    The feed object is the validated payload model from the feed adapter;
    only its attributes are read here.
    """
    
    def __init__(self, classifier: PlayClassifier = None):
        self._classifier = classifier or PlayClassifier()
    
    def process(self, feed: Any) -> GameImport:
        game = self.build_game(feed)
        team_by_feed_id = self._team_map(feed)
        
        plays = []
        skipped = 0
        for drive in feed.all_drives:
            drive_team = drive.team.id if drive.team else None
            for feed_play in drive.plays:
                play = self._build_play(feed_play, game, team_by_feed_id, drive.id, drive_team)
                if play is None:
                    skipped += 1
                    continue
                plays.append(play)
        
        if skipped:
            logger.warning(f"Skipped {skipped} plays without an id or sequence number in game {game.game_id}")
        logger.info(f"Processed game {game.game_id}: {len(plays)} plays")
        return GameImport(
            game=game,
            plays=plays,
            skipped_plays=skipped,
            teams=self.build_teams(feed),
            team_stats=self.build_team_stats(feed, game)
        )
    
    def build_game(self, feed: Any) -> Game:
        competition = feed.competition
        home = competition.competitor('home')
        away = competition.competitor('away')
        
        return Game(
            game_id=feed.id,
            season=self._season(feed),
            week=self._week(feed),
            phase=self._phase(feed),
            home_team=home.team.abbreviation,
            away_team=away.team.abbreviation,
            home_score=home.score or 0,
            away_score=away.score or 0,
            game_date=competition.date
        )
    
    def build_teams(self, feed: Any) -> List[Team]:
        """Reference rows for both competitors."""
        teams = []
        for competitor in feed.competition.competitors:
            team = competitor.team
            teams.append(Team(
                team_id=team.abbreviation,
                feed_team_id=team.id,
                name=team.name,
                display_name=team.display_name,
                location=team.location,
                logo=team.logo,
                color=team.color,
                alternate_color=team.alternate_color
            ))
        return teams
    
    def build_team_stats(self, feed: Any, game: Game) -> List[TeamGameStats]:
        """Box-score lines; empty when the payload has no box score."""
        if not feed.box_score:
            return []
    
        lines = []
        for box_team in feed.box_score.teams:
            reported = {stat.name: stat.reported for stat in box_team.statistics if stat.name}
            is_home = box_team.team.abbreviation == game.home_team
            lines.append(TeamGameStats(
                game_id=game.game_id,
                team_id=box_team.team.abbreviation,
                home_away='home' if is_home else 'away',
                points=game.home_score if is_home else game.away_score,
                **{column: reported.get(name) for name, column in BOX_SCORE_STATS.items()}
            ))
        return lines
    
    def _team_map(self, feed: Any) -> Dict[str, str]:
        """Feed team id -> team abbreviation for both competitors."""
        return {c.team.id: c.team.abbreviation for c in feed.competition.competitors}
    
    def _build_play(self, feed_play: Any, game: Game, team_by_feed_id: Dict[str, str],
                    drive_id: Optional[str], drive_team: Optional[str]) -> Optional[Play]:
        sequence_number = _numeric_id(feed_play.sequence_number)
        play_id = _numeric_id(feed_play.id)
        if play_id is None:
            play_id = sequence_number
        if play_id is None:
            return None
        
        start = feed_play.start
        offense_feed_id = (
            (start.team.id if start.team else None)
            or (feed_play.team.id if feed_play.team else None)
            or drive_team
        )
        offense_team = team_by_feed_id.get(offense_feed_id) if offense_feed_id else None
        defense_team = self._opponent(offense_team, game)
        
        yards = feed_play.stat_yardage
        
        return self._classifier.classify_play(
            game_id=_numeric_id(game.game_id),
            play_id=play_id,
            description=feed_play.text or feed_play.description or "",
            down=start.down,
            distance=start.distance,
            result_yards=int(yards) if yards is not None else None,
            offense_team=offense_team,
            defense_team=defense_team,
            season=game.season,
            week=game.week,
            phase=game.phase,
            quarter=feed_play.period.number if feed_play.period else None,
            clock=feed_play.clock.display_value if feed_play.clock else None,
            sequence_number=sequence_number,
            yards_to_endzone=start.yards_to_endzone,
            drive_id=drive_id,
            scoring_play=feed_play.scoring_play,
            game_date=game.game_date
        )
    
    @staticmethod
    def _opponent(offense_team: Optional[str], game: Game) -> Optional[str]:
        if offense_team is None:
            return None
        if offense_team == game.home_team:
            return game.away_team
        if offense_team == game.away_team:
            return game.home_team
        return None
    
    @staticmethod
    def _season(feed: Any) -> Optional[int]:
        return feed.season.year if feed.season else None
    
    @staticmethod
    def _week(feed: Any) -> Optional[int]:
        if feed.week and feed.week.number is not None:
            return feed.week.number
        week = feed.competition.week
        return week.number if week else None
    
    @staticmethod
    def _phase(feed: Any) -> Optional[str]:
        phase = SeasonPhase.from_season_type(feed.season.type if feed.season else None)
        return phase.value if phase else None
