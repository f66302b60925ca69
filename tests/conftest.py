# tests/conftest.py

"""Shared fixtures: a small play-by-play payload and in-memory collaborators."""

import copy
import pytest

from nfl_playstats.domain.interfaces.repository import GameFeedInterface, PlayRepositoryInterface
from nfl_playstats.infrastructure.feed.espn_schema import parse_game_feed


SAMPLE_PAYLOAD = {
    'id': '401671001',
    'season': {'year': 2024, 'type': 2},
    'week': {'number': 3},
    'competitions': [{
        'date': '2024-09-22T20:25Z',
        'competitors': [
            {'homeAway': 'home', 'score': '22', 'team': {
                'id': '12', 'abbreviation': 'KC', 'name': 'Chiefs', 'displayName': 'Kansas City Chiefs',
                'location': 'Kansas City', 'color': 'e31837', 'alternateColor': 'ffb612',
                'logos': [{'href': 'https://a.espncdn.com/i/teamlogos/nfl/500/kc.png'}],
            }},
            {'homeAway': 'away', 'score': '17', 'team': {'id': 22, 'abbreviation': 'ATL', 'displayName': 'Atlanta Falcons'}},
        ],
        'venue': {'fullName': 'ignored'},
    }],
    'boxScore': {
        'teams': [
            {
                'team': {'id': '12', 'abbreviation': 'KC'},
                'statistics': [
                    {'name': 'firstDowns', 'displayValue': '21'},
                    {'name': 'totalYards', 'displayValue': '389', 'value': 389},
                    {'name': 'timeOfPossession', 'displayValue': '31:02'},
                    {'label': 'unnamed', 'displayValue': '7'},
                ],
            },
            {
                'team': {'id': '22', 'abbreviation': 'ATL'},
                'statistics': [{'name': 'sacks', 'displayValue': '2'}],
            },
        ],
    },
    'drives': {
        'previous': [
            {
                'id': '4016710011',
                'team': {'id': '12'},
                'plays': [
                    {
                        'id': '40167100140',
                        'sequenceNumber': '40',
                        'text': '(Shotgun) P.Mahomes pass short right to T.Kelce to KC 37 for 12 yards',
                        'statYardage': 12,
                        'period': {'number': 1},
                        'clock': {'displayValue': '14:55'},
                        'start': {'down': 1, 'distance': 10, 'yardsToEndzone': 75, 'team': {'id': '12'}},
                    },
                    {
                        'id': '40167100161',
                        'sequenceNumber': '61',
                        'text': 'I.Pacheco left end to KC 40 for 3 yards',
                        'statYardage': 3,
                        'period': {'number': 1},
                        'clock': {'displayValue': '14:20'},
                        'start': {'down': 1, 'distance': 10, 'yardsToEndzone': 63, 'team': {'id': '12'}},
                    },
                    {
                        'sequenceNumber': '80',
                        'text': 'P.Mahomes sacked at KC 33 for -7 yards',
                        'statYardage': -7,
                        'period': {'number': 1},
                        'start': {'down': 2, 'distance': 7, 'yardsToEndzone': 60},
                    },
                ],
            },
            {
                'id': '4016710012',
                'team': {'id': '22'},
                'plays': [
                    {
                        'id': '40167100190',
                        'sequenceNumber': '90',
                        'text': 'K.Cousins pass deep left to D.London for 24 yards',
                        'statYardage': 24,
                        'period': {'number': 2},
                        'start': {'down': 3, 'distance': 4, 'yardsToEndzone': 70, 'team': {'id': '22'}},
                    },
                    {
                        'text': 'Timeout #1 by ATL',
                        'period': {'number': 2},
                    },
                ],
            },
        ],
    },
}


@pytest.fixture
def sample_payload():
    return copy.deepcopy(SAMPLE_PAYLOAD)


@pytest.fixture
def sample_feed(sample_payload):
    return parse_game_feed(sample_payload, sample_payload['id'])


class FakeGameFeed(GameFeedInterface):
    """Serves a fixed payload for any game id."""

    def __init__(self, payload):
        self.payload = payload
        self.requested = []

    def fetch_game(self, game_id):
        self.requested.append(game_id)
        return parse_game_feed(self.payload, game_id)


class FakePlayRepository(PlayRepositoryInterface):
    """Keeps rows in dictionaries keyed the same way as the real store."""

    def __init__(self, rows=None, season=None):
        self.games = {}
        self.teams = {}
        self.team_stats = {}
        self.plays = {}
        self.rows = list(rows or [])
        self.season = season
        self.last_filters = None

    def upsert_game(self, game):
        self.games[game.game_id] = game.to_record()

    def upsert_teams(self, teams):
        for team in teams:
            self.teams[team.team_id] = team.to_record()
        return len(teams)

    def upsert_team_game_stats(self, stats):
        for line in stats:
            self.team_stats[(line.game_id, line.team_id)] = line.to_record()
        return len(stats)

    def upsert_plays(self, plays):
        for play in plays:
            self.plays[(play.game_id, play.play_id)] = play.to_record()
        return len(plays)

    def fetch_plays(self, filters):
        self.last_filters = filters
        return list(self.rows) + list(self.plays.values())

    def latest_season(self):
        return self.season


@pytest.fixture
def fake_feed(sample_payload):
    return FakeGameFeed(sample_payload)


@pytest.fixture
def fake_repository():
    return FakePlayRepository(season=2024)


@pytest.fixture
def repository_factory():
    return FakePlayRepository
