# tests/infrastructure/test_supabase_store.py

"""
Tests for the Supabase adapter with requests patched out.
"""

import pytest
import requests
from nfl_playstats.config.constants import SUPABASE_PAGE_SIZE
from nfl_playstats.domain.entities import Game, Play, Team, TeamGameStats
from nfl_playstats.domain.exceptions import DataAccessError
from nfl_playstats.domain.interfaces.database import DatabaseError
from nfl_playstats.domain.utilities import PlayFilters
from nfl_playstats.infrastructure.database import query_executor
from nfl_playstats.infrastructure.database.query_executor import SupabaseQueryExecutor
from nfl_playstats.infrastructure.database.repositories import SupabasePlayRepository
from nfl_playstats.infrastructure.database.supabase_client import SupabaseClient

SUPABASE_URL = "https://project.supabase.co"
SUPABASE_KEY = "eyJhbGciOiJIUzI1NiJ9.test"


class FakeResponse:
    
    def __init__(self, payload=None, status_code=200):
        self._payload = payload
        self.status_code = status_code
        self.text = str(payload)
        self.content = b'' if payload is None else b'x'
    
    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")
    
    def json(self):
        return self._payload


class RecordingHttp:
    """Stands in for requests.get / requests.post and records every call."""
    
    def __init__(self, get_responses=None, post_response=None):
        self.get_responses = list(get_responses or [])
        self.post_response = post_response or FakeResponse(None, 201)
        self.gets = []
        self.posts = []
    
    def get(self, url, headers=None, params=None, timeout=None):
        self.gets.append({'url': url, 'headers': headers, 'params': params})
        return self.get_responses.pop(0) if self.get_responses else FakeResponse([])
    
    def post(self, url, headers=None, params=None, json=None, timeout=None):
        self.posts.append({'url': url, 'headers': headers, 'params': params, 'json': json})
        return self.post_response


@pytest.fixture
def http(monkeypatch):
    recorder = RecordingHttp()
    monkeypatch.setattr(query_executor.requests, 'get', recorder.get)
    monkeypatch.setattr(query_executor.requests, 'post', recorder.post)
    return recorder


@pytest.fixture
def executor():
    return SupabaseQueryExecutor(SupabaseClient(SUPABASE_URL, SUPABASE_KEY))


@pytest.fixture
def repository(executor):
    return SupabasePlayRepository(executor)


class TestSupabaseClient:
    
    def test_requires_http_url(self):
        with pytest.raises(ValueError, match="HTTP/HTTPS"):
            SupabaseClient("project.supabase.co", SUPABASE_KEY)
    
    def test_rejects_malformed_key(self):
        with pytest.raises(ValueError, match="SUPABASE_KEY"):
            SupabaseClient(SUPABASE_URL, "not-a-key")
    
    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv('SUPABASE_URL', SUPABASE_URL + "/")
        monkeypatch.setenv('SUPABASE_KEY', SUPABASE_KEY)
        client = SupabaseClient()
        assert client.url == SUPABASE_URL
        assert client.rest_url('games') == f"{SUPABASE_URL}/rest/v1/games"
    
    def test_missing_environment(self, monkeypatch):
        monkeypatch.delenv('SUPABASE_URL', raising=False)
        monkeypatch.delenv('SUPABASE_KEY', raising=False)
        monkeypatch.delenv('SUPABASE_SERVICE_ROLE_KEY', raising=False)
        with pytest.raises(ValueError, match="SUPABASE_URL"):
            SupabaseClient()


class TestQueryExecutor:
    
    def test_select_builds_postgrest_filters(self, http, executor):
        http.get_responses = [FakeResponse([{'season': 2024}])]
        
        rows = executor.select('games', 'season', filters={'season': 2024, 'week': None, 'calc_shotgun': True},
                               order='season.desc', limit=1)
        
        assert rows == [{'season': 2024}]
        call = http.gets[0]
        assert call['url'] == f"{SUPABASE_URL}/rest/v1/games"
        assert call['params'] == {
            'select': 'season', 'season': 'eq.2024', 'calc_shotgun': 'eq.true',
            'order': 'season.desc', 'limit': '1'
        }
        assert call['headers']['apikey'] == SUPABASE_KEY
    
    def test_select_all_paginates_until_short_page(self, http, executor):
        full_page = [{'play_id': i} for i in range(SUPABASE_PAGE_SIZE)]
        http.get_responses = [FakeResponse(full_page), FakeResponse([{'play_id': -1}])]
        
        rows = executor.select_all('nfl_plays')
        
        assert len(rows) == SUPABASE_PAGE_SIZE + 1
        assert [call['headers']['Range'] for call in http.gets] == [
            f"0-{SUPABASE_PAGE_SIZE - 1}",
            f"{SUPABASE_PAGE_SIZE}-{2 * SUPABASE_PAGE_SIZE - 1}",
        ]
    
    def test_upsert_merges_on_conflict_key(self, http, executor):
        written = executor.upsert('nfl_plays', [{'game_id': 1, 'play_id': 1}], 'game_id,play_id')
        
        assert written == 1
        call = http.posts[0]
        assert call['params'] == {'on_conflict': 'game_id,play_id'}
        assert call['headers']['Prefer'].startswith('resolution=merge-duplicates')
    
    def test_upsert_batches_large_payloads(self, http, executor):
        rows = [{'game_id': 1, 'play_id': i} for i in range(query_executor.UPSERT_BATCH_SIZE + 1)]
        
        assert executor.upsert('nfl_plays', rows, 'game_id,play_id') == len(rows)
        assert [len(call['json']) for call in http.posts] == [query_executor.UPSERT_BATCH_SIZE, 1]
    
    def test_upsert_nothing(self, http, executor):
        assert executor.upsert('nfl_plays', [], 'game_id,play_id') == 0
        assert http.posts == []
    
    def test_http_failure_raises_database_error(self, http, executor):
        http.get_responses = [FakeResponse({'message': 'boom'}, 500)]
        with pytest.raises(DatabaseError) as exc_info:
            executor.select('games')
        assert exc_info.value.table == 'games'
        assert exc_info.value.operation == 'select'
    
    def test_upsert_failure_names_table(self, http, executor):
        http.post_response = FakeResponse({'message': 'conflict'}, 409)
        with pytest.raises(DatabaseError, match="team_game_stats failed after 0 rows") as exc_info:
            executor.upsert('team_game_stats', [{'game_id': '1', 'team_id': 'KC'}], 'game_id,team_id')
        assert exc_info.value.operation == 'upsert'


class TestPlayRepository:
    
    def test_upsert_plays_is_keyed_by_game_and_play(self, http, repository):
        plays = [
            Play(game_id=1, play_id=1, description="first"),
            Play(game_id=1, play_id=2, description="second"),
            Play(game_id=1, play_id=1, description="first, corrected"),
        ]
        
        written = repository.upsert_plays(plays)
        
        assert written == 2
        call = http.posts[0]
        assert call['url'].endswith('/rest/v1/nfl_plays')
        assert call['params'] == {'on_conflict': 'game_id,play_id'}
        assert [row['description'] for row in call['json']] == ["first, corrected", "second"]
        assert 'calc_is_pass' in call['json'][0]
    
    def test_upsert_game(self, http, repository):
        repository.upsert_game(Game("401671001", 2024, 3, "REG", "KC", "ATL"))
        
        call = http.posts[0]
        assert call['url'].endswith('/rest/v1/games')
        assert call['params'] == {'on_conflict': 'id'}
        assert call['json'][0]['id'] == "401671001"
    
    def test_fetch_plays_translates_filters(self, http, repository):
        http.get_responses = [FakeResponse([{'play_id': 1}])]
        filters = PlayFilters(season=2024, week=3, play_type='sack', shotgun=True, defense_team='BUF')
        
        rows = repository.fetch_plays(filters)
        
        assert rows == [{'play_id': 1}]
        params = http.gets[0]['params']
        assert params['select'] == '*,games!inner(season,week)'
        assert params['games.season'] == 'eq.2024'
        assert params['games.week'] == 'eq.3'
        assert params['calc_is_sack'] == 'eq.true'
        assert params['calc_shotgun'] == 'eq.true'
        assert params['defense_team'] == 'eq.BUF'
        assert 'offense_team' not in params
        assert 'calc_no_huddle' not in params
    
    def test_latest_season(self, http, repository):
        http.get_responses = [FakeResponse([{'season': 2024}])]
        assert repository.latest_season() == 2024
        assert http.gets[0]['params']['order'] == 'season.desc.nullslast'
    
    def test_latest_season_empty_store(self, http, repository):
        http.get_responses = [FakeResponse([])]
        assert repository.latest_season() is None
    
    def test_store_failure_is_data_access_error(self, http, repository):
        http.get_responses = [FakeResponse({'message': 'boom'}, 503)]
        with pytest.raises(DataAccessError, match="fetch plays"):
            repository.fetch_plays(PlayFilters(season=2024))
    
    def test_store_failure_carries_table(self, http, repository):
        http.post_response = FakeResponse({'message': 'boom'}, 500)
        with pytest.raises(DataAccessError) as exc_info:
            repository.upsert_game(Game("401671001", 2024, 3, "REG", "KC", "ATL"))
        assert exc_info.value.table == 'games'
    
    def test_upsert_teams_keyed_by_abbreviation(self, http, repository):
        teams = [
            Team("KC", feed_team_id="12", display_name="Kansas City Chiefs", logo="https://a.espncdn.com/kc.png"),
            Team("ATL", feed_team_id="1", display_name="Atlanta Falcons"),
        ]
        
        assert repository.upsert_teams(teams) == 2
        
        call = http.posts[0]
        assert call['url'].endswith('/rest/v1/teams')
        assert call['params'] == {'on_conflict': 'id'}
        kc = call['json'][0]
        assert kc['id'] == kc['abbreviation'] == "KC"
        assert kc['espn_team_id'] == "12"
        assert kc['logo'] == "https://a.espncdn.com/kc.png"
    
    def test_upsert_team_game_stats_keyed_by_game_and_team(self, http, repository):
        lines = [
            TeamGameStats("401671001", "KC", "home", points=22, total_yards="389"),
            TeamGameStats("401671001", "ATL", "away", points=17, total_yards="301"),
            TeamGameStats("401671001", "KC", "home", points=22, total_yards="390"),
        ]
        
        assert repository.upsert_team_game_stats(lines) == 2
        
        call = http.posts[0]
        assert call['url'].endswith('/rest/v1/team_game_stats')
        assert call['params'] == {'on_conflict': 'game_id,team_id'}
        assert [(row['team_id'], row['total_yards']) for row in call['json']] == [("KC", "390"), ("ATL", "301")]
    
    def test_no_box_score_writes_nothing(self, http, repository):
        assert repository.upsert_team_game_stats([]) == 0
        assert http.posts == []
