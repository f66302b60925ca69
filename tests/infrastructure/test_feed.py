# tests/infrastructure/test_feed.py

import pytest
import requests
from nfl_playstats.domain.exceptions import DataAccessError, DataNotFoundError, FeedValidationError
from nfl_playstats.infrastructure.feed import espn_schema
from nfl_playstats.infrastructure.feed import game_feed_client
from nfl_playstats.infrastructure.feed.game_feed_client import GameFeedClient


class FakeResponse:
    
    def __init__(self, payload=None, status_code=200):
        self._payload = payload
        self.status_code = status_code
    
    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")
    
    def json(self):
        return self._payload


class TestFeedSchema:
    
    def test_extra_keys_are_ignored(self, sample_payload):
        sample_payload['header'] = {'gameNote': 'Week 3'}
        feed = espn_schema.parse_game_feed(sample_payload)
        assert feed.competition.competitor('away').team.id == "22"
    
    def test_missing_competitors(self, sample_payload):
        del sample_payload['competitions'][0]['competitors']
        
        with pytest.raises(FeedValidationError) as exc_info:
            espn_schema.parse_game_feed(sample_payload, "401671001")
        
        assert exc_info.value.game_id == "401671001"
        assert exc_info.value.errors
    
    def test_missing_home_competitor(self, sample_payload):
        sample_payload['competitions'][0]['competitors'][0]['homeAway'] = 'away'
        with pytest.raises(FeedValidationError):
            espn_schema.parse_game_feed(sample_payload)
    
    def test_missing_competition(self, sample_payload):
        sample_payload['competitions'] = []
        with pytest.raises(FeedValidationError, match="competitions"):
            espn_schema.parse_game_feed(sample_payload)
    
    def test_numeric_ids_become_text(self, sample_payload):
        sample_payload['id'] = 401671001
        feed = espn_schema.parse_game_feed(sample_payload)
        assert feed.id == "401671001"
    
    def test_box_score_team_needs_abbreviation(self, sample_payload):
        del sample_payload['boxScore']['teams'][0]['team']['abbreviation']
        with pytest.raises(FeedValidationError, match="abbreviation"):
            espn_schema.parse_game_feed(sample_payload)


class TestGameFeedClient:
    
    def test_requires_api_key(self):
        with pytest.raises(ValueError, match="RAPIDAPI_KEY"):
            GameFeedClient(api_key=None)
    
    def test_fetch_game_sends_rapidapi_headers(self, monkeypatch, sample_payload):
        calls = []
        
        def fake_get(url, headers=None, timeout=None):
            calls.append((url, headers, timeout))
            return FakeResponse(sample_payload)
        
        monkeypatch.setattr(game_feed_client.requests, 'get', fake_get)
        client = GameFeedClient(api_key="secret", host="example.p.rapidapi.com", timeout=5)
        
        feed = client.fetch_game("401671001")
        
        url, headers, timeout = calls[0]
        assert url == "https://example.p.rapidapi.com/nfl/play-by-play/401671001"
        assert headers == {'X-RapidAPI-Key': "secret", 'X-RapidAPI-Host': "example.p.rapidapi.com"}
        assert timeout == 5
        assert feed.id == "401671001"
    
    def test_http_error_is_data_access_error(self, monkeypatch):
        monkeypatch.setattr(game_feed_client.requests, 'get', lambda *a, **k: FakeResponse(status_code=500))
        client = GameFeedClient(api_key="secret")
        
        with pytest.raises(DataAccessError, match="401671001"):
            client.fetch_game("401671001")
    
    def test_unknown_game_is_not_found(self, monkeypatch):
        monkeypatch.setattr(game_feed_client.requests, 'get', lambda *a, **k: FakeResponse(status_code=404))
        client = GameFeedClient(api_key="secret")
        
        with pytest.raises(DataNotFoundError, match="401671001 not found"):
            client.fetch_game("401671001")
    
    def test_invalid_payload_is_feed_validation_error(self, monkeypatch):
        monkeypatch.setattr(game_feed_client.requests, 'get', lambda *a, **k: FakeResponse({'id': '1'}))
        client = GameFeedClient(api_key="secret")
        
        with pytest.raises(FeedValidationError):
            client.fetch_game("1")
