"""Tests for session state storage."""

from datetime import datetime, timedelta, timezone

import pytest

from src.oauth.config import ZoomOAuthConfig
from src.oauth.exceptions import MissingSessionStateError, UnauthenticatedError
from src.oauth.session_store import (
    OAUTH_CONFIG_KEY,
    OAUTH_TOKENS_KEY,
    SessionStateStore,
    TokenData,
)


@pytest.fixture
def config():
    return ZoomOAuthConfig(
        client_id="abc",
        client_secret="xyz",
        redirect_uri="http://localhost:3000/auth/callback",
    )


class TestTokenData:
    """Tests for TokenData."""

    def test_from_dict_keeps_unknown_fields(self, user_token_payload):
        tokens = TokenData.from_dict(user_token_payload)

        assert tokens.access_token == "user_access_token"
        assert tokens.refresh_token == "user_refresh_token"
        assert tokens.expires_in == 3599
        assert tokens.token_type == "bearer"
        assert tokens.extra == {"api_url": "https://api.zoom.us"}

    def test_to_dict_is_flat(self, user_token_payload):
        data = TokenData.from_dict(user_token_payload).to_dict()

        assert data["access_token"] == "user_access_token"
        assert data["api_url"] == "https://api.zoom.us"
        assert "extra" not in data
        assert "issued_at" in data

    def test_round_trip_preserves_issued_at(self):
        tokens = TokenData(access_token="t", expires_in=60, issued_at="2026-01-01T00:00:00+00:00")
        restored = TokenData.from_dict(tokens.to_dict())
        assert restored == tokens

    def test_missing_access_token_raises(self):
        with pytest.raises(KeyError):
            TokenData.from_dict({"refresh_token": "r"})

    def test_expires_at(self):
        tokens = TokenData(
            access_token="t", expires_in=3600, issued_at="2026-01-01T00:00:00+00:00"
        )
        assert tokens.expires_at == datetime(2026, 1, 1, 1, 0, tzinfo=timezone.utc)

    def test_no_expiry(self):
        tokens = TokenData(access_token="t")
        assert tokens.expires_at is None
        assert tokens.is_expired is False

    def test_is_expired(self):
        issued = datetime.now(timezone.utc) - timedelta(hours=2)
        tokens = TokenData(access_token="t", expires_in=3600, issued_at=issued.isoformat())
        assert tokens.is_expired is True


class TestSessionStateStore:
    """Tests for SessionStateStore."""

    def test_empty_session(self):
        store = SessionStateStore({})

        assert store.get_oauth_config() is None
        assert store.get_token_set() is None

    def test_put_and_get_oauth_config(self, config):
        session = {}
        store = SessionStateStore(session)

        store.put_oauth_config(config)

        assert session[OAUTH_CONFIG_KEY]["client_id"] == "abc"
        assert store.get_oauth_config() == config

    def test_put_oauth_config_overwrites(self, config):
        store = SessionStateStore({})
        store.put_oauth_config(config)

        second = ZoomOAuthConfig(
            client_id="def", client_secret="uvw", redirect_uri="https://example.com/cb"
        )
        store.put_oauth_config(second)

        assert store.get_oauth_config() == second

    def test_put_and_get_token_set(self, user_token_payload):
        session = {}
        store = SessionStateStore(session)

        store.put_token_set(TokenData.from_dict(user_token_payload))

        assert session[OAUTH_TOKENS_KEY]["access_token"] == "user_access_token"
        assert store.get_token_set().refresh_token == "user_refresh_token"

    def test_put_token_set_drops_unknown_provider_fields(self, user_token_payload):
        session = {}
        store = SessionStateStore(session)

        store.put_token_set(TokenData.from_dict(user_token_payload))

        assert "api_url" not in session[OAUTH_TOKENS_KEY]
        assert set(session[OAUTH_TOKENS_KEY]) == {
            "access_token",
            "refresh_token",
            "expires_in",
            "token_type",
            "scope",
            "issued_at",
        }
        assert store.get_token_set().extra == {}

    def test_put_token_set_overwrites(self):
        store = SessionStateStore({})
        store.put_token_set(TokenData(access_token="first"))
        store.put_token_set(TokenData(access_token="second"))

        assert store.get_token_set().access_token == "second"

    def test_stores_are_isolated_per_session(self, config):
        """Two sessions never see each other's state."""
        store_a = SessionStateStore({})
        store_b = SessionStateStore({})

        store_a.put_oauth_config(config)
        store_a.put_token_set(TokenData(access_token="a_token"))

        assert store_b.get_oauth_config() is None
        assert store_b.get_token_set() is None

    def test_require_oauth_config_missing_raises(self):
        with pytest.raises(MissingSessionStateError, match="Missing session config"):
            SessionStateStore({}).require_oauth_config()

    def test_require_token_set_missing_raises(self):
        with pytest.raises(UnauthenticatedError, match="Not authenticated"):
            SessionStateStore({}).require_token_set()

    def test_invalid_stored_config_is_absent(self):
        store = SessionStateStore({OAUTH_CONFIG_KEY: {"client_id": "abc"}})
        assert store.get_oauth_config() is None

    def test_invalid_stored_tokens_are_absent(self):
        store = SessionStateStore({OAUTH_TOKENS_KEY: {"access_token": ""}})
        assert store.get_token_set() is None
