"""Integration tests for the user-level OAuth endpoints.

Each TestClient keeps its own cookie jar, so one client stands for one
browser session.
"""

from urllib.parse import parse_qs, urlparse

from fastapi.testclient import TestClient

from src.oauth.token_exchange import build_basic_auth_header
from src.server.main import app

from .conftest import AUTHORIZE_URL, MEETINGS_URL, TOKEN_URL, basic_header_of, calls_to

LOGIN_PARAMS = {
    "client_id": "abc",
    "client_secret": "xyz",
    "redirect_uri": "http://localhost:3000/auth/callback",
}


def login(client: TestClient, **overrides):
    """Start the login with LOGIN_PARAMS plus overrides."""
    return client.get(
        "/auth/login", params={**LOGIN_PARAMS, **overrides}, follow_redirects=False
    )


def callback(client: TestClient, **params):
    return client.get("/auth/callback", params=params, follow_redirects=False)


class TestLogin:
    """Test cases for GET /auth/login."""

    def test_login_redirects_to_zoom(self, client: TestClient):
        response = login(client)

        assert response.status_code == 302
        location = urlparse(response.headers["location"])
        assert f"{location.scheme}://{location.netloc}{location.path}" == AUTHORIZE_URL
        assert parse_qs(location.query) == {
            "response_type": ["code"],
            "client_id": ["abc"],
            "redirect_uri": ["http://localhost:3000/auth/callback"],
            "scope": ["meeting:write"],
        }

    def test_login_with_custom_scope(self, client: TestClient):
        response = login(client, scope="meeting:write user:read")

        query = parse_qs(urlparse(response.headers["location"]).query)
        assert query["scope"] == ["meeting:write user:read"]

    def test_login_never_exposes_client_secret(self, client: TestClient):
        response = login(client)

        assert "xyz" not in response.headers["location"]

    def test_login_with_incomplete_config(self, client: TestClient):
        response = client.get(
            "/auth/login", params={"client_id": "abc"}, follow_redirects=False
        )

        assert response.status_code == 400
        assert "Missing OAuth config" in response.json()["error"]

    def test_incomplete_login_leaves_session_unchanged(self, client: TestClient):
        client.get("/auth/login", params={"client_id": "abc"}, follow_redirects=False)

        status = client.get("/api/oauth/status").json()
        assert status["config_stored"] is False

    def test_login_stores_config(self, client: TestClient):
        login(client)

        status = client.get("/api/oauth/status").json()
        assert status == {"authenticated": False, "config_stored": True}


class TestCallback:
    """Test cases for GET /auth/callback."""

    def test_callback_without_login(self, client: TestClient, zoom_http):
        mock_post = zoom_http()

        response = callback(client, code="the-code")

        assert response.status_code == 400
        assert response.headers["content-type"].startswith("text/plain")
        assert "Missing session config" in response.text
        mock_post.assert_not_called()

    def test_callback_without_code(self, client: TestClient, zoom_http):
        mock_post = zoom_http()
        login(client)

        response = callback(client)

        assert response.status_code == 400
        assert "Missing session config or code" in response.text
        mock_post.assert_not_called()

    def test_callback_with_authorization_error(self, client: TestClient, zoom_http):
        mock_post = zoom_http()
        login(client)

        response = callback(
            client, error="access_denied", error_description="The user denied access"
        )

        assert response.status_code == 400
        assert response.text == (
            "OAuth authorization error: access_denied - The user denied access"
        )
        mock_post.assert_not_called()

    def test_callback_exchanges_code(
        self, client: TestClient, zoom_http, zoom_response, user_token_payload
    ):
        mock_post = zoom_http(token_response=zoom_response(200, user_token_payload))
        login(client)

        response = callback(client, code="the-code")

        assert response.status_code == 302
        assert response.headers["location"] == "/?oauth=success"

        token_call = calls_to(mock_post, TOKEN_URL)[0]
        assert basic_header_of(token_call) == build_basic_auth_header("abc", "xyz")
        assert token_call[1]["data"] == {
            "grant_type": "authorization_code",
            "code": "the-code",
            "redirect_uri": "http://localhost:3000/auth/callback",
        }

    def test_callback_exchange_failure_is_plain_text(
        self, client: TestClient, zoom_http, zoom_response
    ):
        zoom_http(
            token_response=zoom_response(
                400, {"reason": "Invalid authorization code", "error": "invalid_request"}
            )
        )
        login(client)

        response = callback(client, code="stale-code")

        assert response.status_code == 400
        assert response.text.startswith("OAuth callback error: ")
        assert "Invalid authorization code" in response.text

        status = client.get("/api/oauth/status").json()
        assert status["authenticated"] is False

    def test_callback_uses_latest_login(
        self, client: TestClient, zoom_http, zoom_response, user_token_payload
    ):
        mock_post = zoom_http(token_response=zoom_response(200, user_token_payload))
        login(client, client_id="first", client_secret="first_secret")
        login(client, client_id="second", client_secret="second_secret")

        callback(client, code="the-code")

        token_call = calls_to(mock_post, TOKEN_URL)[0]
        assert basic_header_of(token_call) == build_basic_auth_header(
            "second", "second_secret"
        )


class TestOAuthMeetingCreate:
    """Test cases for POST /api/oauth/meetings."""

    def test_full_flow(
        self,
        client: TestClient,
        zoom_http,
        zoom_response,
        user_token_payload,
        meeting_payload,
    ):
        mock_post = zoom_http(
            token_response=zoom_response(200, user_token_payload),
            meeting_response=zoom_response(201, meeting_payload),
        )
        login(client)
        callback(client, code="the-code")

        response = client.post("/api/oauth/meetings", json={"topic": "1:1"})

        assert response.status_code == 200
        assert response.json() == {
            "method": "oauth",
            "meeting_id": 123456789,
            "password": "p4ss",
            "host_link": "https://zoom.us/s/123456789?zak=host",
            "join_link": "https://zoom.us/j/123456789?pwd=abc",
        }
        meeting_call = calls_to(mock_post, MEETINGS_URL)[0]
        assert meeting_call[1]["headers"]["Authorization"] == "Bearer user_access_token"
        assert meeting_call[1]["json"]["topic"] == "1:1"

    def test_meeting_without_login(self, client: TestClient, zoom_http):
        mock_post = zoom_http()

        response = client.post("/api/oauth/meetings")

        assert response.status_code == 401
        assert response.json() == {"error": "Not authenticated. Start with /auth/login"}
        mock_post.assert_not_called()

    def test_meeting_after_logins_without_callback(self, client: TestClient, zoom_http):
        mock_post = zoom_http()
        for _ in range(3):
            login(client)

        response = client.post("/api/oauth/meetings")

        assert response.status_code == 401
        mock_post.assert_not_called()

    def test_tokens_survive_new_login(
        self,
        client: TestClient,
        zoom_http,
        zoom_response,
        user_token_payload,
        meeting_payload,
    ):
        zoom_http(
            token_response=zoom_response(200, user_token_payload),
            meeting_response=zoom_response(201, meeting_payload),
        )
        login(client)
        callback(client, code="the-code")
        login(client, client_id="other")

        response = client.post("/api/oauth/meetings")

        assert response.status_code == 200

    def test_rejected_token_reports_zoom_status(
        self, client: TestClient, zoom_http, zoom_response, user_token_payload
    ):
        zoom_http(
            token_response=zoom_response(200, user_token_payload),
            meeting_response=zoom_response(
                401, {"code": 124, "message": "Invalid access token."}
            ),
        )
        login(client)
        callback(client, code="the-code")

        response = client.post("/api/oauth/meetings")

        assert response.status_code == 401
        assert response.json() == {
            "error": "Failed to create meeting via OAuth",
            "details": {"code": 124, "message": "Invalid access token."},
        }

    def test_sessions_are_isolated(
        self,
        client: TestClient,
        zoom_http,
        zoom_response,
        user_token_payload,
        meeting_payload,
    ):
        mock_post = zoom_http(
            token_response=zoom_response(200, user_token_payload),
            meeting_response=zoom_response(201, meeting_payload),
        )
        login(client)
        callback(client, code="the-code")

        with TestClient(app) as other_client:
            response = other_client.post("/api/oauth/meetings")

        assert response.status_code == 401
        assert calls_to(mock_post, MEETINGS_URL) == []


class TestOAuthStatus:
    """Test cases for GET /api/oauth/status."""

    def test_status_unauthenticated(self, client: TestClient):
        response = client.get("/api/oauth/status")

        assert response.status_code == 200
        assert response.json() == {"authenticated": False, "config_stored": False}

    def test_status_authenticated_hides_tokens(
        self, client: TestClient, zoom_http, zoom_response, user_token_payload
    ):
        zoom_http(token_response=zoom_response(200, user_token_payload))
        login(client)
        callback(client, code="the-code")

        response = client.get("/api/oauth/status")

        body = response.json()
        assert body["authenticated"] is True
        assert body["config_stored"] is True
        assert body["scope"] == "meeting:write"
        assert body["expired"] is False
        assert body["expires_at"] is not None
        assert "user_access_token" not in response.text
        assert "user_refresh_token" not in response.text
