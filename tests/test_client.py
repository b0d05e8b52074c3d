import pytest
import requests
from urllib3.exceptions import InsecureRequestWarning

from reddit_client import RedditClient
from reddit_client.auth import AnonymousAuth, PasswordAuth, SharedAuth
from reddit_client.clock import FixedClock
from reddit_client.config import REVOKE_URL, TOKEN_URL
from reddit_client.exceptions import (
    AuthenticationError,
    HttpStatusError,
    RedditError,
    TransportError,
)

T0 = 1_700_000_000_000
USER_AGENT = "python:test-suite:1.0 (by /u/alice)"


def build_password_client(clock=None, **kwargs):
    auth = PasswordAuth("cid", "csec", "alice", "pw1", clock=clock or FixedClock(T0))
    return RedditClient(auth=auth, user_agent=USER_AGENT, **kwargs)


def test_anonymous_request_uses_public_host(requests_mock):
    client = RedditClient(auth=AnonymousAuth(), user_agent=USER_AGENT)
    matcher = requests_mock.get(
        "https://www.reddit.com/user/alice/about.json",
        json={"kind": "t2", "data": {"name": "alice"}},
    )

    about = client.user("alice").about()

    assert about["data"]["name"] == "alice"
    sent = matcher.last_request
    assert sent.headers["User-Agent"] == USER_AGENT
    assert "Authorization" not in sent.headers


def test_password_client_logs_in_before_first_request(requests_mock):
    client = build_password_client()
    token = requests_mock.post(TOKEN_URL, json={"access_token": "tok123", "expires_in": 3600})
    matcher = requests_mock.get(
        "https://oauth.reddit.com/user/alice/comments.json",
        json={"kind": "Listing", "data": {"children": []}},
    )

    client.user("alice").comments()

    assert token.call_count == 1
    assert matcher.last_request.headers["Authorization"] == "Bearer tok123"


def test_password_client_refreshes_expired_token(requests_mock):
    clock = FixedClock(T0)
    client = build_password_client(clock=clock)
    token = requests_mock.post(
        TOKEN_URL,
        [
            {"json": {"access_token": "tok123", "expires_in": 60}},
            {"json": {"access_token": "tok456", "expires_in": 60}},
        ],
    )
    matcher = requests_mock.get("https://oauth.reddit.com/api/v1/me", json={"name": "alice"})

    client.get_json("/api/v1/me")
    client.get_json("/api/v1/me")
    assert token.call_count == 1

    clock.advance(seconds=60)
    client.get_json("/api/v1/me")

    assert token.call_count == 2
    assert matcher.last_request.headers["Authorization"] == "Bearer tok456"


def test_explicit_login_and_logout(requests_mock):
    client = build_password_client()
    requests_mock.post(TOKEN_URL, json={"access_token": "tok123", "expires_in": 3600})
    revoke = requests_mock.post(REVOKE_URL)

    assert client.login() is True
    assert client.auth.needs_refresh() is False
    client.logout()

    assert revoke.called
    assert client.auth.strategy.token is None


def test_clients_can_share_one_handle(requests_mock):
    shared = SharedAuth(PasswordAuth("cid", "csec", "alice", "pw1", clock=FixedClock(T0)))
    token = requests_mock.post(TOKEN_URL, json={"access_token": "tok123", "expires_in": 3600})
    requests_mock.get("https://oauth.reddit.com/api/v1/me", json={})
    first = RedditClient(auth=shared, user_agent=USER_AGENT)
    second = RedditClient(auth=shared, user_agent=USER_AGENT)

    first.get_json("/api/v1/me")
    second.get_json("/api/v1/me")

    assert first.auth is second.auth is shared
    assert token.call_count == 1


def test_oauth_only_endpoint_rejected_for_anonymous(requests_mock):
    client = RedditClient(auth=AnonymousAuth(), user_agent=USER_AGENT)

    with pytest.raises(AuthenticationError):
        client.user("alice").saved()

    assert requests_mock.call_count == 0


def test_non_success_status_raises(requests_mock):
    client = RedditClient(auth=AnonymousAuth(), user_agent=USER_AGENT)
    requests_mock.get(
        "https://www.reddit.com/user/ghost/about.json",
        status_code=404,
        json={"message": "Not Found", "error": 404},
    )

    with pytest.raises(HttpStatusError) as excinfo:
        client.user("ghost").about()

    assert excinfo.value.status_code == 404


def test_request_params_are_forwarded(requests_mock):
    client = RedditClient(auth=AnonymousAuth(), user_agent=USER_AGENT)
    matcher = requests_mock.get(
        "https://www.reddit.com/user/alice/submitted.json",
        json={"kind": "Listing", "data": {"children": []}},
    )

    client.user("alice").submissions({"limit": "5", "after": "t3_abc"})

    assert matcher.last_request.qs == {"limit": ["5"], "after": ["t3_abc"]}


def test_request_logging_includes_oauth_flag(caplog, requests_mock):
    client = RedditClient(auth=AnonymousAuth(), user_agent=USER_AGENT)
    requests_mock.get("https://www.reddit.com/r/python/about.json", json={})

    with caplog.at_level("INFO", logger="reddit_client.client"):
        client.get_json("/r/python/about.json")

    assert "GET https://www.reddit.com/r/python/about.json (oauth=False)" in caplog.text


def test_request_error_includes_root_cause():
    class ExplodingSession:
        verify = True

        def request(self, *args, **kwargs):  # pragma: no cover - helper
            raise requests.exceptions.SSLError("CERTIFICATE_VERIFY_FAILED")

        def close(self):  # pragma: no cover - helper
            pass

    client = RedditClient(
        auth=AnonymousAuth(),
        user_agent=USER_AGENT,
        session=ExplodingSession(),
    )

    with pytest.raises(TransportError) as excinfo:
        client.user("alice").about()

    assert "CERTIFICATE_VERIFY_FAILED" in str(excinfo.value)


def test_disables_insecure_warning_when_verify_disabled(monkeypatch):
    captured: list[object] = []

    def fake_disable(warning):  # pragma: no cover - helper
        captured.append(warning)

    monkeypatch.setattr(
        "reddit_client.client.urllib3.disable_warnings",
        fake_disable,
    )

    client = RedditClient(auth=AnonymousAuth(), user_agent=USER_AGENT, verify_ssl=False)

    assert captured and captured[0] is InsecureRequestWarning
    assert client._session.verify is False


def test_custom_hosts_and_default_headers(requests_mock):
    client = RedditClient(
        auth=AnonymousAuth(),
        user_agent=USER_AGENT,
        base_url="https://reddit.test/",
        default_headers={"Accept-Language": "en"},
    )
    matcher = requests_mock.get("https://reddit.test/user/alice/about.json", json={})

    client.user("alice").about()

    assert matcher.last_request.headers["Accept-Language"] == "en"


def test_supplied_session_keeps_its_ca_bundle(requests_mock):
    session = requests.Session()
    session.verify = "/etc/ssl/custom-ca.pem"
    requests_mock.post(TOKEN_URL, json={"access_token": "tok123", "expires_in": 3600})
    matcher = requests_mock.get("https://oauth.reddit.com/api/v1/me", json={})
    client = build_password_client(session=session)

    client.get_json("/api/v1/me")

    assert session.verify == "/etc/ssl/custom-ca.pem"
    assert client.config.verify_ssl == "/etc/ssl/custom-ca.pem"
    assert matcher.last_request.verify == "/etc/ssl/custom-ca.pem"


def test_explicit_verify_overrides_supplied_session():
    session = requests.Session()
    session.verify = "/etc/ssl/custom-ca.pem"

    RedditClient(
        auth=AnonymousAuth(), user_agent=USER_AGENT, session=session, verify_ssl="/tmp/ca.pem"
    )

    assert session.verify == "/tmp/ca.pem"


def test_own_session_verifies_by_default():
    client = RedditClient(auth=AnonymousAuth(), user_agent=USER_AGENT)
    assert client._session.verify is True


@pytest.mark.parametrize(
    "url",
    [
        "https://evil.test/collect",
        "http://oauth.reddit.com/api/v1/me",
        "//evil.test/collect",
    ],
)
def test_foreign_absolute_url_rejected_before_token_is_sent(requests_mock, url):
    client = build_password_client()

    with pytest.raises(RedditError):
        client.get_json(url)

    assert requests_mock.call_count == 0
    assert client.auth.strategy.token is None


def test_absolute_url_on_platform_host_is_allowed(requests_mock):
    client = build_password_client()
    requests_mock.post(TOKEN_URL, json={"access_token": "tok123", "expires_in": 3600})
    matcher = requests_mock.get("https://oauth.reddit.com/api/v1/me", json={"name": "alice"})

    assert client.get_json("https://OAUTH.reddit.com/api/v1/me") == {"name": "alice"}
    assert matcher.last_request.headers["Authorization"] == "Bearer tok123"


def test_response_logging_reports_status_and_ratelimit(caplog, requests_mock):
    client = RedditClient(auth=AnonymousAuth(), user_agent=USER_AGENT)
    requests_mock.get(
        "https://www.reddit.com/r/python/about.json",
        json={},
        headers={"x-ratelimit-remaining": "99.0"},
    )

    with caplog.at_level("DEBUG", logger="reddit_client.client"):
        client.get_json("/r/python/about.json")

    assert "Reddit response 200 (ratelimit remaining=99.0)" in caplog.text
