from typer.testing import CliRunner

from reddit_client.auth import PasswordAuth
from reddit_client.cli import app

runner = CliRunner()


def _install_dummy_client(monkeypatch, captured):
    class DummyUser:
        def about(self):
            return {"data": {"name": "alice"}}

    class DummyClient:
        def __init__(self, **kwargs):
            captured.update(kwargs)

        def user(self, name):
            captured["name"] = name
            return DummyUser()

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            return False

    monkeypatch.setattr("reddit_client.cli.RedditClient", DummyClient)


def test_cli_reads_credentials_from_env(monkeypatch):
    captured: dict[str, object] = {}
    _install_dummy_client(monkeypatch, captured)

    result = runner.invoke(
        app,
        ["user", "about", "alice", "--auth", "password"],
        env={
            "REDDIT_CLIENT_ID": "cid",
            "REDDIT_CLIENT_SECRET": "csec",
            "REDDIT_USERNAME": "alice",
            "REDDIT_PASSWORD": "pw1",
            "REDDIT_USER_AGENT": "python:env-agent:1.0",
        },
    )

    assert result.exit_code == 0
    auth = captured["auth"]
    assert isinstance(auth, PasswordAuth)
    assert auth.username == "alice"
    assert auth.client_id == "cid"
    assert captured["user_agent"] == "python:env-agent:1.0"
    assert captured["name"] == "alice"


def test_cli_env_disables_tls_verification(monkeypatch):
    captured: dict[str, object] = {}
    _install_dummy_client(monkeypatch, captured)

    result = runner.invoke(
        app,
        ["user", "about", "alice"],
        env={"REDDIT_VERIFY_SSL": "0"},
    )

    assert result.exit_code == 0
    assert captured["verify_ssl"] is False


def test_cli_password_auth_without_env_credentials_rejected(monkeypatch):
    for name in ("REDDIT_CLIENT_ID", "REDDIT_CLIENT_SECRET", "REDDIT_USERNAME", "REDDIT_PASSWORD"):
        monkeypatch.delenv(name, raising=False)

    result = runner.invoke(app, ["user", "about", "alice", "--auth", "password"])

    assert result.exit_code != 0
    assert "--client-id" in result.output
