"""Command-line interface for reading Reddit profiles."""
from __future__ import annotations

import json
import os
from collections.abc import Mapping, Sequence
from typing import Any

import typer

try:  # pragma: no cover - exercised in runtime environments
    from rich import box
    from rich.console import Console
    from rich.table import Table
except ImportError as exc:  # pragma: no cover - optional dependency guard
    raise RuntimeError(
        "The CLI requires Rich for table rendering. Install the CLI extras via "
        "'pip install reddit-client-python[cli]' to enable this command."
    ) from exc

from . import RedditClient
from .auth.anonymous import AnonymousAuth
from .auth.password import PasswordAuth
from .cli_schema import CLI_TABLE_VIEWS, TableView
from .clock import now_millis
from .config import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from .exceptions import RedditError
from .resources import listing_children

app = typer.Typer(help="Reddit profile CLI.", no_args_is_help=True)

auth_app = typer.Typer(help="Authentication operations.")
user_app = typer.Typer(help="User profile operations.")
app.add_typer(auth_app, name="auth")
app.add_typer(user_app, name="user")


def _build_client(
    auth: str,
    client_id: str | None,
    client_secret: str | None,
    username: str | None,
    password: str | None,
    user_agent: str,
    verify_ssl: bool,
    timeout: float,
) -> RedditClient:
    auth = auth.lower()
    if auth not in {"anonymous", "password"}:
        raise typer.BadParameter("--auth must be either 'anonymous' or 'password'.")

    if auth == "password":
        missing = [
            flag
            for flag, value in (
                ("--client-id", client_id),
                ("--client-secret", client_secret),
                ("--username", username),
                ("--password", password),
            )
            if not value
        ]
        if missing:
            raise typer.BadParameter(
                f"{', '.join(missing)} required when --auth password is selected."
            )
        strategy = PasswordAuth(client_id, client_secret, username, password)
    else:
        strategy = AnonymousAuth()

    return RedditClient(
        auth=strategy,
        user_agent=user_agent,
        timeout=timeout,
        verify_ssl=verify_ssl,
    )


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2))


console = Console(force_terminal=False, color_system=None)


def _render_rich_table(view: TableView, rows: Sequence[Mapping[str, Any]]) -> None:
    table = Table(
        title=view.title,
        box=box.SIMPLE,
        show_lines=False,
        header_style="bold cyan",
    )
    for column in view.columns:
        table.add_column(column.header, justify=column.justify)
    ordered_rows = list(rows)
    if view.sort_key:
        ordered_rows.sort(key=view.sort_key)
    for row in ordered_rows:
        table.add_row(*(column.render(row) for column in view.columns))
    console.print(table)


def _present_listing(payload: Any, *, view_id: str, json_output: bool) -> None:
    if json_output:
        _echo_json(payload)
        return
    rows = listing_children(payload)
    if not rows:
        _echo_json(payload)
        return
    _render_rich_table(CLI_TABLE_VIEWS[view_id], rows)


def _handle_error(exc: RedditError) -> None:
    if exc.status_code is not None:
        message = f"Request failed (status {exc.status_code}): {exc}"
    else:
        message = f"Request failed: {exc}"
    if exc.details:
        message += f"\nDetails: {exc.details}"
    typer.secho(message, err=True, fg=typer.colors.RED)
    raise typer.Exit(code=1)


def _listing_params(limit: int | None, after: str | None) -> dict[str, str]:
    params: dict[str, str] = {}
    if limit is not None:
        params["limit"] = str(limit)
    if after:
        params["after"] = after
    return params


def _shared_options() -> dict[str, Any]:  # pragma: no cover - helper indirection
    # Respect REDDIT_VERIFY_SSL when present (1/0, true/false, yes/no).
    env_verify = os.getenv("REDDIT_VERIFY_SSL")
    if env_verify is None:
        default_verify = True
    else:
        default_verify = env_verify.strip().lower() not in {"0", "false", "no", "off"}

    return {
        "auth": typer.Option(
            "anonymous",
            "--auth",
            "-a",
            case_sensitive=False,
            help="Authentication strategy to use (anonymous or password).",
        ),
        "client_id": typer.Option(
            None, "--client-id", envvar="REDDIT_CLIENT_ID", help="OAuth application id."
        ),
        "client_secret": typer.Option(
            None,
            "--client-secret",
            envvar="REDDIT_CLIENT_SECRET",
            help="OAuth application secret.",
            hide_input=True,
        ),
        "username": typer.Option(
            None,
            "--username",
            "-u",
            envvar="REDDIT_USERNAME",
            help="Account name for password auth.",
        ),
        "password": typer.Option(
            None,
            "--password",
            "-p",
            envvar="REDDIT_PASSWORD",
            help="Account password for password auth.",
            hide_input=True,
        ),
        "user_agent": typer.Option(
            DEFAULT_USER_AGENT,
            "--user-agent",
            envvar="REDDIT_USER_AGENT",
            help="User-Agent sent with every request.",
        ),
        "verify_ssl": typer.Option(
            default_verify,
            "--verify/--no-verify",
            envvar="REDDIT_VERIFY_SSL",
            help="Enable or disable TLS certificate verification.",
            show_default=True,
        ),
        "timeout": typer.Option(
            DEFAULT_TIMEOUT, help="Request timeout (seconds).", show_default=True
        ),
        "output_json": typer.Option(
            False,
            "--json",
            "-j",
            help="Return raw JSON instead of rendering a table.",
        ),
        "limit": typer.Option(None, "--limit", help="Maximum number of items to return."),
        "after": typer.Option(None, "--after", help="Fullname of the item to page after."),
    }


_SHARED_OPTIONS = _shared_options()


@auth_app.command("check")
def auth_check(
    client_id: str | None = _SHARED_OPTIONS["client_id"],
    client_secret: str | None = _SHARED_OPTIONS["client_secret"],
    username: str | None = _SHARED_OPTIONS["username"],
    password: str | None = _SHARED_OPTIONS["password"],
    user_agent: str = _SHARED_OPTIONS["user_agent"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    keep_token: bool = typer.Option(
        False,
        "--keep-token/--revoke",
        help="Leave the issued token valid instead of revoking it.",
    ),
) -> None:
    """Log in with the password grant and report the token lifetime."""

    with _build_client(
        auth="password",
        client_id=client_id,
        client_secret=client_secret,
        username=username,
        password=password,
        user_agent=user_agent,
        verify_ssl=verify_ssl,
        timeout=timeout,
    ) as client:
        try:
            client.login()
            with client.auth.locked() as strategy:
                expires_at = strategy.expiration_time
            summary = {
                "oauth": client.auth.supports_oauth(),
                "expiresAt": expires_at,
                "expiresIn": max(0, (expires_at - now_millis()) // 1000),
                "revoked": not keep_token,
            }
            if not keep_token:
                client.logout()
        except RedditError as exc:
            _handle_error(exc)
            return

    _echo_json(summary)


@user_app.command("about")
def user_about(
    name: str = typer.Argument(..., help="Account name."),
    auth: str = _SHARED_OPTIONS["auth"],
    client_id: str | None = _SHARED_OPTIONS["client_id"],
    client_secret: str | None = _SHARED_OPTIONS["client_secret"],
    username: str | None = _SHARED_OPTIONS["username"],
    password: str | None = _SHARED_OPTIONS["password"],
    user_agent: str = _SHARED_OPTIONS["user_agent"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    timeout: float = _SHARED_OPTIONS["timeout"],
) -> None:
    """Show a user's public profile."""

    with _build_client(
        auth=auth,
        client_id=client_id,
        client_secret=client_secret,
        username=username,
        password=password,
        user_agent=user_agent,
        verify_ssl=verify_ssl,
        timeout=timeout,
    ) as client:
        try:
            about = client.user(name).about()
        except RedditError as exc:
            _handle_error(exc)
            return

    _echo_json(about)


def _listing_command(command: str, view_id: str, help_text: str) -> None:
    def _command(
        name: str = typer.Argument(..., help="Account name."),
        auth: str = _SHARED_OPTIONS["auth"],
        client_id: str | None = _SHARED_OPTIONS["client_id"],
        client_secret: str | None = _SHARED_OPTIONS["client_secret"],
        username: str | None = _SHARED_OPTIONS["username"],
        password: str | None = _SHARED_OPTIONS["password"],
        user_agent: str = _SHARED_OPTIONS["user_agent"],
        verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
        timeout: float = _SHARED_OPTIONS["timeout"],
        limit: int | None = _SHARED_OPTIONS["limit"],
        after: str | None = _SHARED_OPTIONS["after"],
        output_json: bool = _SHARED_OPTIONS["output_json"],
    ) -> None:
        with _build_client(
            auth=auth,
            client_id=client_id,
            client_secret=client_secret,
            username=username,
            password=password,
            user_agent=user_agent,
            verify_ssl=verify_ssl,
            timeout=timeout,
        ) as client:
            fetch = getattr(client.user(name), command)
            try:
                listing = fetch(_listing_params(limit, after))
            except RedditError as exc:
                _handle_error(exc)
                return

        _present_listing(listing, view_id=view_id, json_output=output_json)

    _command.__doc__ = help_text
    user_app.command(command)(_command)


_listing_command("comments", "user.comments", "List a user's comments.")
_listing_command("submissions", "user.submissions", "List a user's submissions.")
_listing_command("overview", "user.listing", "List a user's comments and submissions.")
_listing_command("saved", "user.listing", "List the logged-in user's saved items.")
