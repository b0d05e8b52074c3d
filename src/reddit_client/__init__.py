"""High-level Reddit client entrypoints."""
from .auth import AnonymousAuth, AuthStrategy, PasswordAuth, SharedAuth
from .client import RedditClient
from .clock import FixedClock, SystemClock
from .config import ClientConfig
from .exceptions import RedditError

__all__ = [
    "RedditClient",
    "ClientConfig",
    "RedditError",
    "AuthStrategy",
    "AnonymousAuth",
    "PasswordAuth",
    "SharedAuth",
    "FixedClock",
    "SystemClock",
]
