"""Authentication strategies for the Reddit API."""
from .anonymous import AnonymousAuth
from .base import AuthStrategy
from .password import PasswordAuth
from .shared import SharedAuth

__all__ = ["AuthStrategy", "AnonymousAuth", "PasswordAuth", "SharedAuth"]
