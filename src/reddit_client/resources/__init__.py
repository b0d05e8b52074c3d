"""Resource-specific convenience wrappers."""
from .user import UserResource, listing_children

__all__ = ["UserResource", "listing_children"]
