"""User profile directory (owned by the identity provider)."""

from .models import Profile, Role
from .service import ProfileService

__all__ = ["Profile", "ProfileService", "Role"]
