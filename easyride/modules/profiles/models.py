"""Domain models for user profiles."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Role(str, Enum):
    PASSENGER = "passenger"
    ADMIN = "admin"
    CONDUCTOR = "conductor"

    @classmethod
    def normalize(cls, value: str | None) -> "Role":
        """Map a stored role string to a known role; ``student`` is a legacy passenger."""
        if not value:
            return cls.PASSENGER
        value = value.strip().lower()
        if value == "student":
            return cls.PASSENGER
        try:
            return cls(value)
        except ValueError:
            return cls.PASSENGER


@dataclass(slots=True)
class Profile:
    id: str
    full_name: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
