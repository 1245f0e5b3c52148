"""Data models for organizers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class Organizer:
    """An organizer document in the realtime database."""

    username: Optional[str] = None
    password: Optional[str] = None
    email: Optional[str] = None
    full_name: Optional[str] = None
    created_date: Optional[str] = None
    id: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Organizer:
        """Build an organizer from its stored document."""
        return cls(
            id=int(data.get("id") or 0),
            username=data.get("username"),
            password=data.get("password"),
            email=data.get("email"),
            full_name=data.get("fullName"),
            created_date=data.get("createdDate"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the stored document for this organizer."""
        return {
            "id": self.id,
            "username": self.username,
            "password": self.password,
            "email": self.email,
            "fullName": self.full_name,
            "createdDate": self.created_date,
        }

    def public_dict(self) -> dict[str, Any]:
        """Return the document without the password hash."""
        data = self.to_dict()
        data.pop("password", None)
        return data
