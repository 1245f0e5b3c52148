"""Tournament organizer accounts."""

from .models import Organizer
from .services import OrganizerRepository

__all__ = ["Organizer", "OrganizerRepository"]
