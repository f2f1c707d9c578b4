"""Record types held by the in-memory registry store."""

from registry.db.models.project import CATEGORIES, DEFAULT_CATEGORY, Project
from registry.db.models.signal import Signal

__all__ = [
    "CATEGORIES",
    "DEFAULT_CATEGORY",
    "Project",
    "Signal",
]
