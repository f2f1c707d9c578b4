"""Process-lifetime storage for projects and signals."""
from __future__ import annotations

from typing import Dict

from registry.db.models.project import Project
from registry.db.models.signal import Signal


class RegistryStore:
    """The two keyed collections every repository works against.

    Nothing is persisted: a store lives as long as the application that
    owns it. Repositories mutate it without awaiting, so every repository
    call runs to completion before another request touches the store.
    """

    def __init__(self) -> None:
        self.projects: Dict[str, Project] = {}
        self.signals: Dict[str, Signal] = {}
