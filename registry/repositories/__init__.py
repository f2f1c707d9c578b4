"""Repository layer package."""

from registry.repositories.project_repo import ProjectPage, ProjectRepo
from registry.repositories.signal_repo import SignalRepo, SupporterAggregate

__all__ = [
    "ProjectPage",
    "ProjectRepo",
    "SignalRepo",
    "SupporterAggregate",
]
