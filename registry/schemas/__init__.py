"""Request and response schemas."""

from registry.schemas.discovery import NameCount, RegistryStats
from registry.schemas.project import (
    ProjectCreate,
    ProjectDeleted,
    ProjectDetail,
    ProjectList,
    ProjectOwner,
    ProjectRead,
    ProjectUpdate,
)
from registry.schemas.signal import (
    ProjectSummary,
    SignalCreate,
    SignalRead,
    SignalRemove,
    SignalRemoved,
    SignalResult,
    SupporterRead,
    SupporterSignalRead,
)

__all__ = [
    "NameCount",
    "ProjectCreate",
    "ProjectDeleted",
    "ProjectDetail",
    "ProjectList",
    "ProjectOwner",
    "ProjectRead",
    "ProjectSummary",
    "ProjectUpdate",
    "RegistryStats",
    "SignalCreate",
    "SignalRead",
    "SignalRemove",
    "SignalRemoved",
    "SignalResult",
    "SupporterRead",
    "SupporterSignalRead",
]
