"""Pydantic schemas for Project resources"""
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from registry.schemas.base import CamelModel
from registry.schemas.signal import SignalRead


class ProjectCreate(BaseModel):
    """Schema for registering a project.

    Fields are loose on purpose: missing or unrecognized values are
    reported or coerced by the repository.
    """

    name: Optional[str] = Field(default=None, description="Project name")
    owner: Optional[str] = Field(default=None, description="Owner address")
    description: Optional[str] = None
    url: Optional[str] = None
    logo: Optional[str] = None
    category: Optional[str] = Field(
        default=None, description="One of the fixed categories; anything else becomes 'other'"
    )
    tags: Any = Field(default=None, description="Up to 10 tags")


class ProjectUpdate(ProjectCreate):
    """Partial update; only fields present in the request are applied."""


class ProjectOwner(BaseModel):
    owner: Optional[str] = None


class ProjectRead(CamelModel):
    """Schema returned when reading a project."""

    id: str
    name: str
    description: str = ""
    url: Optional[str] = None
    logo: Optional[str] = None
    category: str
    tags: List[str] = Field(default_factory=list)
    owner: str
    support_count: int = 0
    total_signal: int = 0
    created_at: datetime
    updated_at: datetime


class ProjectDetail(ProjectRead):
    recent_supporters: List[SignalRead] = Field(default_factory=list)


class ProjectList(CamelModel):
    projects: List[ProjectRead]
    total: int
    offset: int
    limit: int


class ProjectDeleted(CamelModel):
    success: bool = True
    deleted: str
