"""Pydantic schemas for support signals"""
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from registry.schemas.base import CamelModel


class SignalCreate(BaseModel):
    address: Optional[str] = Field(default=None, description="Supporter address")
    amount: Any = Field(default=None, description="Signal weight, clamped to 1-100")
    message: Optional[str] = None


class SignalRemove(BaseModel):
    address: Optional[str] = None


class SignalRead(CamelModel):
    id: str
    project_id: str
    address: str
    amount: int
    message: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class ProjectSummary(CamelModel):
    """Trimmed project view returned alongside a signal."""

    id: str
    name: str
    support_count: int
    total_signal: int


class SignalResult(CamelModel):
    signal: SignalRead
    project: ProjectSummary


class SignalRemoved(CamelModel):
    success: bool = True
    removed: str


class SupporterSignalRead(SignalRead):
    project_name: Optional[str] = None
    project_category: Optional[str] = None


class SupporterRead(CamelModel):
    address: str
    projects_supported: int
    total_signal: int
    signals: List[SupporterSignalRead]

