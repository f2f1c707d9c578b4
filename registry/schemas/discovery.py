"""Pydantic schemas for discovery and utility endpoints"""
from registry.schemas.base import CamelModel


class NameCount(CamelModel):
    name: str
    count: int


class RegistryStats(CamelModel):
    total_projects: int
    total_signals: int
    total_signal_amount: int
    unique_supporters: int
    categories: int
