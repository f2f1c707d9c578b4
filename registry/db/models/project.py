"""Project record definition"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

CATEGORIES = (
    "public-goods",
    "defi",
    "nft",
    "social",
    "infrastructure",
    "tooling",
    "other",
)
DEFAULT_CATEGORY = "other"
MAX_TAGS = 10


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Project:
    """A self-registered entry in the registry, owned by an address.

    ``support_count`` and ``total_signal`` are denormalized from the live
    signals referencing this project and are maintained by the signal repo.
    """

    name: str
    owner: str
    description: str = ""
    url: Optional[str] = None
    logo: Optional[str] = None
    category: str = DEFAULT_CATEGORY
    tags: List[str] = field(default_factory=list)
    support_count: int = 0
    total_signal: int = 0
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<Project {self.id} owner={self.owner}>"
