"""Signal record definition"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from registry.db.models.project import new_id, utcnow


@dataclass
class Signal:
    """Weighted support from one address for one project.

    ``(project_id, address)`` is a natural key: at most one live signal
    exists per pair.
    """

    project_id: str
    address: str
    amount: int
    message: Optional[str] = None
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<Signal {self.id} project={self.project_id} address={self.address}>"
