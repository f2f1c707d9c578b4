"""Repository helpers for support signals."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from registry.core.exceptions import NotFoundError, ValidationError
from registry.db.models.project import Project, utcnow
from registry.db.models.signal import Signal
from registry.db.store import RegistryStore
from registry.services.validation import (
    clamp,
    is_valid_address,
    normalize_address,
    parse_int,
)

logger = logging.getLogger(__name__)

MIN_AMOUNT = 1
MAX_AMOUNT = 100
RECENT_SUPPORTERS = 20


@dataclass
class SupporterSignal:
    signal: Signal
    project_name: Optional[str] = None
    project_category: Optional[str] = None


@dataclass
class SupporterAggregate:
    address: str
    projects_supported: int
    total_signal: int
    signals: List[SupporterSignal]


def clamp_amount(amount: Any) -> int:
    """Parse a signal amount, defaulting to 1 and clamping into [1, 100]."""

    return clamp(parse_int(amount) or MIN_AMOUNT, MIN_AMOUNT, MAX_AMOUNT)


class SignalRepo:
    """Maintains signals and the counters they denormalize onto projects."""

    def __init__(self, store: RegistryStore) -> None:
        self.store = store

    def _project(self, project_id: str) -> Project:
        project = self.store.projects.get(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        return project

    def find(self, project_id: str, address: str) -> Optional[Signal]:
        address = normalize_address(address)
        for signal in self.store.signals.values():
            if signal.project_id == project_id and signal.address == address:
                return signal
        return None

    def upsert(
        self,
        project_id: str,
        address: Optional[str],
        amount: Any = None,
        message: Optional[str] = None,
    ) -> Tuple[Signal, Project, bool]:
        """Record support from ``address``.

        Repeat signals from the same address accumulate into the existing
        record. Returns the signal, its project and whether it was created.
        """

        project = self._project(project_id)
        if not address:
            raise ValidationError("address required")
        if not is_valid_address(address):
            raise ValidationError("Invalid address")

        signal_amount = clamp_amount(amount)
        existing = self.find(project.id, address)
        if existing is not None:
            existing.amount += signal_amount
            existing.message = message or existing.message
            existing.updated_at = utcnow()
            project.total_signal += signal_amount
            return existing, project, False

        signal = Signal(
            project_id=project.id,
            address=normalize_address(address),
            amount=signal_amount,
            message=message or None,
        )
        self.store.signals[signal.id] = signal
        project.support_count += 1
        project.total_signal += signal_amount
        logger.info(
            f"Signal: {signal.address} supported {project.name!r} with {signal_amount}"
        )
        return signal, project, True

    def remove(self, project_id: str, address: Optional[str]) -> str:
        project = self._project(project_id)
        if not address:
            raise ValidationError("address required")

        existing = self.find(project.id, address)
        if existing is None:
            raise NotFoundError("Signal not found")

        # Floored at zero in case the counters ever drifted.
        project.support_count = max(0, project.support_count - 1)
        project.total_signal = max(0, project.total_signal - existing.amount)
        del self.store.signals[existing.id]
        return existing.id

    def recent_for_project(
        self, project_id: str, limit: int = RECENT_SUPPORTERS
    ) -> List[Signal]:
        signals = [s for s in self.store.signals.values() if s.project_id == project_id]
        signals.sort(key=lambda s: s.created_at, reverse=True)
        return signals[:limit]

    def for_supporter(self, address: str) -> SupporterAggregate:
        if not is_valid_address(address):
            raise ValidationError("Invalid address")

        address = normalize_address(address)
        entries = []
        for signal in self.store.signals.values():
            if signal.address != address:
                continue
            project = self.store.projects.get(signal.project_id)
            entries.append(
                SupporterSignal(
                    signal=signal,
                    project_name=project.name if project else None,
                    project_category=project.category if project else None,
                )
            )
        entries.sort(key=lambda e: e.signal.created_at, reverse=True)

        return SupporterAggregate(
            address=address,
            projects_supported=len({e.signal.project_id for e in entries}),
            total_signal=sum(e.signal.amount for e in entries),
            signals=entries,
        )
