"""Endpoints for community support signals."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from registry.api.deps import get_signal_repo
from registry.auth.allowlist import require_allowlisted
from registry.repositories.signal_repo import SignalRepo, SupporterSignal
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


router = APIRouter(tags=["signals"])


@router.post(
    "/projects/{project_id}/signal",
    response_model=SignalResult,
    status_code=status.HTTP_201_CREATED,
)
async def signal_project(
    project_id: str,
    body: SignalCreate,
    response: Response,
    _address: str = Depends(require_allowlisted("address")),
    repo: SignalRepo = Depends(get_signal_repo),
):
    signal, project, created = repo.upsert(
        project_id, body.address, amount=body.amount, message=body.message
    )
    if not created:
        response.status_code = status.HTTP_200_OK
    return SignalResult(
        signal=SignalRead.model_validate(signal),
        project=ProjectSummary.model_validate(project),
    )


@router.delete("/projects/{project_id}/signal", response_model=SignalRemoved)
async def remove_signal(
    project_id: str,
    body: Optional[SignalRemove] = None,
    repo: SignalRepo = Depends(get_signal_repo),
):
    removed = repo.remove(project_id, body.address if body else None)
    return SignalRemoved(removed=removed)


def _supporter_signal(entry: SupporterSignal) -> SupporterSignalRead:
    # Project fields are left unset, and so omitted, once the project is gone.
    fields = SignalRead.model_validate(entry.signal).model_dump()
    if entry.project_name is not None:
        fields["project_name"] = entry.project_name
        fields["project_category"] = entry.project_category
    return SupporterSignalRead(**fields)


@router.get(
    "/supporters/{address}",
    response_model=SupporterRead,
    response_model_exclude_unset=True,
)
async def get_supporter(
    address: str,
    repo: SignalRepo = Depends(get_signal_repo),
):
    aggregate = repo.for_supporter(address)
    return SupporterRead(
        address=aggregate.address,
        projects_supported=aggregate.projects_supported,
        total_signal=aggregate.total_signal,
        signals=[_supporter_signal(entry) for entry in aggregate.signals],
    )
