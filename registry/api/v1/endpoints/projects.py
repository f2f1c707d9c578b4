"""Endpoints for registering and managing projects."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from registry.api.deps import get_project_repo, get_signal_repo
from registry.auth.allowlist import require_allowlisted
from registry.core.config import settings
from registry.repositories.project_repo import ProjectRepo
from registry.repositories.signal_repo import SignalRepo
from registry.schemas.project import (
    ProjectCreate,
    ProjectDeleted,
    ProjectDetail,
    ProjectList,
    ProjectOwner,
    ProjectRead,
    ProjectUpdate,
)
from registry.schemas.signal import SignalRead
from registry.services.validation import parse_int


router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
async def create_project(
    body: ProjectCreate,
    _address: str = Depends(require_allowlisted("owner")),
    repo: ProjectRepo = Depends(get_project_repo),
):
    project = repo.create(**body.model_dump())
    return ProjectRead.model_validate(project)


@router.get("", response_model=ProjectList)
async def list_projects(
    category: Optional[str] = None,
    tag: Optional[str] = None,
    min_support: Optional[str] = Query(default=None, alias="minSupport"),
    sort: Optional[str] = None,
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    repo: ProjectRepo = Depends(get_project_repo),
):
    page = repo.list_projects(
        category=category,
        tag=tag,
        min_support=parse_int(min_support),
        sort=sort,
        offset=parse_int(offset),
        limit=parse_int(limit),
    )
    return ProjectList(
        projects=[ProjectRead.model_validate(p) for p in page.projects],
        total=page.total,
        offset=page.offset,
        limit=page.limit,
    )


@router.get("/{project_id}", response_model=ProjectDetail)
async def get_project(
    project_id: str,
    repo: ProjectRepo = Depends(get_project_repo),
    signal_repo: SignalRepo = Depends(get_signal_repo),
):
    project = repo.get(project_id)
    supporters = signal_repo.recent_for_project(project.id)
    return ProjectDetail(
        **ProjectRead.model_validate(project).model_dump(),
        recent_supporters=[SignalRead.model_validate(s) for s in supporters],
    )


@router.put("/{project_id}", response_model=ProjectRead)
async def update_project(
    project_id: str,
    body: ProjectUpdate,
    _address: str = Depends(require_allowlisted("owner")),
    repo: ProjectRepo = Depends(get_project_repo),
):
    project = repo.update(project_id, body.model_dump(exclude_unset=True))
    return ProjectRead.model_validate(project)


@router.delete("/{project_id}", response_model=ProjectDeleted)
async def delete_project(
    project_id: str,
    body: Optional[ProjectOwner] = None,
    repo: ProjectRepo = Depends(get_project_repo),
):
    deleted, _ = repo.delete(
        project_id,
        owner=body.owner if body else None,
        require_owner=settings.registry.require_owner_on_delete,
    )
    return ProjectDeleted(deleted=deleted)
