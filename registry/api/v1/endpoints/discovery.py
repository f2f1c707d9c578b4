"""Discovery endpoints: categories, tags, search and counters."""
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends

from registry.api.deps import get_project_repo, get_store
from registry.db.store import RegistryStore
from registry.repositories.project_repo import ProjectRepo
from registry.schemas.discovery import NameCount, RegistryStats
from registry.schemas.project import ProjectRead
from registry.services.discovery import category_counts, registry_stats, tag_counts
from registry.services.validation import parse_int


router = APIRouter(tags=["discovery"])


@router.get("/categories", response_model=List[NameCount])
async def list_categories(store: RegistryStore = Depends(get_store)):
    return category_counts(store)


@router.get("/tags", response_model=List[NameCount])
async def list_tags(store: RegistryStore = Depends(get_store)):
    return tag_counts(store)


@router.get("/search", response_model=List[ProjectRead])
async def search_projects(
    q: Optional[str] = None,
    limit: Optional[str] = None,
    repo: ProjectRepo = Depends(get_project_repo),
):
    return [ProjectRead.model_validate(p) for p in repo.search(q, parse_int(limit))]


@router.get("/stats", response_model=RegistryStats)
async def stats(store: RegistryStore = Depends(get_store)):
    return RegistryStats(**registry_stats(store))
