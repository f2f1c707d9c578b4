"""Repository utilities for working with Project records."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from registry.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from registry.db.models.project import (
    CATEGORIES,
    DEFAULT_CATEGORY,
    MAX_TAGS,
    Project,
    utcnow,
)
from registry.db.store import RegistryStore
from registry.services.validation import is_valid_address, normalize_address

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100
DEFAULT_SEARCH_LIMIT = 20
MIN_QUERY_LENGTH = 2

SORT_SUPPORT = "support"
SORT_SIGNAL = "signal"
SORT_OLDEST = "oldest"
SORT_RECENT = "recent"

CREATE_EXAMPLE = {
    "name": "My Project",
    "description": "A cool thing",
    "url": "https://...",
    "category": "public-goods",
    "owner": "0x...",
    "tags": ["ethereum", "open-source"],
}


@dataclass
class ProjectPage:
    projects: List[Project]
    total: int
    offset: int
    limit: int


def _coerce_tags(tags: Any) -> Optional[List[str]]:
    if not isinstance(tags, list):
        return None
    return [tag for tag in tags[:MAX_TAGS] if isinstance(tag, str)]


def _sort(projects: List[Project], sort: Optional[str]) -> List[Project]:
    if sort == SORT_SUPPORT:
        return sorted(projects, key=lambda p: p.support_count, reverse=True)
    if sort == SORT_SIGNAL:
        return sorted(projects, key=lambda p: p.total_signal, reverse=True)
    if sort == SORT_OLDEST:
        return sorted(projects, key=lambda p: p.created_at)
    return sorted(projects, key=lambda p: p.created_at, reverse=True)


class ProjectRepo:
    """Data-access helper for Project records."""

    def __init__(self, store: RegistryStore) -> None:
        self.store = store

    def get_by_id(self, project_id: str) -> Optional[Project]:
        return self.store.projects.get(project_id)

    def get(self, project_id: str) -> Project:
        project = self.get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        return project

    def create(
        self,
        name: Optional[str],
        owner: Optional[str],
        description: Optional[str] = None,
        url: Optional[str] = None,
        logo: Optional[str] = None,
        category: Optional[str] = None,
        tags: Any = None,
    ) -> Project:
        if not name or not owner:
            raise ValidationError(
                "name and owner address required",
                extra={"example": CREATE_EXAMPLE},
            )
        if not is_valid_address(owner):
            raise ValidationError("Invalid owner address")

        now = utcnow()
        project = Project(
            name=name,
            owner=normalize_address(owner),
            description=description or "",
            url=url or None,
            logo=logo or None,
            category=category if category in CATEGORIES else DEFAULT_CATEGORY,
            tags=_coerce_tags(tags) or [],
            created_at=now,
            updated_at=now,
        )
        self.store.projects[project.id] = project
        logger.info(f"Project added: {project.id} {project.name!r} by {project.owner}")
        return project

    def list_projects(
        self,
        category: Optional[str] = None,
        tag: Optional[str] = None,
        min_support: Optional[int] = None,
        sort: Optional[str] = None,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> ProjectPage:
        results = list(self.store.projects.values())

        if category:
            results = [p for p in results if p.category == category]
        if tag:
            # Only the query is lowercased; stored tags keep their case.
            needle = tag.lower()
            results = [p for p in results if needle in p.tags]
        if min_support is not None:
            results = [p for p in results if p.support_count >= min_support]

        results = _sort(results, sort)

        total = len(results)
        start = min(max(offset or 0, 0), total)
        count = max(min(limit or DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE), 0)
        return ProjectPage(
            projects=results[start:start + count],
            total=total,
            offset=start,
            limit=count,
        )

    def update(self, project_id: str, changes: Dict[str, Any]) -> Project:
        """Apply a partial update; only keys present in ``changes`` are touched."""

        project = self.get(project_id)
        self._check_owner(project, changes.get("owner"))

        if changes.get("name"):
            project.name = changes["name"]
        if "description" in changes:
            project.description = changes["description"] or ""
        if "url" in changes:
            project.url = changes["url"]
        if "logo" in changes:
            project.logo = changes["logo"]
        if changes.get("category") in CATEGORIES:
            project.category = changes["category"]
        tags = _coerce_tags(changes.get("tags"))
        if tags is not None:
            project.tags = tags
        project.updated_at = utcnow()
        return project

    def delete(
        self,
        project_id: str,
        owner: Optional[str] = None,
        require_owner: bool = False,
    ) -> Tuple[str, int]:
        """Remove a project and every signal referencing it.

        Returns the deleted id and the number of signals removed with it.
        """

        project = self.get(project_id)
        if not owner:
            if require_owner:
                raise ValidationError("owner address required")
            logger.warning(f"Deleting project {project.id} without an ownership check")
        self._check_owner(project, owner)

        del self.store.projects[project.id]
        orphaned = [
            signal_id
            for signal_id, signal in self.store.signals.items()
            if signal.project_id == project.id
        ]
        for signal_id in orphaned:
            del self.store.signals[signal_id]

        logger.info(f"Project deleted: {project.id} ({len(orphaned)} signals removed)")
        return project.id, len(orphaned)

    def search(self, query: Optional[str], limit: Optional[int] = None) -> List[Project]:
        if not query or len(query) < MIN_QUERY_LENGTH:
            raise ValidationError(
                f"Query must be at least {MIN_QUERY_LENGTH} characters"
            )

        needle = query.lower()
        matches = [
            p
            for p in self.store.projects.values()
            if needle in p.name.lower()
            or needle in p.description.lower()
            or any(needle in t.lower() for t in p.tags)
        ]
        matches.sort(key=lambda p: p.support_count, reverse=True)
        if limit is None or limit <= 0:
            limit = DEFAULT_SEARCH_LIMIT
        return matches[:limit]

    @staticmethod
    def _check_owner(project: Project, owner: Optional[str]) -> None:
        if owner and normalize_address(owner) != project.owner:
            raise AuthorizationError("Not project owner")
