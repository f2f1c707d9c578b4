"""Aggregate views derived from the current registry contents."""
from __future__ import annotations

from collections import Counter
from typing import Dict, List

from registry.db.models.project import CATEGORIES, Project
from registry.db.store import RegistryStore

TOP_TAGS = 50


def category_counts(store: RegistryStore) -> List[Dict[str, object]]:
    """Count projects per category, zero-count categories included."""

    counts: Dict[str, int] = {name: 0 for name in CATEGORIES}
    for project in store.projects.values():
        counts[project.category] = counts.get(project.category, 0) + 1
    return sorted(
        ({"name": name, "count": count} for name, count in counts.items()),
        key=lambda entry: entry["count"],
        reverse=True,
    )


def tag_counts(store: RegistryStore, limit: int = TOP_TAGS) -> List[Dict[str, object]]:
    counts: Counter = Counter()
    for project in store.projects.values():
        counts.update(project.tags)
    return [{"name": name, "count": count} for name, count in counts.most_common(limit)]


def registry_stats(store: RegistryStore) -> Dict[str, int]:
    signals = list(store.signals.values())
    return {
        "total_projects": len(store.projects),
        "total_signals": len(signals),
        "total_signal_amount": sum(s.amount for s in signals),
        "unique_supporters": len({s.address for s in signals}),
        "categories": len(CATEGORIES),
    }


def top_projects(store: RegistryStore, limit: int = 5) -> List[Project]:
    return sorted(
        store.projects.values(), key=lambda p: p.support_count, reverse=True
    )[:limit]
