from __future__ import annotations

import random

import pytest

from registry.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from registry.db.store import RegistryStore
from registry.repositories.project_repo import ProjectRepo
from registry.repositories.signal_repo import SignalRepo, clamp_amount

OWNER = "0x" + "11" * 20
ADDRESSES = ["0x" + f"{i:040x}" for i in range(1, 9)]


@pytest.fixture
def store() -> RegistryStore:
    return RegistryStore()


@pytest.fixture
def projects(store: RegistryStore) -> ProjectRepo:
    return ProjectRepo(store)


@pytest.fixture
def signals(store: RegistryStore) -> SignalRepo:
    return SignalRepo(store)


def assert_counters_consistent(store: RegistryStore) -> None:
    for project in store.projects.values():
        live = [s for s in store.signals.values() if s.project_id == project.id]
        assert project.support_count == len(live)
        assert project.total_signal == sum(s.amount for s in live)
    pairs = [(s.project_id, s.address) for s in store.signals.values()]
    assert len(pairs) == len(set(pairs))
    assert all(s.project_id in store.projects for s in store.signals.values())


def test_counters_track_live_signals(store, projects, signals):
    rng = random.Random(7)
    ids = [projects.create(name=f"P{i}", owner=OWNER).id for i in range(4)]

    for _ in range(200):
        project_id = rng.choice(ids)
        address = rng.choice(ADDRESSES)
        roll = rng.random()
        if roll < 0.6:
            signals.upsert(project_id, address, amount=rng.randint(-5, 150))
        elif roll < 0.95:
            try:
                signals.remove(project_id, address)
            except NotFoundError:
                pass
        else:
            projects.delete(project_id)
            ids.remove(project_id)
            ids.append(projects.create(name="Replacement", owner=OWNER).id)
        assert_counters_consistent(store)


def test_pagination_never_overruns(projects):
    for i in range(7):
        projects.create(name=f"P{i}", owner=OWNER)

    for offset in (None, 0, 3, 6, 7, 20, -4):
        for limit in (None, 0, 1, 5, 150, -2):
            page = projects.list_projects(offset=offset, limit=limit)
            assert page.offset + len(page.projects) <= page.total
            assert len(page.projects) <= min(page.limit, 100)
            assert page.total == 7


def test_delete_cascades_to_signals(store, projects, signals):
    keep = projects.create(name="Keep", owner=OWNER)
    drop = projects.create(name="Drop", owner=OWNER)
    signals.upsert(keep.id, ADDRESSES[0])
    signals.upsert(drop.id, ADDRESSES[0])
    signals.upsert(drop.id, ADDRESSES[1])

    deleted, removed = projects.delete(drop.id, owner=OWNER)

    assert deleted == drop.id
    assert removed == 2
    assert [s.project_id for s in store.signals.values()] == [keep.id]
    aggregate = signals.for_supporter(ADDRESSES[0])
    assert aggregate.projects_supported == 1
    assert aggregate.signals[0].project_name == "Keep"


def test_owner_checks_are_case_insensitive(projects):
    project = projects.create(name="Foo", owner=OWNER)

    with pytest.raises(AuthorizationError):
        projects.update(project.id, {"owner": ADDRESSES[0], "name": "Bar"})
    with pytest.raises(AuthorizationError):
        projects.delete(project.id, owner=ADDRESSES[0])

    updated = projects.update(project.id, {"owner": OWNER.upper(), "name": ""})
    assert updated.name == "Foo"


def test_create_validation(projects):
    with pytest.raises(ValidationError):
        projects.create(name="", owner=OWNER)
    with pytest.raises(ValidationError):
        projects.create(name="Foo", owner=None)
    with pytest.raises(ValidationError):
        projects.create(name="Foo", owner="0x1234")

    project = projects.create(name="Foo", owner=OWNER, tags="eth")
    assert project.tags == []


def test_search_rejects_short_queries(projects):
    projects.create(name="xy", owner=OWNER)

    with pytest.raises(ValidationError):
        projects.search("x")
    assert [p.name for p in projects.search("xy")] == ["xy"]


@pytest.mark.parametrize(
    "raw, expected",
    [(None, 1), (0, 1), (-3, 1), (5, 5), ("7", 7), ("12abc", 12), (4.9, 4), (500, 100), (True, 1)],
)
def test_clamp_amount(raw, expected):
    assert clamp_amount(raw) == expected
