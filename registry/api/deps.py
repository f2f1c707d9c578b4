"""FastAPI dependencies resolving the application context."""
from fastapi import Depends, Request

from registry.cache.allowlist import AllowlistCache
from registry.db.store import RegistryStore
from registry.repositories.project_repo import ProjectRepo
from registry.repositories.signal_repo import SignalRepo


def get_store(request: Request) -> RegistryStore:
    return request.app.state.store


def get_allowlist(request: Request) -> AllowlistCache:
    return request.app.state.allowlist


def get_project_repo(store: RegistryStore = Depends(get_store)) -> ProjectRepo:
    return ProjectRepo(store)


def get_signal_repo(store: RegistryStore = Depends(get_store)) -> SignalRepo:
    return SignalRepo(store)
