"""Version 1 API router."""
from fastapi import APIRouter

from registry.api.v1.endpoints import discovery, meta, projects, signals

api_router = APIRouter()
api_router.include_router(projects.router)
api_router.include_router(signals.router)
api_router.include_router(discovery.router)
api_router.include_router(meta.router)
