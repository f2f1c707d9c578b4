"""Landing page, health probe and the machine-readable capability manifest."""
from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from registry.api.deps import get_store
from registry.core.config import settings
from registry.db.store import RegistryStore
from registry.services.discovery import registry_stats, top_projects


router = APIRouter(tags=["meta"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[3] / "templates"))

DESCRIPTION = "No gatekeeping - projects add themselves, community signals support"

ENDPOINTS = [
    {
        "method": "POST",
        "path": "/projects",
        "description": "Add project to registry",
        "params": ["name", "description?", "url?", "category?", "owner", "logo?", "tags?"],
    },
    {
        "method": "GET",
        "path": "/projects",
        "description": "List projects",
        "query": ["category?", "tag?", "minSupport?", "sort?", "limit?", "offset?"],
    },
    {"method": "GET", "path": "/projects/:id", "description": "Get project details with supporters"},
    {
        "method": "PUT",
        "path": "/projects/:id",
        "description": "Update project (owner only)",
        "params": ["owner", "name?", "description?", "url?", "category?", "logo?", "tags?"],
    },
    {
        "method": "DELETE",
        "path": "/projects/:id",
        "description": "Delete project (owner only)",
        "params": ["owner"],
    },
    {
        "method": "POST",
        "path": "/projects/:id/signal",
        "description": "Signal support for project",
        "params": ["address", "amount? (1-100)", "message?"],
    },
    {
        "method": "DELETE",
        "path": "/projects/:id/signal",
        "description": "Remove support signal",
        "params": ["address"],
    },
    {"method": "GET", "path": "/supporters/:address", "description": "Get supporter's signaled projects"},
    {"method": "GET", "path": "/categories", "description": "List categories with counts"},
    {"method": "GET", "path": "/tags", "description": "Popular tags"},
    {"method": "GET", "path": "/search", "description": "Search projects", "query": ["q", "limit?"]},
]


@router.get("/health")
async def health_check():
    return {
        "status": "ok",
        "platform": settings.APP_NAME,
        "description": DESCRIPTION,
        "features": ["self-registration", "community signals", "categories", "tags", "search"],
    }


@router.get("/agent")
async def agent_manifest():
    """Capability manifest for automated clients."""
    return {
        "name": settings.APP_NAME,
        "description": (
            "No gatekeeping project registry. Projects add themselves, community "
            "signals support. Filter by support level, categories, or tags. No "
            "approval process - just self-registration and community curation."
        ),
        "network": "Base (addresses only, no transactions)",
        "treasury_fee": "None - free to use",
        "endpoints": ENDPOINTS,
        "example_flow": [
            '1. POST /projects - Add "My DeFi Tool" to registry',
            "2. POST /projects/:id/signal - Community members signal support",
            "3. GET /projects?sort=support - Browse by most supported",
            "4. GET /search?q=defi - Search for DeFi projects",
        ],
        "x402_enabled": False,
    }


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def landing_page(request: Request, store: RegistryStore = Depends(get_store)):
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "app_name": settings.APP_NAME,
            "stats": registry_stats(store),
            "top_projects": top_projects(store),
            "endpoints": ENDPOINTS,
        },
    )
