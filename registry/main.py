"""
FastAPI application entrypoint.

Lifespan:
  • On shutdown: close the allow-list HTTP client.

State (``app.state``):
  • store     - the in-memory project and signal collections
  • allowlist - the TTL-cached remote allow-list
"""
import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from registry import __version__
from registry.api.errors import register_exception_handlers
from registry.api.v1 import api_router
from registry.cache.allowlist import AllowlistCache
from registry.core.config import settings
from registry.core.logging import configure_logging
from registry.db.store import RegistryStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info(f"{settings.APP_NAME} v{__version__} starting ({settings.ENV})")
    yield
    await app.state.allowlist.aclose()
    logger.info("Allow-list client closed")


def create_application() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        version=__version__,
        description=(
            "No gatekeeping project registry: projects add themselves, "
            "the community signals support."
        ),
        lifespan=lifespan,
    )
    app.state.store = RegistryStore()
    app.state.allowlist = AllowlistCache()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)
    return app


app = create_application()


def main() -> None:
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
