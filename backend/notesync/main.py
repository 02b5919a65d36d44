from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from .api.errors import register_exception_handlers
from .api.v1.router import api_router
from .config import settings
from .core.bus import Router
from .core.services.configs import SettingsConfigResponder
from .core.services.notes_module import NotesModule
from .dependencies import get_note_repository
from .utils.logging import get_logger, setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from .core.repositories.entity_repository import EntityRepository

logger = get_logger(__name__)


def create_app(
    *,
    router: Router | None = None,
    repository_factory: Callable[[], EntityRepository] = get_note_repository,
) -> FastAPI:
    setup_logging()
    bus = router or Router()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configs = SettingsConfigResponder(bus)
        configs.start()
        module = NotesModule(repository_factory(), bus)
        module.start()
        app.state.notes_module = module
        try:
            yield
        finally:
            module.stop()
            configs.stop()
            app.state.notes_module = None
            logger.info("Notes API shut down")

    app = FastAPI(
        title="Notesync API",
        debug=settings.debug,
        version="0.1.0",
        root_path=settings.root_path or "",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Accept", "Content-Type", "Authorization"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Proxy headers (X-Forwarded-*) when behind a reverse proxy
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])

    # GZip compression
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.api_prefix)
    return app


app = create_app()
