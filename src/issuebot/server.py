"""Entrypoint for running the issuebot interactions service under uvicorn."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from issuebot.infrastructure.http.middleware import request_logging_middleware
from issuebot.infrastructure.http.routes import add_health_routes, add_interaction_routes
from issuebot.observability.logging import init_logging
from issuebot.runtime.bootstrap import RuntimeContext, build_runtime
from issuebot.runtime.settings import Settings

logger = logging.getLogger("issuebot.server")


def create_app(runtime: RuntimeContext | None = None) -> FastAPI:
    resolved = runtime or build_runtime()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("issuebot service started", extra={"data": {"db_path": str(resolved.store.path)}})
        yield
        resolved.close()
        logger.info("issuebot service stopped")

    app = FastAPI(title="Issuebot", version="0.1.0", lifespan=lifespan)
    app.middleware("http")(request_logging_middleware)

    add_interaction_routes(app, resolved.interaction_deps_provider)
    add_health_routes(app)

    return app


def serve(settings: Settings | None = None) -> None:
    import uvicorn

    resolved = settings or Settings.load()
    app = create_app(build_runtime(resolved))
    config = uvicorn.Config(
        app,
        host=resolved.listen_host,
        port=resolved.port,
        # logging already setup
        log_config=None,
    )
    uvicorn.Server(config).run()


def main() -> None:
    init_logging()
    serve()


__all__ = ["create_app", "main", "serve"]
