"""HTTP route definitions for the issuebot interactions endpoint."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from fastapi import BackgroundTasks, Depends, FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool

from issuebot.infrastructure.discord.router import InteractionError, InteractionRouter
from issuebot.infrastructure.discord.signature import (
    SIGNATURE_HEADER,
    TIMESTAMP_HEADER,
    InteractionSignatureVerifier,
    SignatureVerificationError,
)

logger = logging.getLogger("issuebot.http")


@dataclass(frozen=True)
class InteractionRouteDeps:
    router: InteractionRouter
    verifier: InteractionSignatureVerifier


def add_interaction_routes(
    app: FastAPI,
    dependency_provider: Callable[[], InteractionRouteDeps],
) -> None:
    def get_dependencies() -> InteractionRouteDeps:
        return dependency_provider()

    @app.post(
        "/interactions",
        description="Receive a signed Discord interaction and return its callback response.",
    )
    async def interactions(
        request: Request,
        background_tasks: BackgroundTasks,
        deps: InteractionRouteDeps = Depends(get_dependencies),  # noqa: B008
    ) -> dict[str, Any]:
        body = await request.body()
        try:
            deps.verifier.verify(
                signature_hex=request.headers.get(SIGNATURE_HEADER),
                timestamp=request.headers.get(TIMESTAMP_HEADER),
                body=body,
            )
        except SignatureVerificationError as exc:
            raise HTTPException(status_code=401, detail=str(exc)) from exc

        try:
            payload = json.loads(body)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail="request body is not valid JSON") from exc
        if not isinstance(payload, dict):
            raise HTTPException(status_code=400, detail="request body must be a JSON object")

        try:
            reply = await run_in_threadpool(deps.router.handle, payload)
        except InteractionError as exc:
            logger.warning(
                "interaction rejected",
                extra={"data": {"type": payload.get("type"), "error": str(exc)}},
            )
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        if reply.followup is not None:
            background_tasks.add_task(reply.followup)
        return reply.response


def add_health_routes(app: FastAPI) -> None:
    @app.get("/healthz", description="Liveness probe.")
    def healthz() -> dict[str, str]:
        return {"status": "ok"}


__all__ = ["InteractionRouteDeps", "add_health_routes", "add_interaction_routes"]
