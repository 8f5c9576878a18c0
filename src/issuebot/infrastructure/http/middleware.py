from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any
from uuid import uuid4

from fastapi import Request

logger = logging.getLogger("issuebot.http")


async def request_logging_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Any]],
) -> Any:
    # Bodies are not logged: modal submits carry vendor access tokens.
    request_id = request.headers.get("x-request-id", uuid4().hex)
    request_line = f"{request.method} {request.url.path}"
    logger.debug(
        "request_received",
        extra={"data": {"request_id": request_id, "request_line": request_line}},
    )

    start = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        logger.exception(
            "request_failed",
            extra={"data": {"request_id": request_id, "request_line": request_line}},
        )
        raise

    duration = time.perf_counter() - start
    logger.info(
        "request_completed",
        extra={
            "data": {
                "request_id": request_id,
                "request_line": request_line,
                "status_code": response.status_code,
                "duration_ms": round(duration * 1000, 2),
            },
        },
    )
    return response


__all__ = ["request_logging_middleware"]
