from __future__ import annotations

import time
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from .logging_conf import get_logger

REQUEST_ID_HEADER = "X-Request-ID"

logger = get_logger("app.requests")


def _route_template(request: Request) -> str:
    """``/jobs/{id}`` rather than ``/jobs/7``; raw path when no route matched."""
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


class JobRequestLogMiddleware(BaseHTTPMiddleware):
    """One log line per request, keyed by route template and job id.

    The caller's X-Request-ID is kept when present and always echoed back.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        request.state.request_id = request_id
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request.failed",
                extra={
                    "event": "request_failed",
                    "method": request.method,
                    "route": _route_template(request),
                    "request_id": request_id,
                },
            )
            raise

        fields = {
            "event": "request_done",
            "method": request.method,
            "route": _route_template(request),
            "status_code": response.status_code,
            "elapsed_ms": round((time.perf_counter() - started) * 1000.0, 2),
            "request_id": request_id,
        }
        job_id = request.path_params.get("id")
        if job_id is not None:
            fields["job_id"] = job_id
        level = logger.warning if response.status_code >= 400 else logger.info
        level("request.done", extra=fields)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def install(app: FastAPI) -> None:
    app.add_middleware(JobRequestLogMiddleware)
