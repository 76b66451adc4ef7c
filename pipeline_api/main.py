"""App factory for the jobs API: health check plus the jobs plugin on a datastore."""
from __future__ import annotations

import os

from fastapi import FastAPI

from . import middleware
from .datastore import InMemoryJobDatastore, JobDatastore
from .logging_conf import get_logger, setup_logging
from .plugins import jobs

setup_logging()
logger = get_logger("app")


def create_app(datastore: JobDatastore | None = None) -> FastAPI:
    """Build the app; without a datastore the jobs routes serve an empty in-memory one."""
    app = FastAPI(
        title="Pipeline Jobs API",
        version=os.getenv("APP_VERSION", "0.1.0"),
    )
    app.state.datastore = datastore if datastore is not None else InMemoryJobDatastore()
    middleware.install(app)

    @app.get("/health", summary="Liveness/readiness check")
    async def health() -> dict[str, bool]:
        return {"ok": True}

    app.state.job_routes = jobs.register(app, datastore=app.state.datastore)

    @app.on_event("startup")
    async def _log_mounted_plugins() -> None:
        logger.info(
            "jobs.ready",
            extra={
                "event": "jobs_ready",
                "plugin": jobs.PLUGIN_NAME,
                "datastore": type(app.state.datastore).__name__,
                "routes": [f"{r.method} {r.path}" for r in app.state.job_routes],
            },
        )

    return app


# ASGI entrypoint: `uvicorn pipeline_api.main:app`
app = create_app()
