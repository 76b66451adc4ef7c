from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Query

from ..routing import RouteDescriptor
from .models import Job

if TYPE_CHECKING:
    from ...datastore import JobDatastore

MAX_COUNT = 50


def list_route(datastore: JobDatastore) -> RouteDescriptor:
    """GET /jobs, paginated."""

    async def list_jobs(
        page: int = Query(1, ge=1),
        count: int = Query(MAX_COUNT, ge=1, le=MAX_COUNT),
    ) -> list[Job]:
        return datastore.list(page=page, count=count)

    return RouteDescriptor(
        method="GET",
        path="/jobs",
        handler=list_jobs,
        summary="List jobs",
        response_model=list[Job],
    )
