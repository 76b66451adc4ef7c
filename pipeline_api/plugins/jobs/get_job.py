from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import HTTPException, status

from ..routing import RouteDescriptor
from .models import Job

if TYPE_CHECKING:
    from ...datastore import JobDatastore


def job_not_found(job_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"error_code": "not_found", "error_message": f"Job {job_id} does not exist"},
    )


def get_route(datastore: JobDatastore) -> RouteDescriptor:
    """GET /jobs/{id}; 404 when the job is unknown."""

    async def get_job(id: int) -> Job:
        job = datastore.get(id)
        if job is None:
            raise job_not_found(id)
        return job

    return RouteDescriptor(
        method="GET",
        path="/jobs/{id}",
        handler=get_job,
        summary="Get a single job",
        response_model=Job,
    )
