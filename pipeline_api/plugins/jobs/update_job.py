from __future__ import annotations

from typing import TYPE_CHECKING

from ...logging_conf import get_logger
from ..routing import RouteDescriptor
from .get_job import job_not_found
from .models import Job, JobUpdateRequest

if TYPE_CHECKING:
    from ...datastore import JobDatastore

logger = get_logger("plugins.jobs")


def update_route(datastore: JobDatastore) -> RouteDescriptor:
    """PUT /jobs/{id}; only the job state may change."""

    async def update_job(id: int, payload: JobUpdateRequest) -> Job:
        job = datastore.update(id, payload.model_dump(exclude_unset=True))
        if job is None:
            raise job_not_found(id)
        logger.info(
            "job.update",
            extra={"event": "job_update", "job_id": id, "state": job.state.value},
        )
        return job

    return RouteDescriptor(
        method="PUT",
        path="/jobs/{id}",
        handler=update_job,
        summary="Update a job",
        response_model=Job,
    )
