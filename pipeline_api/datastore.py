"""Datastore contract for jobs and the in-memory implementation used by default."""
from __future__ import annotations

from threading import Lock
from typing import Any, Iterable, Protocol

from .plugins.jobs.models import Job


class JobDatastore(Protocol):
    """What the jobs routes need from a datastore."""

    def list(self, *, page: int, count: int) -> list[Job]: ...

    def get(self, job_id: int) -> Job | None: ...

    def update(self, job_id: int, changes: dict[str, Any]) -> Job | None: ...


class InMemoryJobDatastore:
    """Thread-safe in-memory job datastore, ordered by job id."""

    def __init__(self, jobs: Iterable[Job] = ()) -> None:
        self._lock = Lock()
        self._jobs: dict[int, Job] = {job.id: job for job in jobs}

    def list(self, *, page: int, count: int) -> list[Job]:
        start = (page - 1) * count
        with self._lock:
            ordered = [self._jobs[k] for k in sorted(self._jobs)]
        return ordered[start : start + count]

    def get(self, job_id: int) -> Job | None:
        with self._lock:
            return self._jobs.get(job_id)

    def update(self, job_id: int, changes: dict[str, Any]) -> Job | None:
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None:
                return None
            updated = job.model_copy(update=changes)
            self._jobs[job_id] = updated
            return updated
