from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class BuildStatus(str, Enum):
    QUEUED = "QUEUED"
    RUNNING = "RUNNING"
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"
    ABORTED = "ABORTED"
    BLOCKED = "BLOCKED"
    UNSTABLE = "UNSTABLE"
    COLLAPSED = "COLLAPSED"


PENDING_STATUSES = frozenset({BuildStatus.QUEUED.value, BuildStatus.RUNNING.value})


@dataclass
class JobIds:
    """Job ids picked out of a pipeline's job list."""

    first: Any
    second: Any | None
    third: Any | None
    last: Any


class WorldError(AssertionError):
    """Raised when a scenario step cannot proceed; pytest reports it as a failure."""


class UnexpectedStatusError(WorldError):
    """Raised when the API answers with a status code the step does not accept."""

    def __init__(self, status_code: int, expected: tuple[int, ...], body: Any = None) -> None:
        self.status_code = status_code
        self.expected = expected
        self.body = body
        super().__init__(f"expected status in {list(expected)}, got {status_code}: {body!r}")


class PipelineSetupError(WorldError):
    """Raised when a pipeline id or its jobs cannot be recovered from a response."""
