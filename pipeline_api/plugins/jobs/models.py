from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class JobState(str, Enum):
    ENABLED = "ENABLED"
    DISABLED = "DISABLED"


class Job(BaseModel):
    """A job belonging to a pipeline."""
    id: int
    pipeline_id: int = Field(..., alias="pipelineId")
    name: str
    state: JobState = JobState.ENABLED
    permutations: list[dict[str, Any]] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


class JobUpdateRequest(BaseModel):
    """Fields a client may change on an existing job."""
    state: JobState
