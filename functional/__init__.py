"""Functional-test world for driving a remote pipeline API from pytest scenarios."""
from functional.config import WorldConfig
from functional.types import BuildStatus, JobIds, PipelineSetupError, UnexpectedStatusError, WorldError
from functional.world import World

__all__ = [
    "BuildStatus",
    "JobIds",
    "PipelineSetupError",
    "UnexpectedStatusError",
    "World",
    "WorldConfig",
    "WorldError",
]
