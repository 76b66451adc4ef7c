"""Fixtures for scenarios that run against a live pipeline API."""

import pytest

from functional import World, WorldConfig
from pipeline_api.logging_conf import setup_logging

setup_logging()


@pytest.fixture(scope="session")
def world_config() -> WorldConfig:
    config = WorldConfig.load()
    if not config.is_configured:
        pytest.skip("SD_API and ACCESS_KEY are required for functional scenarios")
    return config


@pytest.fixture
def world(world_config: WorldConfig) -> World:
    """A fresh world per scenario."""
    return World(world_config)
