from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values

DEFAULT_CONFIG_FILE = Path(__file__).resolve().parents[1] / ".func_config"
NAMESPACE = "v4"


@dataclass(frozen=True)
class WorldConfig:
    """Connection settings for the pipeline API under test."""

    api_host: str | None = None
    access_key: str | None = None
    git_token: str | None = None
    protocol: str = "https"
    test_org: str | None = None
    username: str | None = None
    namespace: str = NAMESPACE

    @property
    def instance(self) -> str:
        return f"{self.protocol}://{self.api_host}"

    @property
    def is_configured(self) -> bool:
        return bool(self.api_host and self.access_key)

    @classmethod
    def load(
        cls, path: str | Path | None = None, environ: Mapping[str, str] | None = None
    ) -> WorldConfig:
        """Build a config from an optional dotenv file overlaid by the environment.

        Environment variables: SD_API, ACCESS_KEY, GIT_TOKEN, PROTOCOL,
        TEST_ORG, TEST_USERNAME. A missing file is ignored.
        """
        file_path = Path(path) if path is not None else DEFAULT_CONFIG_FILE
        values: dict[str, str | None] = {}
        if file_path.is_file():
            values.update(dotenv_values(file_path))
        values.update(os.environ if environ is None else environ)

        return cls(
            api_host=values.get("SD_API"),
            access_key=values.get("ACCESS_KEY"),
            git_token=values.get("GIT_TOKEN"),
            protocol=values.get("PROTOCOL") or "https",
            test_org=values.get("TEST_ORG"),
            username=values.get("TEST_USERNAME"),
        )
