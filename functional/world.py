"""Per-scenario world object wrapping the pipeline API.

Steps share one ``World`` and await its helpers in order; each helper stores
what later steps need (token, pipeline id, job ids) on the instance.
"""
from __future__ import annotations

import asyncio
from typing import Any

import httpx

from functional.config import WorldConfig
from functional.types import (
    PENDING_STATUSES,
    JobIds,
    PipelineSetupError,
    UnexpectedStatusError,
)
from pipeline_api.logging_conf import get_logger

logger = get_logger("world")

BUILD_POLL_ATTEMPTS = 10
BUILD_POLL_DELAY_S = 5.0
CONFLICT_DELIMITER = ": "


def parse_existing_pipeline_id(body: Any) -> str:
    """Recover the id of an already existing pipeline from a 409 body.

    ``data.existingId`` wins when the API sends it; otherwise the id is the
    text after the first ``": "`` in ``message``.
    """
    if not isinstance(body, dict):
        raise PipelineSetupError(f"conflict body is not an object: {body!r}")
    data = body.get("data") or {}
    if isinstance(data, dict) and data.get("existingId") is not None:
        return str(data["existingId"])

    message = str(body.get("message") or "")
    parts = message.split(CONFLICT_DELIMITER)
    if len(parts) < 2 or not parts[1]:
        raise PipelineSetupError(f"cannot find pipeline id in conflict message: {message!r}")
    return parts[1]


def extract_job_ids(jobs: list[dict[str, Any]]) -> JobIds:
    """Pick the first, second, third and last job ids from a job list."""
    if not jobs:
        raise PipelineSetupError("pipeline has no jobs")
    return JobIds(
        first=jobs[0]["id"],
        second=jobs[1]["id"] if len(jobs) > 1 else None,
        third=jobs[2]["id"] if len(jobs) > 2 else None,
        last=jobs[-1]["id"],
    )


def _build_status(response: httpx.Response) -> Any:
    try:
        body = response.json()
    except ValueError:
        return None
    return body.get("status") if isinstance(body, dict) else None


def _expect(response: httpx.Response, *expected: int) -> None:
    if response.status_code not in expected:
        try:
            body: Any = response.json()
        except ValueError:
            body = response.text
        raise UnexpectedStatusError(response.status_code, expected, body)


class World:
    """State and HTTP helpers for one test scenario.

    Every session field stays ``None`` until the helper that sets it has
    completed.
    """

    def __init__(
        self,
        config: WorldConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        poll_attempts: int = BUILD_POLL_ATTEMPTS,
        poll_delay_s: float = BUILD_POLL_DELAY_S,
    ) -> None:
        if poll_attempts < 1:
            raise ValueError("poll_attempts must be at least 1")
        self.config = config
        self._transport = transport
        self._poll_attempts = poll_attempts
        self._poll_delay_s = poll_delay_s

        self.jwt: str | None = None
        self.login_response: dict[str, Any] | None = None
        self.pipeline_id: str | None = None
        self.job_id: Any = None
        self.second_job_id: Any = None
        self.third_job_id: Any = None
        self.last_job_id: Any = None

    @property
    def namespace(self) -> str:
        return self.config.namespace

    def _client(self, **kwargs: Any) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.config.instance,
            transport=self._transport,
            timeout=30.0,
            **kwargs,
        )

    def _bearer(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.jwt}"} if self.jwt else {}

    async def wait_seconds(self, seconds: float) -> None:
        await asyncio.sleep(seconds)

    async def get_jwt(self, access_key: str | None) -> dict[str, Any]:
        """Exchange an access key for a token; returns the JSON body."""
        async with self._client(follow_redirects=True) as client:
            r = await client.get(
                f"/{self.namespace}/auth/token", params={"access_key": access_key or ""}
            )
            r.raise_for_status()
            logger.info("world.jwt", extra={"event": "world_jwt", "status_code": r.status_code})
            return r.json()

    async def login_with_token(self, access_key: str | None) -> None:
        """Log the current token out, then log in again through get_jwt."""
        async with self._client() as client:
            r = await client.post(f"/{self.namespace}/auth/logout", headers=self._bearer())
        logger.info("world.logout", extra={"event": "world_logout", "status_code": r.status_code})
        self.login_response = await self.get_jwt(access_key)

    async def wait_for_build(self, build_id: Any) -> httpx.Response:
        """Poll a build until it leaves QUEUED/RUNNING or attempts run out.

        Transport errors are retried too; if the final attempt fails that way
        the error propagates. Otherwise the last response is returned, which
        may still show a pending status.
        """
        last: httpx.Response | None = None
        async with self._client() as client:
            for attempt in range(1, self._poll_attempts + 1):
                try:
                    last = await client.get(f"/{self.namespace}/builds/{build_id}")
                except httpx.TransportError as e:
                    logger.warning(
                        "world.build_poll_retry",
                        extra={
                            "event": "world_build_poll_retry",
                            "build_id": build_id,
                            "attempt": attempt,
                            "error": str(e),
                        },
                    )
                    if attempt == self._poll_attempts:
                        raise
                    last = None
                else:
                    status = _build_status(last)
                    logger.info(
                        "world.build_poll",
                        extra={
                            "event": "world_build_poll",
                            "build_id": build_id,
                            "attempt": attempt,
                            "status": status,
                        },
                    )
                    if status not in PENDING_STATUSES:
                        return last
                if attempt < self._poll_attempts:
                    await asyncio.sleep(self._poll_delay_s)
        return last

    async def ensure_pipeline_exists(self, repo_name: str) -> None:
        """Create (or find) the test pipeline for ``repo_name`` and record its jobs."""
        self.jwt = (await self.get_jwt(self.config.access_key))["token"]
        checkout_url = f"git@github.com:{self.config.test_org}/{repo_name}.git#master"

        async with self._client() as client:
            r = await client.post(
                f"/{self.namespace}/pipelines",
                json={"checkoutUrl": checkout_url},
                headers=self._bearer(),
            )
            _expect(r, 201, 409)
            if r.status_code == 201:
                self.pipeline_id = str(r.json()["id"])
            else:
                try:
                    body = r.json()
                except ValueError as e:
                    raise PipelineSetupError(f"conflict body is not JSON: {r.text!r}") from e
                self.pipeline_id = parse_existing_pipeline_id(body)

            r = await client.get(
                f"/{self.namespace}/pipelines/{self.pipeline_id}/jobs", headers=self._bearer()
            )
            _expect(r, 200)
            ids = extract_job_ids(r.json())

        self.job_id = ids.first
        self.second_job_id = ids.second
        self.third_job_id = ids.third
        self.last_job_id = ids.last
        logger.info(
            "world.pipeline_ready",
            extra={
                "event": "world_pipeline_ready",
                "pipeline_id": self.pipeline_id,
                "checkout_url": checkout_url,
                "job_id": self.job_id,
                "last_job_id": self.last_job_id,
            },
        )
