"""Ressource service requests : création, lecture, progression, soumission."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Callable, Mapping

from legitmark.errors import ErrorCode, ErrorContext, LegitmarkError
from legitmark.models import CreateSRRequest, ProgressData, ServiceRequest, SubmitResult
from legitmark.resources.base import ResourceClient
from legitmark.utils.aio import maybe_await

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_S = 2.0
DEFAULT_MAX_WAIT_S = 300.0

SR_ENDPOINT = "/api/v2/sr"

PollCallback = Callable[[ProgressData], Any]


def _sr_payload(data: Any) -> Mapping[str, Any]:
    if isinstance(data, Mapping) and isinstance(data.get("sr"), Mapping):
        return data["sr"]
    return {}


class ServiceRequests:
    """Gestion des demandes d'authentification."""

    def __init__(self, client: ResourceClient):
        self._client = client

    async def create(self, request: CreateSRRequest) -> ServiceRequest:
        data = await self._client._post(SR_ENDPOINT, request.to_payload())
        sr = ServiceRequest.from_dict(_sr_payload(data))
        logger.info("Created service request %s (%s)", sr.uuid, sr.micro_id)
        return sr

    async def get(self, uuid: str, **includes: bool) -> ServiceRequest:
        """
        Lit un SR. Les inclusions (requirements, sides, item, outcome...) sont
        envoyées en `?<nom>=true` quand elles valent True.
        """
        params = {key: "true" for key, value in includes.items() if value is True}
        data = await self._client._get(f"{SR_ENDPOINT}/{uuid}", params)
        return ServiceRequest.from_dict(_sr_payload(data))

    async def get_with_requirements(self, uuid: str) -> ServiceRequest:
        return await self.get(uuid, requirements=True, sides=True, item=True)

    async def get_with_sides(self, uuid: str) -> ServiceRequest:
        return await self.get(uuid, item=True, sides=True)

    async def get_progress(self, uuid: str) -> ProgressData:
        """Progression d'upload ; met=False si le serveur ne renvoie pas de bloc progress."""
        sr = await self.get_with_sides(uuid)
        if sr.sides is None or sr.sides.progress is None:
            return ProgressData()
        return sr.sides.progress

    async def wait_for_requirements(
        self,
        uuid: str,
        *,
        poll_interval_s: float = DEFAULT_POLL_INTERVAL_S,
        max_wait_s: float = DEFAULT_MAX_WAIT_S,
        on_poll: PollCallback | None = None,
    ) -> ProgressData:
        """
        Interroge la progression jusqu'à ce que toutes les photos requises soient présentes.

        Raises:
            LegitmarkError(TIMEOUT_ERROR) si `max_wait_s` est dépassé.
        """
        started = time.monotonic()
        while time.monotonic() - started < max_wait_s:
            progress = await self.get_progress(uuid)
            if on_poll is not None:
                await maybe_await(on_poll(progress))
            if progress.met:
                return progress
            await asyncio.sleep(poll_interval_s)

        raise LegitmarkError(
            ErrorCode.TIMEOUT_ERROR,
            f"Timeout waiting for requirements after {max_wait_s}s",
            context=ErrorContext(
                endpoint=f"{SR_ENDPOINT}/{uuid}",
                details={"max_wait_s": max_wait_s, "poll_interval_s": poll_interval_s},
            ),
            retryable=True,
            suggestions=[
                "Increase max_wait_s",
                "Check that images are being uploaded successfully",
            ],
        )

    async def submit(self, uuid: str) -> SubmitResult:
        data = await self._client._post(f"{SR_ENDPOINT}/{uuid}/submit")
        result = SubmitResult.from_dict(data)
        logger.info("Submitted service request %s (state=%s)", uuid, result.state.primary)
        return result
