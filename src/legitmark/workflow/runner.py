"""Orchestration du workflow d'authentification : 6 étapes, reprise, callbacks."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from legitmark.errors import workflow_error
from legitmark.models import CreateSRRequest, Side, SideGroup
from legitmark.utils.aio import maybe_await
from legitmark.workflow.state import WorkflowState
from legitmark.workflow.steps import (
    TOTAL_STEPS,
    WORKFLOW_STEP_NAMES,
    WorkflowCallbacks,
    WorkflowOptions,
    WorkflowStep,
)

if TYPE_CHECKING:
    from legitmark.client import PartnerClient

logger = logging.getLogger(__name__)

_FALLBACK_GROUP_UUID = "unknown"
_FALLBACK_GROUP_NAME = "Unknown Group"


def _coerce_step(step: int) -> WorkflowStep:
    try:
        return WorkflowStep(step)
    except ValueError as exc:
        raise workflow_error(
            f"Invalid workflow step {step!r}: expected 1-{TOTAL_STEPS}",
            [f"Use a step between 1 and {TOTAL_STEPS}"],
        ) from exc


class WorkflowRunner:
    """
    Exécute le workflow complet sur un PartnerClient :

    1. Get Taxonomy (optionnelle)
    2. Create Service Request
    3. Get Requirements
    4. Upload Images (via get_image_for_side)
    5. Check Progress
    6. Submit (optionnelle)

    Une instance pilote un seul SR à la fois ; pas d'usage concurrent.
    """

    def __init__(self, client: "PartnerClient", callbacks: WorkflowCallbacks | None = None):
        self._client = client
        self._callbacks = callbacks or WorkflowCallbacks()
        self._state = WorkflowState()
        self._dispatch: dict[WorkflowStep, Callable[[CreateSRRequest | None], Awaitable[None]]] = {
            WorkflowStep.GET_TAXONOMY: lambda _request: self.fetch_taxonomy(),
            WorkflowStep.CREATE_SR: self.create_service_request,
            WorkflowStep.GET_REQUIREMENTS: lambda _request: self.fetch_requirements(),
            WorkflowStep.UPLOAD_IMAGES: lambda _request: self.upload_images(),
            WorkflowStep.GET_PROGRESS: lambda _request: self.check_progress(),
            WorkflowStep.SUBMIT: lambda _request: self.submit(),
        }

    def get_state(self) -> WorkflowState:
        """Instantané courant (immuable)."""
        return self._state

    def reset(self) -> None:
        """Repart de l'état initial pour réutiliser le runner sur un nouveau SR."""
        self._state = WorkflowState()

    def set_sr_uuid(self, sr_uuid: str) -> None:
        """Reprend un SR existant (avant run_from(3) et suivantes)."""
        self._state = replace(self._state, sr_uuid=sr_uuid)

    async def run(
        self, request: CreateSRRequest, options: WorkflowOptions | None = None
    ) -> WorkflowState:
        """
        Exécute les étapes 1 à 6 dans l'ordre.

        En cas d'échec, le message est ajouté à state.errors et l'erreur est relancée.
        """
        return await self._run_sequence(WorkflowStep.GET_TAXONOMY, request, options or WorkflowOptions())

    async def run_from(
        self,
        from_step: int,
        request: CreateSRRequest | None = None,
        options: WorkflowOptions | None = None,
    ) -> WorkflowState:
        """
        Reprend à partir d'une étape (1-6).

        `request` est obligatoire pour les étapes 1 et 2 ; au-delà, un SR UUID
        doit déjà être dans l'état (étape 2 exécutée ou set_sr_uuid()).
        """
        start = _coerce_step(from_step)
        name = WORKFLOW_STEP_NAMES[start]

        if start <= WorkflowStep.CREATE_SR and request is None:
            raise workflow_error(
                f"Cannot start from step {int(start)} ({name}) without a CreateSRRequest",
                [
                    f"Provide the request: run_from({int(start)}, CreateSRRequest(...))",
                    "Or start from step 3+ if you have an existing SR UUID",
                ],
            )
        if start > WorkflowStep.CREATE_SR and not self._state.sr_uuid:
            raise workflow_error(
                f"Cannot start from step {int(start)} ({name}): no SR UUID in state",
                [
                    'Set the SR UUID first: runner.set_sr_uuid("your-sr-uuid")',
                    "Or run from step 1 or 2 to create a new SR",
                ],
            )
        return await self._run_sequence(start, request, options or WorkflowOptions())

    async def run_step(self, step: int, request: CreateSRRequest | None = None) -> None:
        """Exécute une seule étape (ex. un écran d'assistant par étape)."""
        await self._dispatch[_coerce_step(step)](request)

    async def _run_sequence(
        self,
        start: WorkflowStep,
        request: CreateSRRequest | None,
        options: WorkflowOptions,
    ) -> WorkflowState:
        try:
            for step in WorkflowStep:
                if step < start or options.skips(step):
                    continue
                await self._dispatch[step](request)
        except Exception as exc:
            self._state = replace(self._state, errors=self._state.errors + (str(exc),))
            raise
        self._state = replace(self._state, completed=True)
        logger.info("Workflow completed for SR %s", self._state.sr_uuid)
        return self._state

    async def _execute(self, step: WorkflowStep, action: Callable[[], Awaitable[Any]]) -> None:
        name = WORKFLOW_STEP_NAMES[step]
        self._state = replace(self._state, step=int(step), step_name=name)
        logger.info("Running step %s: %s", int(step), name)
        await self._notify(self._callbacks.on_step_start, step, name)
        try:
            data = await action()
            await self._notify(self._callbacks.on_step_complete, step, name, data)
        except Exception as exc:
            logger.error("Step %s (%s) failed: %s", int(step), name, exc)
            await self._notify(self._callbacks.on_step_error, step, name, exc)
            raise
        logger.info("Done: %s", name)

    @staticmethod
    async def _notify(callback: Callable[..., Any] | None, *args: Any) -> None:
        if callback is not None:
            await maybe_await(callback(*args))

    # Étape 1
    async def fetch_taxonomy(self) -> None:
        async def action() -> Any:
            taxonomy = await self._client.taxonomy.get_tree(active_only=True)
            self._state = replace(self._state, taxonomy=taxonomy)
            return taxonomy

        await self._execute(WorkflowStep.GET_TAXONOMY, action)

    # Étape 2
    async def create_service_request(self, request: CreateSRRequest | None) -> None:
        if request is None:
            raise workflow_error(
                "Step 2: a CreateSRRequest is required to create a service request",
                ["Pass the request to run() or run_from(1 | 2, request)"],
            )

        async def action() -> Any:
            sr = await self._client.sr.create(request)
            self._state = replace(self._state, sr_uuid=sr.uuid, sr=sr)
            return sr

        await self._execute(WorkflowStep.CREATE_SR, action)

    # Étape 3
    async def fetch_requirements(self) -> None:
        sr_uuid = self._require_sr_uuid("Step 3")

        async def action() -> Any:
            sr = await self._client.sr.get_with_requirements(sr_uuid)
            self._state = replace(self._state, sr=sr, requirements=sr.requirements)
            return sr

        await self._execute(WorkflowStep.GET_REQUIREMENTS, action)

    # Étape 4
    async def upload_images(self) -> None:
        sr_uuid = self._require_sr_uuid("Step 4")
        if self._state.requirements is None:
            raise workflow_error(
                "Step 4: No requirements in state. Run Step 3 first.",
                ["Call fetch_requirements() before this step"],
            )

        async def action() -> Any:
            required = self._required_sides()
            total = len(required)
            uploaded: list[str] = []
            for side, group in required:
                await self._notify(self._callbacks.on_upload_progress, len(uploaded), total, side)
                image = None
                if self._callbacks.get_image_for_side is not None:
                    image = await maybe_await(self._callbacks.get_image_for_side(side, group))
                if image is None or image == "":
                    logger.info("No image for side %s (%s), skipped", side.name, side.uuid)
                    continue
                await self._client.images.upload_for_side(sr_uuid, side.uuid, image)
                uploaded.append(side.uuid)
            self._state = replace(self._state, uploaded_sides=tuple(uploaded))
            return {"uploaded": len(uploaded), "total": total, "sides": list(uploaded)}

        await self._execute(WorkflowStep.UPLOAD_IMAGES, action)

    # Étape 5
    async def check_progress(self) -> None:
        sr_uuid = self._require_sr_uuid("Step 5")

        async def action() -> Any:
            progress = await self._client.sr.get_progress(sr_uuid)
            self._state = replace(self._state, progress=progress)
            return progress

        await self._execute(WorkflowStep.GET_PROGRESS, action)

    # Étape 6
    async def submit(self) -> None:
        sr_uuid = self._require_sr_uuid("Step 6")
        # Lecture de la progression en cache (étape 5) : pas de nouvel appel ici.
        progress = self._state.progress
        if progress is not None and not progress.met:
            raise workflow_error(
                "Step 6: Requirements not met. "
                f"Uploaded {progress.current_required}/{progress.total_required} required images.",
                [
                    "Ensure all required images are uploaded",
                    "Check that get_image_for_side returns data for all sides",
                ],
            )

        async def action() -> Any:
            return await self._client.sr.submit(sr_uuid)

        await self._execute(WorkflowStep.SUBMIT, action)

    def _require_sr_uuid(self, context: str) -> str:
        if not self._state.sr_uuid:
            raise workflow_error(
                f"{context}: No SR UUID in state. Run Step 2 first.",
                ["Call create_service_request() or set_sr_uuid() before this step"],
            )
        return self._state.sr_uuid

    def _required_sides(self) -> list[tuple[Side, SideGroup]]:
        """Sides requises du SR en cache, dans l'ordre serveur, avec un groupe reconstruit par side."""
        sr = self._state.sr
        if sr is None or sr.sides is None:
            return []
        return [
            (
                side,
                SideGroup(
                    uuid=side.side_group_id or _FALLBACK_GROUP_UUID,
                    name=side.side_group_name or _FALLBACK_GROUP_NAME,
                    ordinal=0,
                    sides=(),
                ),
            )
            for side in sr.sides.required
        ]
