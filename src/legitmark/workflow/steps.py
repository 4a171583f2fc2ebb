"""Étapes du workflow, options et callbacks typés."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Any, Awaitable, Callable, Union

from legitmark.models import Side, SideGroup


class WorkflowStep(IntEnum):
    """Numéros d'étape (1-6)."""

    GET_TAXONOMY = 1
    CREATE_SR = 2
    GET_REQUIREMENTS = 3
    UPLOAD_IMAGES = 4
    GET_PROGRESS = 5
    SUBMIT = 6


WORKFLOW_STEP_NAMES: dict[WorkflowStep, str] = {
    WorkflowStep.GET_TAXONOMY: "Get Taxonomy",
    WorkflowStep.CREATE_SR: "Create Service Request",
    WorkflowStep.GET_REQUIREMENTS: "Get Requirements",
    WorkflowStep.UPLOAD_IMAGES: "Upload Images",
    WorkflowStep.GET_PROGRESS: "Check Progress",
    WorkflowStep.SUBMIT: "Submit",
}

INITIAL_STEP_NAME = "Not Started"
TOTAL_STEPS = len(WORKFLOW_STEP_NAMES)

ImageData = Union[bytes, str, Path, None]

# Callbacks typés pour le runner ; chacun peut être synchrone ou retourner une coroutine.
StepStartCallback = Callable[[WorkflowStep, str], Any]  # step, step_name
StepCompleteCallback = Callable[[WorkflowStep, str, Any], Any]  # step, step_name, data
StepErrorCallback = Callable[[WorkflowStep, str, BaseException], Any]
UploadProgressCallback = Callable[[int, int, Side], Any]  # uploaded, total, side
ImageForSideCallback = Callable[[Side, SideGroup], Union[ImageData, Awaitable[ImageData]]]


@dataclass(frozen=True)
class WorkflowCallbacks:
    """Hooks optionnels ; les callbacks async sont attendus avant de poursuivre."""

    on_step_start: StepStartCallback | None = None
    on_step_complete: StepCompleteCallback | None = None
    on_step_error: StepErrorCallback | None = None
    get_image_for_side: ImageForSideCallback | None = None
    """
    Retourne les octets (ou un chemin) de l'image pour une side ; None ou un chemin
    vide pour la passer. Des octets vides sont uploadés tels quels.
    """
    on_upload_progress: UploadProgressCallback | None = None


@dataclass(frozen=True)
class WorkflowOptions:
    skip_taxonomy: bool = False
    """Ne pas exécuter l'étape 1 (taxonomie déjà connue)."""
    skip_submit: bool = False
    """Ne pas exécuter l'étape 6 (soumission manuelle plus tard)."""

    def skips(self, step: WorkflowStep) -> bool:
        if step == WorkflowStep.GET_TAXONOMY:
            return self.skip_taxonomy
        if step == WorkflowStep.SUBMIT:
            return self.skip_submit
        return False
