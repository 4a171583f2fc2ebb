"""Instantané immuable de l'état du workflow."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from legitmark.models import ProgressData, ServiceRequest, SRRequirements
from legitmark.workflow.steps import INITIAL_STEP_NAME


@dataclass(frozen=True)
class WorkflowState:
    """
    État d'un WorkflowRunner.

    Remplacé en bloc (dataclasses.replace) à chaque transition : un callback
    reçoit toujours un instantané cohérent.
    """

    step: int = 0
    """Étape courante (0 avant démarrage, puis 1-6)."""
    step_name: str = INITIAL_STEP_NAME
    sr_uuid: str | None = None
    """UUID du SR (après l'étape 2 ou set_sr_uuid)."""
    taxonomy: Mapping[str, Any] | None = None
    sr: ServiceRequest | None = None
    requirements: SRRequirements | None = None
    uploaded_sides: tuple[str, ...] = ()
    """UUIDs des sides uploadées pendant ce run."""
    progress: ProgressData | None = None
    completed: bool = False
    errors: tuple[str, ...] = ()
