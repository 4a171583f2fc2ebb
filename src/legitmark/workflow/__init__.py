"""Workflow runner (étapes, état, callbacks)."""

from legitmark.workflow.runner import WorkflowRunner
from legitmark.workflow.state import WorkflowState
from legitmark.workflow.steps import (
    WORKFLOW_STEP_NAMES,
    WorkflowCallbacks,
    WorkflowOptions,
    WorkflowStep,
)

__all__ = [
    "WORKFLOW_STEP_NAMES",
    "WorkflowCallbacks",
    "WorkflowOptions",
    "WorkflowRunner",
    "WorkflowState",
    "WorkflowStep",
]
