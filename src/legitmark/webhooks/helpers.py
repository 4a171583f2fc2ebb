"""Prédicats sur les événements webhook (combinaisons d'états connues)."""

from __future__ import annotations

from typing import TypeGuard

from legitmark.models import SRPrimaryState, SRSupplementState
from legitmark.webhooks.types import LegitmarkWebhookEvent, StateChangeEvent, WebhookEventType


def _state_is(event: LegitmarkWebhookEvent, primary: str, supplement: str | None = None) -> bool:
    if event["event_type"] != WebhookEventType.STATE_CHANGE:
        return False
    state = event["state"]  # type: ignore[typeddict-item]
    if state.get("primary") != primary:
        return False
    return supplement is None or state.get("supplement") == supplement


def is_authentic(event: LegitmarkWebhookEvent) -> TypeGuard[StateChangeEvent]:
    """Article authentifié : state_change COMPLETE + APPROVED."""
    return _state_is(event, SRPrimaryState.COMPLETE.value, SRSupplementState.APPROVED.value)


def is_counterfeit(event: LegitmarkWebhookEvent) -> TypeGuard[StateChangeEvent]:
    """Contrefaçon : state_change COMPLETE + REJECTED."""
    return _state_is(event, SRPrimaryState.COMPLETE.value, SRSupplementState.REJECTED.value)


def is_cancelled(event: LegitmarkWebhookEvent) -> TypeGuard[StateChangeEvent]:
    """SR annulé (supplement ignoré)."""
    return _state_is(event, SRPrimaryState.CANCELLED.value)


def needs_resubmission(event: LegitmarkWebhookEvent) -> bool:
    """Images rejetées : re-uploader les sides listées."""
    return event["event_type"] == WebhookEventType.MEDIA_REJECTED


def is_qc_approved(event: LegitmarkWebhookEvent) -> TypeGuard[StateChangeEvent]:
    return _state_is(event, SRPrimaryState.QC.value, SRSupplementState.APPROVED.value)


def is_authentication_in_progress(event: LegitmarkWebhookEvent) -> TypeGuard[StateChangeEvent]:
    return _state_is(event, SRPrimaryState.UNDERWAY.value, SRSupplementState.ASSIGNED.value)
