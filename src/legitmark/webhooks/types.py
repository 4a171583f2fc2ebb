"""Typed webhook payloads, discriminated on `event_type`."""

from __future__ import annotations

from typing import Literal, TypedDict, Union


class WebhookEventType:
    """Event type identifiers."""

    STATE_CHANGE = "state_change"
    MEDIA_REJECTED = "media_rejected"
    INVALIDATE_SR = "invalidate_sr"


WEBHOOK_EVENT_TYPES: tuple[str, ...] = (
    WebhookEventType.STATE_CHANGE,
    WebhookEventType.MEDIA_REJECTED,
    WebhookEventType.INVALIDATE_SR,
)


class WebhookState(TypedDict):
    primary: str
    supplement: str | None


class _RejectedSideOptional(TypedDict, total=False):
    message: str
    """User-facing guidance for the re-upload."""


class RejectedSide(_RejectedSideOptional):
    """One side whose image was rejected during quality control."""

    side: str
    reason: str


class InvalidationReason(TypedDict):
    code: str
    message: str


class _WebhookEventBase(TypedDict):
    sr_uuid: str
    reference_id: str | None
    """Partner reference (the external_id given at SR creation)."""
    timestamp: str
    """ISO 8601."""


class StateChangeEvent(_WebhookEventBase):
    event_type: Literal["state_change"]
    state: WebhookState


class MediaRejectedEvent(_WebhookEventBase):
    event_type: Literal["media_rejected"]
    sides: list[RejectedSide]


class InvalidateSrEvent(_WebhookEventBase):
    event_type: Literal["invalidate_sr"]
    invalidation_reason: InvalidationReason


LegitmarkWebhookEvent = Union[StateChangeEvent, MediaRejectedEvent, InvalidateSrEvent]
