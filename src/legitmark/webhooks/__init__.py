"""Webhooks : parsing typé des événements et prédicats d'état."""

from legitmark.webhooks.helpers import (
    is_authentic,
    is_authentication_in_progress,
    is_cancelled,
    is_counterfeit,
    is_qc_approved,
    needs_resubmission,
)
from legitmark.webhooks.parse import WebhookValidationError, parse_webhook_event
from legitmark.webhooks.types import (
    WEBHOOK_EVENT_TYPES,
    InvalidateSrEvent,
    LegitmarkWebhookEvent,
    MediaRejectedEvent,
    RejectedSide,
    StateChangeEvent,
    WebhookEventType,
)

__all__ = [
    "WEBHOOK_EVENT_TYPES",
    "InvalidateSrEvent",
    "LegitmarkWebhookEvent",
    "MediaRejectedEvent",
    "RejectedSide",
    "StateChangeEvent",
    "WebhookEventType",
    "WebhookValidationError",
    "is_authentic",
    "is_authentication_in_progress",
    "is_cancelled",
    "is_counterfeit",
    "is_qc_approved",
    "needs_resubmission",
    "parse_webhook_event",
]
