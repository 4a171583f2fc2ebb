"""Validation structurelle des payloads webhook entrants."""

from __future__ import annotations

import json
from typing import Any, Mapping, cast

from legitmark.webhooks.types import WEBHOOK_EVENT_TYPES, LegitmarkWebhookEvent, WebhookEventType


class WebhookValidationError(ValueError):
    """Raised when a webhook payload does not match any known event shape."""


def parse_webhook_event(payload: Any) -> LegitmarkWebhookEvent:
    """
    Valide un payload webhook (JSON déjà décodé) et le retourne typé.

    Le dict d'entrée est retourné tel quel : les champs inconnus sont conservés.

    Raises:
        WebhookValidationError: payload non objet, event_type inconnu, ou champ
            requis absent / mal typé (le nom du champ figure dans le message).
    """
    if not isinstance(payload, Mapping):
        raise WebhookValidationError("Webhook payload must be a JSON object")

    event_type = payload.get("event_type")
    if not isinstance(event_type, str) or event_type not in WEBHOOK_EVENT_TYPES:
        raise WebhookValidationError(
            f"Unknown webhook event_type: {json.dumps(event_type, default=str)}. "
            f"Expected one of: {', '.join(WEBHOOK_EVENT_TYPES)}"
        )

    _check_base_fields(payload)
    if event_type == WebhookEventType.STATE_CHANGE:
        _check_state_change(payload)
    elif event_type == WebhookEventType.MEDIA_REJECTED:
        _check_media_rejected(payload)
    else:
        _check_invalidate_sr(payload)

    return cast(LegitmarkWebhookEvent, payload)


def _check_base_fields(obj: Mapping[str, Any]) -> None:
    for key in ("sr_uuid", "timestamp"):
        if not isinstance(obj.get(key), str):
            raise WebhookValidationError(f"Webhook payload missing required field: {key}")


def _check_state_change(obj: Mapping[str, Any]) -> None:
    state = obj.get("state")
    if not isinstance(state, Mapping):
        raise WebhookValidationError("state_change event missing required field: state")
    if not isinstance(state.get("primary"), str):
        raise WebhookValidationError("state_change event missing required field: state.primary")


def _check_media_rejected(obj: Mapping[str, Any]) -> None:
    if not isinstance(obj.get("sides"), list):
        raise WebhookValidationError("media_rejected event missing required field: sides")


def _check_invalidate_sr(obj: Mapping[str, Any]) -> None:
    reason = obj.get("invalidation_reason")
    if not isinstance(reason, Mapping):
        raise WebhookValidationError(
            "invalidate_sr event missing required field: invalidation_reason"
        )
    for key in ("code", "message"):
        if not isinstance(reason.get(key), str):
            raise WebhookValidationError(
                f"invalidate_sr event missing required field: invalidation_reason.{key}"
            )
