"""Fixtures pytest communes."""

from __future__ import annotations

import pytest

from tests._payloads import WEBHOOK_SR_UUID


@pytest.fixture
def media_rejected_payload() -> dict:
    return {
        "event_type": "media_rejected",
        "sr_uuid": WEBHOOK_SR_UUID,
        "reference_id": "PARTNER-ITEM-789",
        "sides": [
            {"side": "Front", "reason": "Image is Blurry", "message": "The submitted image is too blurry."},
            {"side": "Label", "reason": "Not Visible"},
        ],
        "timestamp": "2026-02-10T12:15:00.000Z",
    }


@pytest.fixture
def invalidate_sr_payload() -> dict:
    return {
        "event_type": "invalidate_sr",
        "sr_uuid": WEBHOOK_SR_UUID,
        "reference_id": None,
        "invalidation_reason": {"code": "CANCELLED", "message": "Service request cancelled"},
        "timestamp": "2026-02-10T14:30:00.000Z",
    }
