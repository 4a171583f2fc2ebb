"""Payloads API et webhooks partagés par les tests."""

from __future__ import annotations

import copy


SR_UUID = "1ed24ae2-45d8-47ff-bd07-4efc69cb6bc7"
SERVICE_UUID = "f79d24dc-49c6-4904-9428-3850dc5528db"
WEBHOOK_SR_UUID = "b16c763b-1723-455d-ba29-164418044886"
TIMESTAMP = "2026-02-10T12:00:00.000Z"

SIDES_REQUIRED = [
    {
        "uuid": "f47ac10b-58cc-4372-a567-0e02b2c3d479",
        "name": "Interior Size Tag or Stamp",
        "ordinal": 1,
        "required": True,
        "side_group_id": "9a1c2b3d-0000-4000-8000-000000000001",
        "side_group_name": "Footwear Base",
    },
    {
        "uuid": "a3192e82-0d5c-48a4-8d9f-57004c5c07d3",
        "name": "Inner Sides",
        "ordinal": 2,
        "required": True,
        "side_group_name": "Footwear Base",
    },
    {
        "uuid": "c0ffee00-1111-4222-8333-444455556666",
        "name": "Box Label",
        "ordinal": 3,
        "required": True,
    },
]

SR_DRAFT = {
    "uuid": SR_UUID,
    "micro_id": "138912",
    "active": True,
    "tab": "DRAFT",
    "state": {"primary": "DRAFT", "supplement": None},
    "item": {
        "category": {"uuid": "25ed7133-f230-4d64-850d-0cfc698e2931", "name": "Footwear"},
        "type": {"uuid": "95e428c2-7c4f-11ef-a623-02595575faeb", "name": "Sneakers"},
        "brand": {"uuid": "95b54167-a23f-4ca0-81c0-8cf90a3619e2", "name": "Nike"},
    },
    "created_at": "2026-02-06T04:48:00.000Z",
    "updated_at": "2026-02-06T04:48:00.000Z",
}


def sr_with_sides(progress: dict | None = None) -> dict:
    sr = copy.deepcopy(SR_DRAFT)
    sr["requirements"] = {
        "side_groups": [
            {"uuid": "legacy-group", "name": "Legacy", "ordinal": 1, "sides": []},
        ],
        "total_required": len(SIDES_REQUIRED),
        "total_optional": 0,
    }
    sr["sides"] = {"required": copy.deepcopy(SIDES_REQUIRED), "optional": []}
    if progress is not None:
        sr["sides"]["progress"] = progress
    return sr


def progress_payload(current: int, total: int) -> dict:
    return {
        "current_required": current,
        "total_required": total,
        "current_optional": 0,
        "total_optional": 2,
        "met": current >= total,
    }


def state_change_payload(primary: str, supplement: str | None) -> dict:
    return {
        "event_type": "state_change",
        "sr_uuid": WEBHOOK_SR_UUID,
        "reference_id": "PARTNER-ITEM-123",
        "state": {"primary": primary, "supplement": supplement},
        "timestamp": TIMESTAMP,
    }


