"""Helpers asyncio partagés."""

from __future__ import annotations

import inspect
from typing import Any


async def maybe_await(value: Any) -> Any:
    """Attend `value` si c'est un awaitable (callback async), sinon la retourne telle quelle."""
    if inspect.isawaitable(value):
        return await value
    return value
