"""Interface de transport consommée par les ressources."""

from __future__ import annotations

from typing import Any, Mapping, Protocol


class ResourceClient(Protocol):
    """Transport JSON de la plateforme (erreurs déjà classées en LegitmarkError)."""

    async def _get(self, endpoint: str, params: Mapping[str, str] | None = None) -> Any:
        ...

    async def _post(self, endpoint: str, body: Any = None) -> Any:
        ...


class ImageResourceClient(ResourceClient, Protocol):
    """Transport étendu : service d'assets (intents) et PUT sur URL signée."""

    async def _get_asset(self, endpoint: str, params: Mapping[str, str] | None = None) -> Any:
        ...

    async def _upload_to_url(self, url: str, data: bytes, content_type: str) -> None:
        ...
