"""Ressource taxonomie : catégories, types, marques (réponses JSON brutes)."""

from __future__ import annotations

from typing import Any

from legitmark.resources.base import ResourceClient


class Taxonomy:
    """Accès au catalogue produit."""

    def __init__(self, client: ResourceClient):
        self._client = client

    async def get_tree(self, *, active_only: bool = True) -> dict[str, Any]:
        """Arbre complet catégories -> types."""
        params: dict[str, str] = {}
        if active_only:
            params["active_only"] = "true"
        return await self._client._get("/api/v2/categories/tree", params)

    async def get_categories(
        self,
        *,
        active_only: bool = True,
        page: int | None = None,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        params: dict[str, str] = {}
        if active_only:
            params["active_only"] = "true"
        if page:
            params["page_number"] = str(page)
        if page_size:
            params["page_size"] = str(page_size)
        return await self._client._get("/api/v2/categories", params)

    async def get_brands(
        self,
        *,
        search: str | None = None,
        page: int | None = None,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        params: dict[str, str] = {}
        if search:
            params["search"] = search
        if page:
            params["page_number"] = str(page)
        if page_size:
            params["page_size"] = str(page_size)
        return await self._client._get("/api/v2/brands", params)

    async def get_brands_for_type(self, type_uuid: str) -> dict[str, Any]:
        """Marques authentifiables pour un type donné."""
        return await self._client._get(f"/api/v2/types/{type_uuid}/brands")
