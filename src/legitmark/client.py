"""Client REST asynchrone pour l'API partenaire Legitmark (httpx)."""

from __future__ import annotations

import logging
import os
import random
import string
import time
from typing import Any, Mapping

import httpx

from legitmark.classify import classify_http_error
from legitmark.errors import ConfigurationError, ErrorCode, ErrorContext, LegitmarkError
from legitmark.resources import Images, ServiceRequests, Taxonomy
from legitmark.resources.images import IMAGE_CONTENT_TYPES  # noqa: F401
from legitmark.retry import with_retry
from legitmark.utils.logging import enable_debug_logging

logger = logging.getLogger(__name__)

SDK_VERSION = "0.2.0"
API_KEY_PREFIX = "leo_"
USER_AGENT = f"legitmark-python/{SDK_VERSION}"

DEFAULT_API_URL = "https://api.legitmark.com"
DEFAULT_ASSET_URL = "https://media.legitmark.com"
DEFAULT_TIMEOUT_S = 30.0
UPLOAD_TIMEOUT_S = 60.0

_S3_UPLOAD_HEADERS = {
    "Cache-Control": "max-age=10",
    "x-amz-acl": "public-read",
}

_BASE36 = string.digits + string.ascii_lowercase


def _to_base36(value: int) -> str:
    if value <= 0:
        return "0"
    digits: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def new_request_id() -> str:
    """Identifiant de corrélation envoyé en X-Request-Id (ex. req_m1x2y3_a9b8c7)."""
    suffix = "".join(random.choice(_BASE36) for _ in range(6))
    return f"req_{_to_base36(int(time.time() * 1000))}_{suffix}"


class PartnerClient:
    """
    Client de l'API partenaire.

    Ressources :
        client.taxonomy : catégories, types, marques
        client.sr : création et suivi des service requests
        client.images : upload des photos

    Toute erreur de transport est convertie en LegitmarkError avant de sortir
    du client.
    """

    def __init__(
        self,
        api_key: str,
        *,
        timeout_s: float | None = None,
        debug: bool = False,
        base_url: str | None = None,
        asset_url: str | None = None,
        retries: int = 1,
        backoff_s: float = 1.0,
        transport: httpx.AsyncBaseTransport | None = None,
        _shared: "PartnerClient | None" = None,
    ):
        self.api_key = (api_key or "").strip()
        if not self.api_key:
            raise ConfigurationError(
                "api_key is required",
                [
                    "Get your API key from the Legitmark Partner Dashboard",
                    "Or set LEGITMARK_API_KEY and use create_client_from_env()",
                ],
            )
        self.timeout_s = float(timeout_s) if timeout_s is not None else DEFAULT_TIMEOUT_S
        self.debug = bool(debug)
        self.base_url = (base_url or os.environ.get("LEGITMARK_BASE_URL") or DEFAULT_API_URL).rstrip("/")
        self.asset_url = (asset_url or DEFAULT_ASSET_URL).rstrip("/")
        self.retries = max(1, int(retries))
        self.backoff_s = max(0.0, float(backoff_s))
        self._transport = transport

        if self.debug:
            enable_debug_logging()
        if _shared is None and not self.api_key.startswith(API_KEY_PREFIX):
            logger.warning(
                "API key does not start with '%s' prefix. Ensure you are using a valid Partner API key.",
                API_KEY_PREFIX,
            )

        # Un client dérivé (with_options) partage les pools httpx de son parent ;
        # seul le propriétaire les ferme.
        self._owns_http = _shared is None
        if _shared is None:
            self._platform = self._create_http_client(self.base_url, self.timeout_s, authenticated=True)
            self._assets = self._create_http_client(self.asset_url, self.timeout_s, authenticated=True)
            self._uploads = self._create_http_client(None, UPLOAD_TIMEOUT_S, authenticated=False)
        else:
            self._platform = _shared._platform
            self._assets = _shared._assets
            self._uploads = _shared._uploads

        if _shared is None:
            logger.debug(
                "Initialized PartnerClient v%s (base_url=%s, asset_url=%s, timeout_s=%s)",
                SDK_VERSION,
                self.base_url,
                self.asset_url,
                self.timeout_s,
            )

        self.taxonomy = Taxonomy(self)
        self.sr = ServiceRequests(self)
        self.images = Images(self)

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
            "X-SDK-Version": SDK_VERSION,
        }

    def _create_http_client(
        self, base_url: str | None, timeout_s: float, *, authenticated: bool
    ) -> httpx.AsyncClient:
        kwargs: dict[str, Any] = {"timeout": timeout_s}
        if base_url:
            kwargs["base_url"] = base_url
        if authenticated:
            kwargs["headers"] = self._headers()
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return httpx.AsyncClient(**kwargs)

    def with_options(self, *, timeout_s: float | None = None) -> "PartnerClient":
        """
        Vue du client avec surcharge d'options (ex. timeout plus long pour un appel).

        Le client retourné réutilise les connexions de celui-ci : inutile de le
        fermer, `aclose()` sur le client d'origine suffit.
        """
        return PartnerClient(
            self.api_key,
            timeout_s=timeout_s if timeout_s is not None else self.timeout_s,
            debug=self.debug,
            base_url=self.base_url,
            asset_url=self.asset_url,
            retries=self.retries,
            backoff_s=self.backoff_s,
            transport=self._transport,
            _shared=self,
        )

    async def aclose(self) -> None:
        if not self._owns_http:
            return
        for client in (self._platform, self._assets, self._uploads):
            await client.aclose()

    async def __aenter__(self) -> "PartnerClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def _request(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        json_body: Any = None,
        content: bytes | None = None,
        headers: Mapping[str, str] | None = None,
        timeout_s: float | None = None,
    ) -> httpx.Response:
        extra: dict[str, Any] = {}
        if timeout_s is not None:
            extra["timeout"] = timeout_s

        async def send() -> httpx.Response:
            request_id = new_request_id()
            request_headers = {"X-Request-Id": request_id, **(headers or {})}
            logger.debug("%s %s [%s]", method, url, request_id)
            try:
                response = await client.request(
                    method,
                    url,
                    params=dict(params) if params else None,
                    json=json_body,
                    content=content,
                    headers=request_headers,
                    **extra,
                )
                logger.debug("%s %s [%s]", response.status_code, url, request_id)
                response.raise_for_status()
                return response
            except httpx.HTTPError as exc:
                logger.debug("ERR %s [%s]: %s", url, request_id, exc)
                raise classify_http_error(exc, url) from exc

        if self.retries <= 1:
            return await send()
        return await with_retry(send, attempts=self.retries, delay_s=self.backoff_s)

    @staticmethod
    def _json(response: httpx.Response, endpoint: str) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise LegitmarkError(
                ErrorCode.UNKNOWN_ERROR,
                f"Invalid JSON response from {endpoint}",
                context=ErrorContext(
                    status_code=response.status_code,
                    endpoint=endpoint,
                    request_id=response.headers.get("x-request-id"),
                ),
                cause=exc,
            ) from exc

    async def _get(self, endpoint: str, params: Mapping[str, str] | None = None) -> Any:
        response = await self._request(
            self._platform, "GET", endpoint, params=params, timeout_s=self.timeout_s
        )
        return self._json(response, endpoint)

    async def _post(self, endpoint: str, body: Any = None) -> Any:
        response = await self._request(
            self._platform, "POST", endpoint, json_body=body, timeout_s=self.timeout_s
        )
        return self._json(response, endpoint)

    async def _get_asset(self, endpoint: str, params: Mapping[str, str] | None = None) -> Any:
        response = await self._request(
            self._assets, "GET", endpoint, params=params, timeout_s=self.timeout_s
        )
        return self._json(response, endpoint)

    async def _upload_to_url(self, url: str, data: bytes, content_type: str) -> None:
        headers = {"Content-Type": content_type, **_S3_UPLOAD_HEADERS}
        await self._request(
            self._uploads,
            "PUT",
            url,
            content=data,
            headers=headers,
            timeout_s=max(UPLOAD_TIMEOUT_S, self.timeout_s),
        )


class Legitmark(PartnerClient):
    """Client simplifié : `Legitmark("leo_...")`, `Legitmark("leo_...", debug=True)`."""

    def __init__(self, api_key: str, **options: Any):
        super().__init__(api_key, **options)
