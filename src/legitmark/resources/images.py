"""Ressource images : intent d'upload (URL signée) puis PUT des octets."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from legitmark.errors import ErrorCode, ErrorContext, LegitmarkError
from legitmark.resources.base import ImageResourceClient

logger = logging.getLogger(__name__)

IMAGE_CONTENT_TYPES = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "WEBP": "image/webp",
}
DEFAULT_EXTENSION = "jpg"

ImageSource = Union[bytes, bytearray, str, Path]


def _read_image(image: ImageSource, side_uuid: str) -> bytes:
    if isinstance(image, (bytes, bytearray)):
        return bytes(image)
    path = Path(image)
    try:
        return path.read_bytes()
    except OSError as exc:
        raise LegitmarkError(
            ErrorCode.UPLOAD_ERROR,
            f"Cannot read image file for side {side_uuid}: {path}",
            context=ErrorContext(details={"path": str(path)}),
            suggestions=["Check that the image path exists and is readable"],
            cause=exc,
        ) from exc


class Images:
    """Upload des photos d'un SR."""

    def __init__(self, client: ImageResourceClient):
        self._client = client

    async def get_intent(
        self, sr_uuid: str, side_uuid: str, extension: str = DEFAULT_EXTENSION
    ) -> str:
        """Demande une URL signée pour la side ; retourne l'URL."""
        endpoint = "/intent"
        data = await self._client._get_asset(
            endpoint, {"sr": sr_uuid, "side": f"{side_uuid}.{extension}"}
        )
        url = data.get("url") if isinstance(data, dict) else None
        if not url:
            raise LegitmarkError(
                ErrorCode.UPLOAD_ERROR,
                f"Upload intent for side {side_uuid} returned no URL",
                context=ErrorContext(endpoint=endpoint, details={"sr": sr_uuid, "side": side_uuid}),
                suggestions=["Retry the upload", "Check that the side belongs to this SR"],
            )
        return str(url)

    async def upload(
        self, url: str, image: bytes, content_type: str = IMAGE_CONTENT_TYPES["JPEG"]
    ) -> None:
        await self._client._upload_to_url(url, image, content_type)
        logger.debug("Uploaded image (%s bytes)", len(image))

    async def upload_for_side(
        self,
        sr_uuid: str,
        side_uuid: str,
        image: ImageSource,
        content_type: str = IMAGE_CONTENT_TYPES["JPEG"],
    ) -> None:
        """Upload complet pour une side : lecture éventuelle du fichier, intent, PUT."""
        data = _read_image(image, side_uuid)
        url = await self.get_intent(sr_uuid, side_uuid)
        await self.upload(url, data, content_type)
        logger.info("Uploaded image for side %s", side_uuid)
