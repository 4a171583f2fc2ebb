"""Sous-clients par ressource (taxonomie, service requests, images)."""

from legitmark.resources.base import ImageResourceClient, ResourceClient
from legitmark.resources.images import IMAGE_CONTENT_TYPES, Images
from legitmark.resources.sr import ServiceRequests
from legitmark.resources.taxonomy import Taxonomy

__all__ = [
    "IMAGE_CONTENT_TYPES",
    "ImageResourceClient",
    "Images",
    "ResourceClient",
    "ServiceRequests",
    "Taxonomy",
]
