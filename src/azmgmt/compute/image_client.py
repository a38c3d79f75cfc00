"""Azure Compute managed image operations.

Wraps ComputeManagementClient.images (azure-mgmt-compute). Input and output
use ImageSpec; mapping to and from SDK models is done by image_mapper.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from azure.core.exceptions import HttpResponseError, ResourceNotFoundError

from azmgmt import image_mapper
from azmgmt.log_sanitizer import LogSanitizer
from azmgmt.long_running import OperationHandle, wait
from azmgmt.models.image import ImageSpec
from azmgmt.paging import collect

logger = logging.getLogger(__name__)


class ImageOperationError(Exception):
    """Base exception for image operations."""

    pass


class ImageNotFoundError(ImageOperationError):
    """Image not found."""

    pass


@contextmanager
def _translate_errors(image_name: str | None, action: str) -> Iterator[None]:
    try:
        yield
    except ResourceNotFoundError as e:
        raise ImageNotFoundError(f"Image not found: {image_name}") from e
    except HttpResponseError as e:
        safe_error = LogSanitizer.sanitize(e.message or str(e))
        logger.error(f"Failed to {action}. Error type: {type(e).__name__}")
        raise ImageOperationError(f"Failed to {action}: {safe_error}") from e


class ImageClient:
    """Manage Azure Compute managed images.

    Args:
        compute_client: azure.mgmt.compute.ComputeManagementClient
    """

    def __init__(self, compute_client: Any):
        self.compute_client = compute_client

    def create_or_update(
        self,
        resource_group: str,
        image_name: str,
        image: ImageSpec,
        no_wait: bool = False,
    ) -> ImageSpec | OperationHandle:
        """Create or update a managed image.

        Args:
            resource_group: Resource group name
            image_name: Image name
            image: Image description (location is required by the service)
            no_wait: Return an OperationHandle without waiting

        Returns:
            The resulting ImageSpec, or an OperationHandle when no_wait is set

        Raises:
            ImageMappingError: If the image description is invalid
            ImageOperationError: If the service rejects the request
        """
        if not resource_group or not image_name:
            raise ImageOperationError("Resource group and image name are required")

        parameters = image_mapper.to_sdk(image)

        logger.info(f"Creating or updating image {image_name} in {resource_group}")
        with _translate_errors(image_name, f"create or update image {image_name}"):
            poller = self.compute_client.images.begin_create_or_update(
                resource_group, image_name, parameters
            )
            result = wait(poller, f"Create or update image {image_name}", no_wait=no_wait)

        if no_wait:
            return result
        return image_mapper.from_sdk(result)

    def get(self, resource_group: str, image_name: str, expand: str | None = None) -> ImageSpec:
        """Get a managed image.

        Raises:
            ImageNotFoundError: If the image does not exist
        """
        with _translate_errors(image_name, f"get image {image_name}"):
            if expand:
                image = self.compute_client.images.get(resource_group, image_name, expand=expand)
            else:
                image = self.compute_client.images.get(resource_group, image_name)
        return image_mapper.from_sdk(image)

    def list(self, resource_group: str | None = None, max_count: int | None = None) -> list[ImageSpec]:
        """List managed images in the subscription or a resource group.

        Next links are followed until all pages (or max_count images) are read.
        """
        scope = f"resource group {resource_group}" if resource_group else "subscription"
        logger.debug(f"Listing images in {scope}")

        with _translate_errors(None, f"list images in {scope}"):
            if resource_group:
                paged = self.compute_client.images.list_by_resource_group(resource_group)
            else:
                paged = self.compute_client.images.list()
            return collect(paged, transform=image_mapper.from_sdk, max_count=max_count)

    def delete(
        self, resource_group: str, image_name: str, no_wait: bool = False
    ) -> OperationHandle | None:
        """Delete a managed image.

        Returns:
            OperationHandle when no_wait is set, otherwise None
        """
        logger.info(f"Deleting image {image_name} in {resource_group}")
        with _translate_errors(image_name, f"delete image {image_name}"):
            poller = self.compute_client.images.begin_delete(resource_group, image_name)
            result = wait(poller, f"Delete image {image_name}", no_wait=no_wait)
        return result if no_wait else None


__all__ = ["ImageClient", "ImageNotFoundError", "ImageOperationError"]
