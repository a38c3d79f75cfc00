"""Resource Group Discovery Module.

Discovers which resource group contains a named resource by listing all
resources of a given type in the subscription and matching on name.

Used when a command is given a resource name without --resource-group.
Results are not cached; every lookup queries Azure.
"""

import logging
from typing import Any

from azure.core.exceptions import HttpResponseError

from azmgmt.paging import collect
from azmgmt.resource_id import extract_resource_group_name

logger = logging.getLogger(__name__)

BATCH_ACCOUNT_RESOURCE_TYPE = "Microsoft.Batch/batchAccounts"


class ResourceGroupDiscoveryError(Exception):
    """Exception raised for resource group discovery failures."""

    pass


class ResourceNotFoundInGroupsError(ResourceGroupDiscoveryError):
    """No resource with the given name exists in any resource group."""

    pass


class AmbiguousResourceError(ResourceGroupDiscoveryError):
    """The name matches resources in more than one resource group."""

    def __init__(self, resource_name: str, resource_groups: list[str]):
        self.resource_name = resource_name
        self.resource_groups = resource_groups
        group_list = "\n".join(f"  {i + 1}. {rg}" for i, rg in enumerate(resource_groups))
        super().__init__(
            f"Multiple resources named '{resource_name}' found:\n{group_list}\n"
            "Use --resource-group to specify which one."
        )


class ResourceGroupDiscovery:
    """Discovers resource groups by listing resources of one type."""

    def __init__(self, resource_client: Any, resource_type: str = BATCH_ACCOUNT_RESOURCE_TYPE):
        """Initialize resource group discovery.

        Args:
            resource_client: azure.mgmt.resource.ResourceManagementClient
            resource_type: ARM resource type to search, e.g. Microsoft.Batch/batchAccounts
        """
        self.resource_client = resource_client
        self.resource_type = resource_type

    def find_resource_group_no_throw(self, resource_name: str) -> str | None:
        """Find the resource group of a named resource.

        Args:
            resource_name: Resource name to look up

        Returns:
            Resource group name, or None if no resource matches

        Raises:
            AmbiguousResourceError: If matches span several resource groups
            ResourceGroupDiscoveryError: If listing resources fails
        """
        if not resource_name or not resource_name.strip():
            logger.warning("Empty resource name provided")
            return None

        logger.debug(f"Looking up resource group for {self.resource_type} '{resource_name}'")

        try:
            paged = self.resource_client.resources.list(
                filter=f"resourceType eq '{self.resource_type}'"
            )
            matches = collect(paged, item_filter=lambda res: res.name == resource_name)
        except HttpResponseError as e:
            raise ResourceGroupDiscoveryError(
                f"Failed to list {self.resource_type} resources: {e.message}"
            ) from e

        groups: list[str] = []
        for resource in matches:
            group = extract_resource_group_name(resource.id)
            if group not in groups:
                groups.append(group)

        if not groups:
            logger.debug(f"No {self.resource_type} named '{resource_name}' found")
            return None
        if len(groups) > 1:
            raise AmbiguousResourceError(resource_name, groups)

        logger.debug(f"Resolved '{resource_name}' to resource group '{groups[0]}'")
        return groups[0]

    def find_resource_group(self, resource_name: str) -> str:
        """Find the resource group of a named resource.

        Raises:
            ResourceNotFoundInGroupsError: If no resource matches
            AmbiguousResourceError: If matches span several resource groups
        """
        group = self.find_resource_group_no_throw(resource_name)
        if group is None:
            raise ResourceNotFoundInGroupsError(
                f"Resource '{resource_name}' of type {self.resource_type} "
                "was not found in any resource group of the subscription"
            )
        return group


__all__ = [
    "BATCH_ACCOUNT_RESOURCE_TYPE",
    "AmbiguousResourceError",
    "ResourceGroupDiscovery",
    "ResourceGroupDiscoveryError",
    "ResourceNotFoundInGroupsError",
]
