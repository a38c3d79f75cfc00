"""ARM resource ID parsing.

Resource IDs look like:
    /subscriptions/<sub>/resourceGroups/<rg>/providers/<namespace>/<type>/<name>

Splitting on "/" yields a leading empty segment, so the subscription is
segment 2 and the resource group is segment 4.
"""

from dataclasses import dataclass

SUBSCRIPTION_SEGMENT = 2
RESOURCE_GROUP_SEGMENT = 4


class ResourceIdError(Exception):
    """Raised when a resource ID cannot be parsed."""

    pass


@dataclass(frozen=True)
class ResourceId:
    """Components of an ARM resource ID."""

    subscription: str
    resource_group: str
    provider: str | None = None
    resource_type: str | None = None
    name: str | None = None


def extract_resource_group_name(resource_id: str) -> str:
    """Extract the resource group name from a resource ID.

    Args:
        resource_id: Full ARM resource ID

    Returns:
        Resource group name

    Raises:
        ResourceIdError: If the ID has no resource group segment
    """
    parts = (resource_id or "").split("/")
    if len(parts) <= RESOURCE_GROUP_SEGMENT or not parts[RESOURCE_GROUP_SEGMENT]:
        raise ResourceIdError(f"Missing resource group name in resource ID: {resource_id}")
    return parts[RESOURCE_GROUP_SEGMENT]


def parse_resource_id(resource_id: str) -> ResourceId:
    """Parse a resource ID into its components.

    Args:
        resource_id: Full ARM resource ID

    Returns:
        ResourceId with subscription and resource group always set

    Raises:
        ResourceIdError: If the ID is malformed
    """
    resource_group = extract_resource_group_name(resource_id)
    parts = resource_id.split("/")

    if parts[1].lower() != "subscriptions" or parts[3].lower() != "resourcegroups":
        raise ResourceIdError(f"Malformed resource ID: {resource_id}")

    provider = None
    resource_type = None
    name = None
    # .../providers/<namespace>/<type>/<name>
    if len(parts) >= 9 and parts[5].lower() == "providers":
        provider = parts[6]
        resource_type = f"{parts[6]}/{parts[7]}"
        name = parts[8]

    return ResourceId(
        subscription=parts[SUBSCRIPTION_SEGMENT],
        resource_group=resource_group,
        provider=provider,
        resource_type=resource_type,
        name=name,
    )


__all__ = ["ResourceId", "ResourceIdError", "extract_resource_group_name", "parse_resource_id"]
