"""Managed image data model.

ImageSpec mirrors azure.mgmt.compute.models.Image with plain Python types so
it can be built from JSON input and rendered as JSON or a table.
"""

from dataclasses import dataclass, field

from azmgmt.resource_id import ResourceIdError, extract_resource_group_name


@dataclass
class ImageDisk:
    """OS or data disk of a managed image."""

    os_type: str | None = None
    os_state: str | None = None
    lun: int | None = None
    snapshot_id: str | None = None
    managed_disk_id: str | None = None
    blob_uri: str | None = None
    caching: str | None = None
    disk_size_gb: int | None = None
    storage_account_type: str | None = None


@dataclass
class ImageStorageProfile:
    """Storage profile of a managed image."""

    os_disk: ImageDisk | None = None
    data_disks: list[ImageDisk] = field(default_factory=list)
    zone_resilient: bool | None = None


@dataclass
class ImageSpec:
    """Managed image description used for input and output."""

    location: str | None = None
    id: str | None = None
    name: str | None = None
    type: str | None = None
    tags: dict[str, str] = field(default_factory=dict)
    source_virtual_machine_id: str | None = None
    storage_profile: ImageStorageProfile | None = None
    provisioning_state: str | None = None
    hyper_v_generation: str | None = None

    @property
    def resource_group(self) -> str | None:
        """Resource group parsed from the image ID, if known."""
        if not self.id:
            return None
        try:
            return extract_resource_group_name(self.id)
        except ResourceIdError:
            return None

    @property
    def os_type(self) -> str | None:
        if self.storage_profile and self.storage_profile.os_disk:
            return self.storage_profile.os_disk.os_type
        return None


__all__ = ["ImageDisk", "ImageSpec", "ImageStorageProfile"]
