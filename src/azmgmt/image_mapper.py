"""Managed image mapping.

Maps between ImageSpec (shell-facing), azure.mgmt.compute.models.Image
(SDK) and JSON dictionaries (ARM camelCase or snake_case input).

Public API:
    to_sdk: ImageSpec -> SDK Image
    from_sdk: SDK Image -> ImageSpec
    from_dict: JSON dictionary -> ImageSpec
    to_dict: ImageSpec -> camelCase JSON dictionary
"""

from __future__ import annotations

from typing import Any

from azure.mgmt.compute.models import (
    Image,
    ImageDataDisk,
    ImageOSDisk,
    SubResource,
)
from azure.mgmt.compute.models import ImageStorageProfile as SdkImageStorageProfile

from azmgmt.models.image import ImageDisk, ImageSpec, ImageStorageProfile

__all__ = ["ImageMappingError", "from_dict", "from_sdk", "to_dict", "to_sdk"]


class ImageMappingError(ValueError):
    """Raised when image input cannot be mapped."""


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


def _sub_id(sub_resource: Any) -> str | None:
    return sub_resource.id if sub_resource is not None else None


def _sub(resource_id: str | None) -> SubResource | None:
    return SubResource(id=resource_id) if resource_id else None


# SDK -> ImageSpec


def _disk_from_sdk(disk: Any) -> ImageDisk:
    return ImageDisk(
        os_type=_enum_value(getattr(disk, "os_type", None)),
        os_state=_enum_value(getattr(disk, "os_state", None)),
        lun=getattr(disk, "lun", None),
        snapshot_id=_sub_id(disk.snapshot),
        managed_disk_id=_sub_id(disk.managed_disk),
        blob_uri=disk.blob_uri,
        caching=_enum_value(disk.caching),
        disk_size_gb=disk.disk_size_gb,
        storage_account_type=_enum_value(disk.storage_account_type),
    )


def from_sdk(image: Any) -> ImageSpec:
    """Map an SDK Image to an ImageSpec."""
    storage_profile = None
    if image.storage_profile is not None:
        profile = image.storage_profile
        storage_profile = ImageStorageProfile(
            os_disk=_disk_from_sdk(profile.os_disk) if profile.os_disk else None,
            data_disks=[_disk_from_sdk(d) for d in (profile.data_disks or [])],
            zone_resilient=profile.zone_resilient,
        )

    return ImageSpec(
        location=image.location,
        id=image.id,
        name=image.name,
        type=image.type,
        tags=dict(image.tags or {}),
        source_virtual_machine_id=_sub_id(image.source_virtual_machine),
        storage_profile=storage_profile,
        provisioning_state=image.provisioning_state,
        hyper_v_generation=_enum_value(image.hyper_v_generation),
    )


# ImageSpec -> SDK


def _disk_kwargs(disk: ImageDisk) -> dict[str, Any]:
    return {
        "snapshot": _sub(disk.snapshot_id),
        "managed_disk": _sub(disk.managed_disk_id),
        "blob_uri": disk.blob_uri,
        "caching": disk.caching,
        "disk_size_gb": disk.disk_size_gb,
        "storage_account_type": disk.storage_account_type,
    }


def to_sdk(spec: ImageSpec) -> Image:
    """Map an ImageSpec to an SDK Image.

    Read-only fields (id, name, type, provisioning_state) are not sent.

    Raises:
        ImageMappingError: If required disk fields are missing
    """
    storage_profile = None
    if spec.storage_profile is not None:
        os_disk = None
        source = spec.storage_profile.os_disk
        if source is not None:
            if not source.os_type or not source.os_state:
                raise ImageMappingError("osDisk requires osType and osState")
            os_disk = ImageOSDisk(
                os_type=source.os_type, os_state=source.os_state, **_disk_kwargs(source)
            )

        data_disks = []
        for disk in spec.storage_profile.data_disks:
            if disk.lun is None:
                raise ImageMappingError("Each data disk requires a lun")
            data_disks.append(ImageDataDisk(lun=disk.lun, **_disk_kwargs(disk)))

        storage_profile = SdkImageStorageProfile(
            os_disk=os_disk,
            data_disks=data_disks or None,
            zone_resilient=spec.storage_profile.zone_resilient,
        )

    return Image(
        location=spec.location,
        tags=dict(spec.tags) or None,
        source_virtual_machine=_sub(spec.source_virtual_machine_id),
        storage_profile=storage_profile,
        hyper_v_generation=spec.hyper_v_generation,
    )


# JSON <-> ImageSpec


def _normalize(data: Any, field_name: str) -> dict[str, Any]:
    """Lower-case keys and drop underscores so camelCase and snake_case match.

    Raises:
        ImageMappingError: If data is not an object
    """
    if not isinstance(data, dict):
        raise ImageMappingError(f"{field_name} must be an object, got: {type(data).__name__}")
    return {str(k).replace("_", "").lower(): v for k, v in data.items()}


def _nested_id(data: dict[str, Any], name: str) -> str | None:
    """Read "<name>": {"id": ...} or "<name>Id": ... from normalized data."""
    value = data.get(name)
    if isinstance(value, dict):
        return value.get("id")
    if isinstance(value, str):
        return value
    return data.get(f"{name}id")


def _int_or_none(value: Any, field_name: str) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ImageMappingError(f"{field_name} must be an integer, got: {value!r}") from e


def _disk_from_dict(data: Any, field_name: str) -> ImageDisk:
    d = _normalize(data, field_name)
    return ImageDisk(
        os_type=d.get("ostype"),
        os_state=d.get("osstate"),
        lun=_int_or_none(d.get("lun"), "lun"),
        snapshot_id=_nested_id(d, "snapshot"),
        managed_disk_id=_nested_id(d, "manageddisk"),
        blob_uri=d.get("bloburi"),
        caching=d.get("caching"),
        disk_size_gb=_int_or_none(d.get("disksizegb"), "diskSizeGB"),
        storage_account_type=d.get("storageaccounttype"),
    )


def from_dict(data: dict[str, Any]) -> ImageSpec:
    """Build an ImageSpec from a JSON dictionary.

    Accepts ARM resource JSON (with a "properties" object) or a flat object,
    in camelCase or snake_case.

    Raises:
        ImageMappingError: If the input is not a valid image description
    """
    top = _normalize(data, "Image")
    props = _normalize(top.get("properties") or {}, "properties")
    merged = {**top, **props}

    storage_profile = None
    profile_data = merged.get("storageprofile")
    if profile_data is not None:
        profile = _normalize(profile_data, "storageProfile")
        data_disks = profile.get("datadisks") or []
        if not isinstance(data_disks, list):
            raise ImageMappingError("dataDisks must be a list")
        os_disk_data = profile.get("osdisk")
        storage_profile = ImageStorageProfile(
            os_disk=_disk_from_dict(os_disk_data, "osDisk") if os_disk_data else None,
            data_disks=[_disk_from_dict(d, "dataDisks item") for d in data_disks],
            zone_resilient=profile.get("zoneresilient"),
        )

    tags = merged.get("tags") or {}
    if not isinstance(tags, dict):
        raise ImageMappingError("tags must be an object of key/value pairs")

    return ImageSpec(
        location=merged.get("location"),
        id=merged.get("id"),
        name=merged.get("name"),
        type=merged.get("type"),
        tags={str(k): str(v) for k, v in tags.items()},
        source_virtual_machine_id=_nested_id(merged, "sourcevirtualmachine"),
        storage_profile=storage_profile,
        provisioning_state=merged.get("provisioningstate"),
        hyper_v_generation=merged.get("hypervgeneration"),
    )


def _disk_to_dict(disk: ImageDisk) -> dict[str, Any]:
    data = {
        "osType": disk.os_type,
        "osState": disk.os_state,
        "lun": disk.lun,
        "snapshot": {"id": disk.snapshot_id} if disk.snapshot_id else None,
        "managedDisk": {"id": disk.managed_disk_id} if disk.managed_disk_id else None,
        "blobUri": disk.blob_uri,
        "caching": disk.caching,
        "diskSizeGB": disk.disk_size_gb,
        "storageAccountType": disk.storage_account_type,
    }
    return {k: v for k, v in data.items() if v is not None}


def to_dict(spec: ImageSpec) -> dict[str, Any]:
    """Render an ImageSpec as camelCase JSON, omitting None values."""
    storage_profile = None
    if spec.storage_profile is not None:
        storage_profile = {
            k: v
            for k, v in {
                "osDisk": (
                    _disk_to_dict(spec.storage_profile.os_disk)
                    if spec.storage_profile.os_disk
                    else None
                ),
                "dataDisks": [_disk_to_dict(d) for d in spec.storage_profile.data_disks],
                "zoneResilient": spec.storage_profile.zone_resilient,
            }.items()
            if v is not None
        }

    data = {
        "id": spec.id,
        "name": spec.name,
        "type": spec.type,
        "location": spec.location,
        "tags": dict(spec.tags),
        "sourceVirtualMachine": (
            {"id": spec.source_virtual_machine_id} if spec.source_virtual_machine_id else None
        ),
        "storageProfile": storage_profile,
        "provisioningState": spec.provisioning_state,
        "hyperVGeneration": spec.hyper_v_generation,
    }
    return {k: v for k, v in data.items() if v is not None}
