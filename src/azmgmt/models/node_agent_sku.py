"""Node agent SKU data model.

The Batch service reports supported VM images one by one, each naming the
node agent SKU that runs on it. NodeAgentSku groups those images by SKU.
"""

from dataclasses import dataclass, field
from typing import Any


def _enum_value(value: Any) -> str | None:
    if value is None:
        return None
    return getattr(value, "value", str(value))


def image_urn(image_reference: Any) -> str:
    """publisher:offer:sku:version for a marketplace image reference."""
    if getattr(image_reference, "virtual_machine_image_id", None):
        return image_reference.virtual_machine_image_id
    parts = (
        image_reference.publisher,
        image_reference.offer,
        image_reference.sku,
        image_reference.version or "latest",
    )
    return ":".join(str(p) for p in parts)


@dataclass
class NodeAgentSku:
    """A node agent SKU and the images verified to run it."""

    id: str
    os_type: str | None = None
    verified_image_references: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "os_type": self.os_type,
            "verified_image_references": list(self.verified_image_references),
        }

    @classmethod
    def group_supported_images(cls, images: Any) -> list["NodeAgentSku"]:
        """Group azure.batch ImageInformation items by node agent SKU.

        SKUs keep the order in which the service first reported them.
        """
        skus: dict[str, NodeAgentSku] = {}
        for image in images:
            sku = skus.get(image.node_agent_sku_id)
            if sku is None:
                sku = cls(id=image.node_agent_sku_id, os_type=_enum_value(image.os_type))
                skus[sku.id] = sku
            sku.verified_image_references.append(image_urn(image.image_reference))
        return list(skus.values())
