"""Data models for azmgmt."""

from azmgmt.models.batch_account import BatchAccountContext
from azmgmt.models.image import ImageDisk, ImageSpec, ImageStorageProfile
from azmgmt.models.node_agent_sku import NodeAgentSku
from azmgmt.models.operation_status import (
    OperationStatus,
    parse_operation_status,
    to_serialized_value,
)

__all__ = [
    "BatchAccountContext",
    "ImageDisk",
    "ImageSpec",
    "ImageStorageProfile",
    "NodeAgentSku",
    "OperationStatus",
    "parse_operation_status",
    "to_serialized_value",
]
