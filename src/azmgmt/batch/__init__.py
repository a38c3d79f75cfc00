"""Azure Batch management operations."""

from azmgmt.batch.account_client import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
    AccountPage,
    BatchAccountClient,
    BatchAccountError,
)
from azmgmt.batch.node_agent_skus import NodeAgentSkuClient

__all__ = [
    "AccountAlreadyExistsError",
    "AccountNotFoundError",
    "AccountPage",
    "BatchAccountClient",
    "BatchAccountError",
    "NodeAgentSkuClient",
]
