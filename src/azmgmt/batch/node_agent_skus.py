"""Node agent SKU listing over the Batch data plane.

Unlike the account operations, this talks to the account's own Batch
service endpoint (azure-batch), authenticated with a shared account key.
The key comes from BatchAccountClient.list_keys.

Security:
- Account keys are CRITICAL secrets and are never logged
"""

import logging
from typing import Any

import azure.batch.models as batchmodels
from azure.batch import BatchServiceClient
from azure.batch.batch_auth import SharedKeyCredentials

from azmgmt.batch.account_client import BatchAccountError
from azmgmt.log_sanitizer import LogSanitizer
from azmgmt.models.batch_account import BatchAccountContext
from azmgmt.models.node_agent_sku import NodeAgentSku
from azmgmt.paging import take

logger = logging.getLogger(__name__)


class NodeAgentSkuClient:
    """List node agent SKUs supported by a Batch account.

    Args:
        batch_service_client: azure.batch.BatchServiceClient for the account
    """

    def __init__(self, batch_service_client: Any):
        self.batch_service_client = batch_service_client

    @classmethod
    def from_account(cls, account: BatchAccountContext) -> "NodeAgentSkuClient":
        """Build a client from an account context that carries its keys.

        Raises:
            BatchAccountError: If the account has no endpoint or no keys
        """
        if not account.task_tenant_url:
            raise BatchAccountError(f"Batch account {account.account_name} has no endpoint")
        key = account.primary_account_key or account.secondary_account_key
        if not key:
            raise BatchAccountError(
                f"Keys for Batch account {account.account_name} are required to list node agent SKUs"
            )

        credentials = SharedKeyCredentials(account.account_name, key)
        logger.debug(f"Creating BatchServiceClient for {account.task_tenant_url}")
        return cls(BatchServiceClient(credentials, batch_url=account.task_tenant_url))

    def list_node_agent_skus(
        self, filter_clause: str | None = None, max_count: int | None = None
    ) -> list[NodeAgentSku]:
        """List node agent SKUs with the images verified for each.

        Args:
            filter_clause: OData filter on supported images,
                e.g. "osType eq 'linux'"
            max_count: Maximum number of SKUs (None or 0 = all)

        Raises:
            BatchAccountError: If the Batch service rejects the request
        """
        options = (
            batchmodels.AccountListSupportedImagesOptions(filter=filter_clause)
            if filter_clause
            else None
        )
        try:
            images = self.batch_service_client.account.list_supported_images(
                account_list_supported_images_options=options
            )
            skus = NodeAgentSku.group_supported_images(images)
        except batchmodels.BatchErrorException as e:
            safe_error = LogSanitizer.sanitize(str(e))
            logger.error(f"Failed to list node agent SKUs. Error type: {type(e).__name__}")
            raise BatchAccountError(f"Failed to list node agent SKUs: {safe_error}") from e

        return take(skus, max_count)


__all__ = ["NodeAgentSkuClient"]
