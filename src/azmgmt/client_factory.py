"""Azure management client construction.

ManagementClients builds ARM SDK clients on first use and reuses them for
the rest of the command invocation.
"""

import logging
from typing import Any

from azure.mgmt.batch import BatchManagementClient
from azure.mgmt.compute import ComputeManagementClient
from azure.mgmt.resource import ResourceManagementClient

from azmgmt.auth_models import AuthConfig
from azmgmt.config_manager import AzmgmtConfig, ConfigManager
from azmgmt.credential_factory import CredentialFactory, CredentialFactoryError

logger = logging.getLogger(__name__)


class ManagementClients:
    """Lazily created management clients for one subscription."""

    def __init__(self, credential: Any, subscription_id: str):
        self.credential = credential
        self.subscription_id = subscription_id
        self._batch: BatchManagementClient | None = None
        self._compute: ComputeManagementClient | None = None
        self._resource: ResourceManagementClient | None = None

    @classmethod
    def from_config(
        cls,
        config: AzmgmtConfig | None = None,
        subscription_id: str | None = None,
        config_path: str | None = None,
    ) -> "ManagementClients":
        """Create clients from configuration.

        Args:
            config: Loaded configuration (loaded from disk when None)
            subscription_id: Subscription override
            config_path: Custom config file path

        Raises:
            ConfigError: If no subscription is configured
            CredentialFactoryError: If the credential cannot be created
        """
        if config is None:
            config = ConfigManager.load_config(config_path)
        subscription = ConfigManager.get_subscription_id(subscription_id, config_path, config)
        try:
            auth_config = AuthConfig.from_config(config)
        except ValueError as e:
            raise CredentialFactoryError(f"Invalid authentication config: {e}") from e
        credential = CredentialFactory.create_credential(auth_config)
        return cls(credential, subscription)

    @property
    def batch(self) -> BatchManagementClient:
        if self._batch is None:
            logger.debug("Creating BatchManagementClient")
            self._batch = BatchManagementClient(self.credential, self.subscription_id)
        return self._batch

    @property
    def compute(self) -> ComputeManagementClient:
        if self._compute is None:
            logger.debug("Creating ComputeManagementClient")
            self._compute = ComputeManagementClient(self.credential, self.subscription_id)
        return self._compute

    @property
    def resource(self) -> ResourceManagementClient:
        if self._resource is None:
            logger.debug("Creating ResourceManagementClient")
            self._resource = ResourceManagementClient(self.credential, self.subscription_id)
        return self._resource


__all__ = ["ManagementClients"]
