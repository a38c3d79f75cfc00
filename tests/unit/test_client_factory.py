"""Unit tests for client_factory module."""

from unittest.mock import patch

import pytest

from azmgmt.client_factory import ManagementClients
from azmgmt.config_manager import AzmgmtConfig, ConfigError
from azmgmt.credential_factory import CredentialFactoryError


class TestManagementClients:
    """Tests for ManagementClients."""

    @patch("azmgmt.client_factory.CredentialFactory.create_credential")
    def test_from_config(self, mock_create):
        clients = ManagementClients.from_config(AzmgmtConfig(subscription_id="sub"))

        assert clients.subscription_id == "sub"
        assert clients.credential is mock_create.return_value

    @patch("azmgmt.client_factory.CredentialFactory.create_credential")
    def test_subscription_override(self, mock_create):
        clients = ManagementClients.from_config(
            AzmgmtConfig(subscription_id="sub"), subscription_id="other"
        )
        assert clients.subscription_id == "other"

    def test_missing_subscription(self):
        with pytest.raises(ConfigError):
            ManagementClients.from_config(AzmgmtConfig())

    def test_invalid_auth_config(self):
        config = AzmgmtConfig(subscription_id="sub", auth_method="sp_secret")
        with pytest.raises(CredentialFactoryError, match="Invalid authentication config"):
            ManagementClients.from_config(config)

    @patch("azmgmt.client_factory.BatchManagementClient")
    def test_clients_created_once(self, mock_batch_cls):
        clients = ManagementClients("credential", "sub")

        first = clients.batch
        second = clients.batch

        assert first is second
        mock_batch_cls.assert_called_once_with("credential", "sub")

    @patch("azmgmt.client_factory.ResourceManagementClient")
    @patch("azmgmt.client_factory.ComputeManagementClient")
    def test_compute_and_resource(self, mock_compute_cls, mock_resource_cls):
        clients = ManagementClients("credential", "sub")

        assert clients.compute is mock_compute_cls.return_value
        assert clients.resource is mock_resource_cls.return_value
