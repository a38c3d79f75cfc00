"""
Shared test fixtures and configuration for azmgmt tests.

This module provides common fixtures used across all test types:
- Temporary home and config directories
- Mock Azure management clients
- CLI runner with a pre-built CliContext
"""

from unittest.mock import MagicMock, Mock, patch

import pytest
from click.testing import CliRunner

from azmgmt.commands.cli_helpers import CliContext
from azmgmt.config_manager import AzmgmtConfig, ConfigManager

# ============================================================================
# DIRECTORY FIXTURES
# ============================================================================


@pytest.fixture
def temp_home_dir(tmp_path, monkeypatch):
    """Temporary home directory for testing.

    Sets HOME environment variable to temporary directory
    for testing home directory operations without affecting
    real user home directory.
    """
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    return home_dir


@pytest.fixture
def temp_config_dir(tmp_path):
    """Point ConfigManager's default location at a temporary .azmgmt directory."""
    config_dir = tmp_path / ".azmgmt"
    with (
        patch.object(ConfigManager, "DEFAULT_CONFIG_DIR", config_dir),
        patch.object(ConfigManager, "DEFAULT_CONFIG_FILE", config_dir / "config.toml"),
    ):
        yield config_dir


@pytest.fixture(autouse=True)
def no_subscription_env(monkeypatch):
    """Keep the developer's AZURE_SUBSCRIPTION_ID out of tests."""
    monkeypatch.delenv("AZURE_SUBSCRIPTION_ID", raising=False)
    monkeypatch.delenv("AZURE_CLIENT_SECRET", raising=False)


# ============================================================================
# AZURE MOCKING FIXTURES
# ============================================================================


@pytest.fixture
def mock_batch_client():
    """Mock azure.mgmt.batch.BatchManagementClient."""
    return MagicMock()


@pytest.fixture
def mock_resource_client():
    """Mock azure.mgmt.resource.ResourceManagementClient."""
    return MagicMock()


@pytest.fixture
def mock_compute_client():
    """Mock azure.mgmt.compute.ComputeManagementClient."""
    return MagicMock()


@pytest.fixture
def mock_clients(mock_batch_client, mock_resource_client, mock_compute_client):
    """ManagementClients stand-in exposing the three mock SDK clients."""
    clients = Mock()
    clients.batch = mock_batch_client
    clients.resource = mock_resource_client
    clients.compute = mock_compute_client
    return clients


# ============================================================================
# CLI FIXTURES
# ============================================================================


@pytest.fixture
def cli_runner():
    return CliRunner()


@pytest.fixture
def cli_context(mock_clients):
    """CliContext with default config and mock clients, passed as ctx.obj."""
    return CliContext(_config=AzmgmtConfig(subscription_id="sub-id"), _clients=mock_clients)
