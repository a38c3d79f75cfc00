"""Authentication data models for azmgmt.

Security features:
- Frozen dataclasses for immutability
- UUID validation in __post_init__
- No client secret storage (secrets come from the environment)
"""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID

from azmgmt.config_manager import AzmgmtConfig


def validate_uuid(value: str, field_name: str) -> None:
    """Validate UUID format.

    Raises:
        ValueError: If value is not a valid UUID format
    """
    if not value:
        raise ValueError(f"{field_name} must be valid UUID format, got empty string")

    try:
        UUID(value)
    except (ValueError, AttributeError) as e:
        raise ValueError(f"{field_name} must be valid UUID format, got: {value}") from e


class AuthMethod(StrEnum):
    """Authentication method enumeration.

    - AZURE_CLI: Delegate to the Azure CLI login (default)
    - DEFAULT: azure-identity DefaultAzureCredential chain
    - SERVICE_PRINCIPAL_SECRET: Service principal with client secret
    - MANAGED_IDENTITY: Managed identity (system or user-assigned)
    """

    AZURE_CLI = "azure_cli"
    DEFAULT = "default"
    SERVICE_PRINCIPAL_SECRET = "sp_secret"  # noqa: S105 - Enum value, not a password
    MANAGED_IDENTITY = "managed_identity"


@dataclass(frozen=True)
class AuthConfig:
    """Authentication configuration.

    tenant_id and client_id are required for service principal auth;
    managed_identity_client_id selects a user-assigned identity.
    """

    method: AuthMethod = AuthMethod.AZURE_CLI
    tenant_id: str | None = None
    client_id: str | None = None
    managed_identity_client_id: str | None = None

    def __post_init__(self) -> None:
        if self.method == AuthMethod.SERVICE_PRINCIPAL_SECRET:
            validate_uuid(self.tenant_id or "", "tenant_id")
            validate_uuid(self.client_id or "", "client_id")
        if self.managed_identity_client_id:
            validate_uuid(self.managed_identity_client_id, "managed_identity_client_id")

    @classmethod
    def from_config(cls, config: AzmgmtConfig) -> "AuthConfig":
        """Build from the persisted configuration.

        Raises:
            ValueError: If the method is unknown or IDs are malformed
        """
        try:
            method = AuthMethod(config.auth_method)
        except ValueError as e:
            valid = ", ".join(m.value for m in AuthMethod)
            raise ValueError(
                f"Unknown auth_method: {config.auth_method}. Expected one of: {valid}"
            ) from e

        return cls(
            method=method,
            tenant_id=config.tenant_id,
            client_id=config.client_id,
            managed_identity_client_id=config.managed_identity_client_id,
        )


__all__ = ["AuthConfig", "AuthMethod", "validate_uuid"]
