"""Credential factory for Azure authentication.

This module creates Azure Identity SDK credential objects from
authentication configuration.

Supported credential types:
- AzureCliCredential: Delegate to Azure CLI (default)
- DefaultAzureCredential: Environment, managed identity, CLI, ... chain
- ClientSecretCredential: Service principal with client secret
- ManagedIdentityCredential: Managed identity (system or user-assigned)

Security:
- No token storage - delegates to Azure Identity SDK
- Client secrets from environment variables only
- Log sanitization for all error messages
"""

import logging
import os
from typing import Any

from azure.identity import (
    AzureCliCredential,
    ClientSecretCredential,
    DefaultAzureCredential,
    ManagedIdentityCredential,
)

from azmgmt.auth_models import AuthConfig, AuthMethod
from azmgmt.log_sanitizer import LogSanitizer

logger = logging.getLogger(__name__)

CLIENT_SECRET_ENV_VAR = "AZURE_CLIENT_SECRET"  # noqa: S105 - env var name, not a secret


class CredentialFactoryError(Exception):
    """Raised when credential creation fails."""

    pass


class CredentialFactory:
    """Factory for creating Azure Identity credentials."""

    @staticmethod
    def create_credential(auth_config: AuthConfig) -> Any:
        """Create Azure Identity credential from configuration.

        Args:
            auth_config: Authentication configuration

        Returns:
            Azure Identity credential object (TokenCredential)

        Raises:
            CredentialFactoryError: If credential creation fails
        """
        logger.debug(f"Creating credential for auth method: {auth_config.method}")
        try:
            if auth_config.method == AuthMethod.AZURE_CLI:
                return AzureCliCredential()

            elif auth_config.method == AuthMethod.DEFAULT:
                return DefaultAzureCredential()

            elif auth_config.method == AuthMethod.SERVICE_PRINCIPAL_SECRET:
                return CredentialFactory._create_sp_secret_credential(auth_config)

            elif auth_config.method == AuthMethod.MANAGED_IDENTITY:
                if auth_config.managed_identity_client_id:
                    return ManagedIdentityCredential(
                        client_id=auth_config.managed_identity_client_id
                    )
                return ManagedIdentityCredential()

            else:
                raise CredentialFactoryError(
                    f"Unsupported authentication method: {auth_config.method}"
                )

        except CredentialFactoryError:
            raise
        except Exception as e:
            safe_error = LogSanitizer.create_safe_error_message(e, "Credential creation failed")
            raise CredentialFactoryError(safe_error) from e

    @staticmethod
    def _create_sp_secret_credential(auth_config: AuthConfig) -> ClientSecretCredential:
        """Create service principal credential with client secret.

        The client secret MUST come from the AZURE_CLIENT_SECRET environment
        variable.

        Raises:
            CredentialFactoryError: If client secret not found in environment
        """
        client_secret = os.getenv(CLIENT_SECRET_ENV_VAR)
        if not client_secret:
            raise CredentialFactoryError(
                f"Client secret not found in environment. Set {CLIENT_SECRET_ENV_VAR}."
            )

        return ClientSecretCredential(
            tenant_id=auth_config.tenant_id,
            client_id=auth_config.client_id,
            client_secret=client_secret,
        )


__all__ = ["CredentialFactory", "CredentialFactoryError"]
