"""Azure Batch account management.

This module wraps the Batch management SDK (azure-mgmt-batch) for account
CRUD and key operations. When a resource group is not given, it is looked
up by listing Batch account resources in the subscription.

Security:
- Account keys are CRITICAL secrets and are never logged
- Error messages are sanitized before being raised

Public API:
    BatchAccountClient: Account operations
    AccountPage: One page of listed accounts plus the next link
    BatchAccountError: Base exception
    AccountNotFoundError: Account does not exist
    AccountAlreadyExistsError: Account name already taken
"""

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from azure.core.exceptions import HttpResponseError, ResourceExistsError, ResourceNotFoundError
from azure.mgmt.batch.models import (
    AccountKeyType,
    AutoStorageBaseProperties,
    BatchAccountCreateParameters,
    BatchAccountRegenerateKeyParameters,
    BatchAccountUpdateParameters,
)

from azmgmt.log_sanitizer import LogSanitizer
from azmgmt.long_running import OperationHandle, wait
from azmgmt.models.batch_account import BatchAccountContext
from azmgmt.paging import collect, first_page
from azmgmt.resource_group_discovery import (
    BATCH_ACCOUNT_RESOURCE_TYPE,
    AmbiguousResourceError,
    ResourceGroupDiscovery,
    ResourceNotFoundInGroupsError,
)
from azmgmt.tag_manager import TagManager

logger = logging.getLogger(__name__)

KEY_TYPES = tuple(k.value for k in AccountKeyType)


class BatchAccountError(Exception):
    """Base exception for Batch account operations."""

    pass


class AccountNotFoundError(BatchAccountError):
    """Batch account not found."""

    pass


class AccountAlreadyExistsError(BatchAccountError):
    """A Batch account with the requested name already exists."""

    pass


@dataclass
class AccountPage:
    """One page of Batch accounts."""

    accounts: list[BatchAccountContext] = field(default_factory=list)
    next_link: str | None = None


@contextmanager
def _translate_errors(account_name: str | None, action: str) -> Iterator[None]:
    """Translate SDK exceptions into BatchAccountError subclasses."""
    try:
        yield
    except ResourceNotFoundError as e:
        raise AccountNotFoundError(f"Batch account not found: {account_name}") from e
    except ResourceExistsError as e:
        raise AccountAlreadyExistsError(f"Batch account already exists: {account_name}") from e
    except ResourceNotFoundInGroupsError as e:
        raise AccountNotFoundError(f"Batch account not found: {account_name}") from e
    except HttpResponseError as e:
        safe_error = LogSanitizer.sanitize(e.message or str(e))
        logger.error(f"Failed to {action}. Error type: {type(e).__name__}")
        raise BatchAccountError(f"Failed to {action}: {safe_error}") from e


class BatchAccountClient:
    """Manage Azure Batch accounts.

    Args:
        batch_client: azure.mgmt.batch.BatchManagementClient
        resource_client: azure.mgmt.resource.ResourceManagementClient, used
            to look up an account's resource group
    """

    def __init__(self, batch_client: Any, resource_client: Any):
        self.batch_client = batch_client
        self.discovery = ResourceGroupDiscovery(resource_client, BATCH_ACCOUNT_RESOURCE_TYPE)

    # Resource group lookup

    def get_group_for_account_no_throw(self, account_name: str) -> str | None:
        """Return the account's resource group, or None if it does not exist."""
        return self.discovery.find_resource_group_no_throw(account_name)

    def get_group_for_account(self, account_name: str) -> str:
        """Return the account's resource group.

        Raises:
            AccountNotFoundError: If no account with this name exists
        """
        with _translate_errors(account_name, "look up resource group"):
            return self.discovery.find_resource_group(account_name)

    def _resolve_group(self, resource_group: str | None, account_name: str) -> str:
        if resource_group:
            return resource_group
        return self.get_group_for_account(account_name)

    # Account CRUD

    def create_account(
        self,
        resource_group: str,
        account_name: str,
        location: str,
        tags: list[str | Mapping[str, Any]] | None = None,
        storage_account_id: str | None = None,
    ) -> BatchAccountContext:
        """Create a new Batch account.

        Args:
            resource_group: Resource group to create the account in
            account_name: Account name
            location: Azure region
            tags: Tags to associate with the account
            storage_account_id: Resource ID of the auto-storage account

        Returns:
            BatchAccountContext for the new account

        Raises:
            AccountAlreadyExistsError: If an account with this name exists
            TagError: If tags are invalid
            BatchAccountError: For other failures
        """
        try:
            existing_group = self.get_group_for_account_no_throw(account_name)
        except AmbiguousResourceError:
            existing_group = "multiple"
        if existing_group is not None:
            raise AccountAlreadyExistsError(f"Batch account already exists: {account_name}")

        tag_dictionary = TagManager.create_tag_dictionary(tags, validate=True)

        parameters = BatchAccountCreateParameters(
            location=location,
            tags=tag_dictionary,
            auto_storage=(
                AutoStorageBaseProperties(storage_account_id=storage_account_id)
                if storage_account_id
                else None
            ),
        )

        logger.info(f"Creating Batch account {account_name} in {resource_group} ({location})")
        with _translate_errors(account_name, f"create Batch account {account_name}"):
            poller = self.batch_client.batch_account.begin_create(
                resource_group, account_name, parameters
            )
            account = wait(poller, f"Create Batch account {account_name}")

        return BatchAccountContext.from_account_resource(account)

    def update_account(
        self,
        resource_group: str | None,
        account_name: str,
        tags: list[str | Mapping[str, Any]] | None = None,
        storage_account_id: str | None = None,
    ) -> BatchAccountContext:
        """Update tags and auto-storage of an existing Batch account.

        Tags, when given, replace the account's tags. Values left as None are
        not changed.

        Raises:
            AccountNotFoundError: If the account does not exist
            TagError: If tags are invalid
            BatchAccountError: For other failures
        """
        resource_group = self._resolve_group(resource_group, account_name)
        tag_dictionary = (
            TagManager.create_tag_dictionary(tags, validate=True) if tags is not None else None
        )

        parameters = BatchAccountUpdateParameters(
            tags=tag_dictionary,
            auto_storage=(
                AutoStorageBaseProperties(storage_account_id=storage_account_id)
                if storage_account_id
                else None
            ),
        )

        logger.info(f"Updating Batch account {account_name} in {resource_group}")
        with _translate_errors(account_name, f"update Batch account {account_name}"):
            account = self.batch_client.batch_account.update(
                resource_group, account_name, parameters
            )

        return BatchAccountContext.from_account_resource(account)

    def get_account(self, resource_group: str | None, account_name: str) -> BatchAccountContext:
        """Get details about a Batch account.

        Raises:
            AccountNotFoundError: If the account does not exist
        """
        resource_group = self._resolve_group(resource_group, account_name)
        with _translate_errors(account_name, f"get Batch account {account_name}"):
            account = self.batch_client.batch_account.get(resource_group, account_name)
        return BatchAccountContext.from_account_resource(account)

    def list_keys(self, resource_group: str | None, account_name: str) -> BatchAccountContext:
        """Get the account with its primary and secondary keys.

        Raises:
            AccountNotFoundError: If the account does not exist
        """
        resource_group = self._resolve_group(resource_group, account_name)
        context = self.get_account(resource_group, account_name)

        with _translate_errors(account_name, f"list keys for {account_name}"):
            keys = self.batch_client.batch_account.get_keys(resource_group, account_name)

        # SECURITY: Log success but never log the keys themselves
        logger.info(f"Retrieved keys for Batch account {account_name}")
        context.primary_account_key = keys.primary
        context.secondary_account_key = keys.secondary
        return context

    def list_accounts(
        self,
        tag: str | Mapping[str, Any] | None = None,
        resource_group: str | None = None,
        max_count: int | None = None,
    ) -> list[BatchAccountContext]:
        """List Batch accounts in the subscription or a resource group.

        Every page is fetched by following next links; the tag filter
        applies to all pages.

        Args:
            tag: Tag filter ("key" or "key=value")
            resource_group: Limit to this resource group
            max_count: Maximum number of accounts (None or 0 = all)

        Returns:
            List of BatchAccountContext objects
        """
        item_filter = TagManager.tag_predicate(tag) if tag else None

        scope = f"resource group {resource_group}" if resource_group else "subscription"
        logger.debug(f"Listing Batch accounts in {scope}")

        with _translate_errors(None, f"list Batch accounts in {scope}"):
            paged = self._list_paged(resource_group)
            return collect(
                paged,
                transform=BatchAccountContext.from_account_resource,
                max_count=max_count,
                item_filter=item_filter,
            )

    def list_next_accounts(
        self, next_link: str, resource_group: str | None = None
    ) -> AccountPage:
        """Fetch one page of accounts starting at a next link.

        Args:
            next_link: Continuation token from a previous page
            resource_group: Resource group the first listing was scoped to

        Returns:
            AccountPage with the accounts and the following next link
        """
        with _translate_errors(None, "list Batch accounts"):
            page = first_page(self._list_paged(resource_group), continuation_token=next_link)
        return AccountPage(
            accounts=[BatchAccountContext.from_account_resource(a) for a in page.items],
            next_link=page.continuation_token,
        )

    def _list_paged(self, resource_group: str | None) -> Any:
        if resource_group:
            return self.batch_client.batch_account.list_by_resource_group(resource_group)
        return self.batch_client.batch_account.list()

    def regenerate_key(
        self, resource_group: str | None, account_name: str, key_type: str
    ) -> BatchAccountContext:
        """Regenerate the primary or secondary key of an account.

        Args:
            resource_group: Resource group (looked up when None)
            account_name: Account name
            key_type: "Primary" or "Secondary" (case-insensitive)

        Returns:
            BatchAccountContext with both keys after regeneration

        Raises:
            ValueError: If key_type is invalid
            AccountNotFoundError: If the account does not exist
        """
        normalized = next((k for k in KEY_TYPES if k.lower() == key_type.lower()), None)
        if normalized is None:
            raise ValueError(f"Invalid key type: {key_type}. Expected one of: {', '.join(KEY_TYPES)}")

        resource_group = self._resolve_group(resource_group, account_name)
        context = self.get_account(resource_group, account_name)

        logger.info(f"Regenerating {normalized} key for Batch account {account_name}")
        with _translate_errors(account_name, f"regenerate key for {account_name}"):
            keys = self.batch_client.batch_account.regenerate_key(
                resource_group,
                account_name,
                BatchAccountRegenerateKeyParameters(key_name=normalized),
            )

        context.primary_account_key = keys.primary
        context.secondary_account_key = keys.secondary
        return context

    def delete_account(
        self, resource_group: str | None, account_name: str, no_wait: bool = False
    ) -> OperationHandle | None:
        """Delete a Batch account.

        Args:
            resource_group: Resource group (looked up when None)
            account_name: Account name
            no_wait: Return an OperationHandle without waiting

        Returns:
            OperationHandle when no_wait is set, otherwise None

        Raises:
            AccountNotFoundError: If the account does not exist
        """
        resource_group = self._resolve_group(resource_group, account_name)

        logger.info(f"Deleting Batch account {account_name} in {resource_group}")
        with _translate_errors(account_name, f"delete Batch account {account_name}"):
            poller = self.batch_client.batch_account.begin_delete(resource_group, account_name)
            result = wait(poller, f"Delete Batch account {account_name}", no_wait=no_wait)

        return result if no_wait else None


__all__ = [
    "KEY_TYPES",
    "AccountAlreadyExistsError",
    "AccountNotFoundError",
    "AccountPage",
    "BatchAccountClient",
    "BatchAccountError",
]
