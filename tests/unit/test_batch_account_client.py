"""Unit tests for batch.account_client module."""

from unittest.mock import ANY

import pytest
from azure.core.exceptions import HttpResponseError, ResourceExistsError, ResourceNotFoundError

from azmgmt.batch.account_client import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
    BatchAccountClient,
    BatchAccountError,
)
from azmgmt.long_running import OperationHandle
from azmgmt.models.operation_status import OperationStatus
from azmgmt.tag_manager import TagError
from tests.fixtures.azure_responses import (
    FakeItemPaged,
    FakePoller,
    batch_account_id,
    make_account_keys,
    make_batch_account,
    make_generic_resource,
)


@pytest.fixture
def client(mock_batch_client, mock_resource_client):
    return BatchAccountClient(mock_batch_client, mock_resource_client)


@pytest.fixture
def account_exists_in(mock_resource_client):
    """Make group lookup find the named account in a resource group."""

    def _set(resource_group: str | None, name: str = "mybatch"):
        resources = [make_generic_resource(batch_account_id(resource_group, name))] if resource_group else []
        mock_resource_client.resources.list.return_value = FakeItemPaged(resources)

    return _set


class TestGroupLookup:
    """Tests for resource group resolution."""

    def test_get_group_for_account(self, client, account_exists_in):
        account_exists_in("batch-rg")
        assert client.get_group_for_account("mybatch") == "batch-rg"

    def test_get_group_for_missing_account(self, client, account_exists_in):
        account_exists_in(None)

        assert client.get_group_for_account_no_throw("mybatch") is None
        with pytest.raises(AccountNotFoundError, match="mybatch"):
            client.get_group_for_account("mybatch")


class TestCreateAccount:
    """Tests for create_account."""

    def test_create(self, client, mock_batch_client, account_exists_in):
        account_exists_in(None)
        mock_batch_client.batch_account.begin_create.return_value = FakePoller(
            result=make_batch_account(tags={"env": "dev"})
        )

        context = client.create_account(
            "batch-rg", "mybatch", "westus2", tags=["env=dev"], storage_account_id="/sa/id"
        )

        _, _, parameters = mock_batch_client.batch_account.begin_create.call_args.args
        assert parameters.location == "westus2"
        assert parameters.tags == {"env": "dev"}
        assert parameters.auto_storage.storage_account_id == "/sa/id"
        assert context.account_name == "mybatch"
        assert context.resource_group == "batch-rg"
        assert context.tags == {"env": "dev"}

    def test_create_without_storage(self, client, mock_batch_client, account_exists_in):
        account_exists_in(None)
        mock_batch_client.batch_account.begin_create.return_value = FakePoller(
            result=make_batch_account()
        )

        client.create_account("batch-rg", "mybatch", "westus2")

        _, _, parameters = mock_batch_client.batch_account.begin_create.call_args.args
        assert parameters.auto_storage is None
        assert parameters.tags == {}

    def test_existing_account_rejected_before_create(
        self, client, mock_batch_client, account_exists_in
    ):
        account_exists_in("other-rg")

        with pytest.raises(AccountAlreadyExistsError, match="mybatch"):
            client.create_account("batch-rg", "mybatch", "westus2")

        mock_batch_client.batch_account.begin_create.assert_not_called()

    def test_invalid_tags(self, client, account_exists_in):
        account_exists_in(None)
        with pytest.raises(TagError):
            client.create_account("batch-rg", "mybatch", "westus2", tags=["a?b=1"])

    def test_service_conflict(self, client, mock_batch_client, account_exists_in):
        account_exists_in(None)
        mock_batch_client.batch_account.begin_create.side_effect = ResourceExistsError(
            message="Conflict"
        )

        with pytest.raises(AccountAlreadyExistsError):
            client.create_account("batch-rg", "mybatch", "westus2")


class TestUpdateAccount:
    """Tests for update_account."""

    def test_update_tags_with_lookup(self, client, mock_batch_client, account_exists_in):
        account_exists_in("batch-rg")
        mock_batch_client.batch_account.update.return_value = make_batch_account(
            tags={"env": "prod"}
        )

        context = client.update_account(None, "mybatch", tags=["env=prod"])

        rg, name, parameters = mock_batch_client.batch_account.update.call_args.args
        assert (rg, name) == ("batch-rg", "mybatch")
        assert parameters.tags == {"env": "prod"}
        assert parameters.auto_storage is None
        assert context.tags == {"env": "prod"}

    def test_tags_left_unchanged_when_not_given(self, client, mock_batch_client):
        mock_batch_client.batch_account.update.return_value = make_batch_account()

        client.update_account("batch-rg", "mybatch", storage_account_id="/sa/id")

        _, _, parameters = mock_batch_client.batch_account.update.call_args.args
        assert parameters.tags is None
        assert parameters.auto_storage.storage_account_id == "/sa/id"

    def test_empty_tag_list_clears_tags(self, client, mock_batch_client):
        mock_batch_client.batch_account.update.return_value = make_batch_account()

        client.update_account("batch-rg", "mybatch", tags=[])

        _, _, parameters = mock_batch_client.batch_account.update.call_args.args
        assert parameters.tags == {}

    def test_omitted_values_sent_as_none_without_fetch(self, client, mock_batch_client):
        mock_batch_client.batch_account.update.return_value = make_batch_account(
            tags={"env": "prod"}, storage_account_id="/existing/sa"
        )

        context = client.update_account("batch-rg", "mybatch")

        mock_batch_client.batch_account.get.assert_not_called()
        mock_batch_client.batch_account.begin_create.assert_not_called()
        _, _, parameters = mock_batch_client.batch_account.update.call_args.args
        assert parameters.tags is None
        assert parameters.auto_storage is None
        assert context.tags == {"env": "prod"}
        assert context.auto_storage_account_id == "/existing/sa"


class TestGetAccount:
    """Tests for get_account and list_keys."""

    def test_get(self, client, mock_batch_client):
        mock_batch_client.batch_account.get.return_value = make_batch_account(
            storage_account_id="/sa/id"
        )

        context = client.get_account("batch-rg", "mybatch")

        mock_batch_client.batch_account.get.assert_called_once_with("batch-rg", "mybatch")
        assert context.account_endpoint == "mybatch.westus2.batch.azure.com"
        assert context.task_tenant_url == "https://mybatch.westus2.batch.azure.com"
        assert context.auto_storage_account_id == "/sa/id"
        assert context.subscription == "12345678-1234-1234-1234-123456789012"
        assert not context.has_keys

    def test_get_not_found(self, client, mock_batch_client):
        mock_batch_client.batch_account.get.side_effect = ResourceNotFoundError(message="404")

        with pytest.raises(AccountNotFoundError, match="mybatch"):
            client.get_account("batch-rg", "mybatch")

    def test_get_unknown_account_without_group(self, client, account_exists_in):
        account_exists_in(None)
        with pytest.raises(AccountNotFoundError):
            client.get_account(None, "mybatch")

    def test_http_error_sanitized(self, client, mock_batch_client):
        mock_batch_client.batch_account.get.side_effect = HttpResponseError(
            message="Bad request primary_key=abc123"
        )

        with pytest.raises(BatchAccountError) as exc_info:
            client.get_account("batch-rg", "mybatch")

        assert "abc123" not in str(exc_info.value)

    def test_list_keys(self, client, mock_batch_client):
        mock_batch_client.batch_account.get.return_value = make_batch_account()
        mock_batch_client.batch_account.get_keys.return_value = make_account_keys()

        context = client.list_keys("batch-rg", "mybatch")

        assert context.primary_account_key == "primary-key-value"
        assert context.secondary_account_key == "secondary-key-value"
        assert "primary-key-value" not in repr(context)
        assert "primary-key-value" not in str(context)


class TestListAccounts:
    """Tests for list_accounts and list_next_accounts."""

    def test_lists_all_pages(self, client, mock_batch_client):
        mock_batch_client.batch_account.list.return_value = FakeItemPaged(
            [make_batch_account("a1"), make_batch_account("a2")],
            [make_batch_account("a3")],
        )

        accounts = client.list_accounts()

        assert [a.account_name for a in accounts] == ["a1", "a2", "a3"]

    def test_resource_group_scope(self, client, mock_batch_client):
        mock_batch_client.batch_account.list_by_resource_group.return_value = FakeItemPaged([])

        assert client.list_accounts(resource_group="batch-rg") == []
        mock_batch_client.batch_account.list_by_resource_group.assert_called_once_with("batch-rg")
        mock_batch_client.batch_account.list.assert_not_called()

    def test_tag_filter_applies_to_all_pages(self, client, mock_batch_client):
        mock_batch_client.batch_account.list.return_value = FakeItemPaged(
            [make_batch_account("a1", tags={"env": "prod"}), make_batch_account("a2")],
            [make_batch_account("a3", tags={"Env": "PROD"})],
            [make_batch_account("a4", tags={"env": "dev"})],
        )

        accounts = client.list_accounts(tag="env=prod")

        assert [a.account_name for a in accounts] == ["a1", "a3"]

    def test_tag_key_only_filter(self, client, mock_batch_client):
        mock_batch_client.batch_account.list.return_value = FakeItemPaged(
            [make_batch_account("a1", tags={"env": "x"}), make_batch_account("a2")],
        )

        assert [a.account_name for a in client.list_accounts(tag="env")] == ["a1"]

    def test_max_count(self, client, mock_batch_client):
        mock_batch_client.batch_account.list.return_value = FakeItemPaged(
            [make_batch_account("a1")], [make_batch_account("a2")]
        )

        assert len(client.list_accounts(max_count=1)) == 1

    def test_list_next_accounts(self, client, mock_batch_client):
        paged = FakeItemPaged(
            [make_batch_account("a1")], [make_batch_account("a2")], [make_batch_account("a3")]
        )
        mock_batch_client.batch_account.list.return_value = paged

        page = client.list_next_accounts("next-link-1")

        assert [a.account_name for a in page.accounts] == ["a2"]
        assert page.next_link == "next-link-2"
        assert paged.requested_tokens == ["next-link-1"]


class TestRegenerateKey:
    """Tests for regenerate_key."""

    def test_regenerate(self, client, mock_batch_client):
        mock_batch_client.batch_account.get.return_value = make_batch_account()
        mock_batch_client.batch_account.regenerate_key.return_value = make_account_keys(
            primary="new-primary"
        )

        context = client.regenerate_key("batch-rg", "mybatch", "primary")

        _, _, parameters = mock_batch_client.batch_account.regenerate_key.call_args.args
        assert parameters.key_name == "Primary"
        assert context.primary_account_key == "new-primary"

    def test_invalid_key_type(self, client, mock_batch_client):
        with pytest.raises(ValueError, match="Invalid key type"):
            client.regenerate_key("batch-rg", "mybatch", "tertiary")
        mock_batch_client.batch_account.regenerate_key.assert_not_called()


class TestDeleteAccount:
    """Tests for delete_account."""

    def test_delete_waits(self, client, mock_batch_client):
        poller = FakePoller()
        mock_batch_client.batch_account.begin_delete.return_value = poller

        assert client.delete_account("batch-rg", "mybatch") is None
        assert poller.waited

    def test_delete_no_wait(self, client, mock_batch_client):
        mock_batch_client.batch_account.begin_delete.return_value = FakePoller(status="InProgress")

        handle = client.delete_account("batch-rg", "mybatch", no_wait=True)

        assert isinstance(handle, OperationHandle)
        assert handle.status is OperationStatus.IN_PROGRESS
        mock_batch_client.batch_account.begin_delete.assert_called_once_with("batch-rg", ANY)
