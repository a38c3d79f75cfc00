"""Unit tests for long_running module."""

from azmgmt.long_running import OperationHandle, wait
from azmgmt.models.operation_status import OperationStatus
from tests.fixtures.azure_responses import FakePoller


class TestWait:
    """Tests for wait."""

    def test_blocks_for_result(self):
        poller = FakePoller(result="done")

        assert wait(poller, "Create thing") == "done"
        assert poller.waited

    def test_no_wait_returns_handle(self):
        poller = FakePoller(result="done", status="InProgress", token="abc")

        handle = wait(poller, "Delete thing", no_wait=True)

        assert isinstance(handle, OperationHandle)
        assert handle.status is OperationStatus.IN_PROGRESS
        assert handle.continuation_token == "abc"
        assert not poller.waited

    def test_no_wait_without_token(self):
        handle = wait(FakePoller(status="Succeeded", token=None), "Op", no_wait=True)

        assert handle.status is OperationStatus.SUCCEEDED
        assert handle.continuation_token is None

    def test_unknown_status_kept_raw(self):
        handle = wait(FakePoller(status="Deleting"), "Op", no_wait=True)

        assert handle.status is None
        assert handle.display_status == "Deleting"


class TestOperationHandle:
    """Tests for OperationHandle."""

    def test_to_dict(self):
        handle = OperationHandle("Delete image x", OperationStatus.IN_PROGRESS, "InProgress", "tok")
        assert handle.to_dict() == {
            "operation": "Delete image x",
            "status": "InProgress",
            "continuationToken": "tok",
        }

    def test_display_status_unknown(self):
        assert OperationHandle("Op", None).display_status == "Unknown"
