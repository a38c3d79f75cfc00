"""Unit tests for operation_status module."""

import json

import pytest

from azmgmt.models.operation_status import (
    OperationStatus,
    parse_operation_status,
    to_serialized_value,
)


class TestOperationStatus:
    """Tests for the OperationStatus enum."""

    def test_wire_values(self):
        assert [s.value for s in OperationStatus] == [
            "InProgress",
            "Failed",
            "Succeeded",
            "TimedOut",
            "Created",
        ]

    @pytest.mark.parametrize("status", list(OperationStatus))
    def test_parse_serialized_value_returns_same_member(self, status):
        assert parse_operation_status(to_serialized_value(status)) is status

    def test_serializes_to_json_without_encoder(self):
        assert json.dumps({"status": OperationStatus.TIMED_OUT}) == '{"status": "TimedOut"}'

    def test_is_terminal(self):
        assert OperationStatus.SUCCEEDED.is_terminal
        assert OperationStatus.FAILED.is_terminal
        assert OperationStatus.TIMED_OUT.is_terminal
        assert not OperationStatus.IN_PROGRESS.is_terminal
        assert not OperationStatus.CREATED.is_terminal


class TestParseOperationStatus:
    """Tests for parse_operation_status."""

    def test_unknown_value_returns_none(self):
        assert parse_operation_status("Canceled") is None

    def test_none_returns_none(self):
        assert parse_operation_status(None) is None

    def test_matching_is_case_sensitive(self):
        assert parse_operation_status("succeeded") is None
        assert parse_operation_status("inprogress") is None

    def test_empty_string_returns_none(self):
        assert parse_operation_status("") is None


class TestToSerializedValue:
    """Tests for to_serialized_value."""

    def test_none(self):
        assert to_serialized_value(None) is None

    def test_member(self):
        assert to_serialized_value(OperationStatus.IN_PROGRESS) == "InProgress"
