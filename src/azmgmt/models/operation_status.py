"""Operation status values reported by ARM long-running operations.

Public API:
    OperationStatus: Enum of operation states
    to_serialized_value: Enum member -> wire string
    parse_operation_status: Wire string -> enum member (or None)
"""

from enum import StrEnum


class OperationStatus(StrEnum):
    """Defines values for OperationStatus.

    Member values are the exact strings used on the wire, so members
    serialize to JSON without a custom encoder.
    """

    IN_PROGRESS = "InProgress"
    FAILED = "Failed"
    SUCCEEDED = "Succeeded"
    TIMED_OUT = "TimedOut"
    CREATED = "Created"

    @property
    def is_terminal(self) -> bool:
        """Check if the operation has finished (successfully or not)."""
        return self in (
            OperationStatus.FAILED,
            OperationStatus.SUCCEEDED,
            OperationStatus.TIMED_OUT,
        )


_BY_WIRE_VALUE: dict[str, OperationStatus] = {member.value: member for member in OperationStatus}


def to_serialized_value(value: OperationStatus | None) -> str | None:
    """Serialize an operation status to its wire string.

    Args:
        value: Operation status or None

    Returns:
        Wire string, or None when value is None

    Example:
        >>> to_serialized_value(OperationStatus.TIMED_OUT)
        'TimedOut'
    """
    if value is None:
        return None
    return OperationStatus(value).value


def parse_operation_status(value: str | None) -> OperationStatus | None:
    """Parse a wire string into an operation status.

    Matching is exact and case-sensitive. Unknown strings return None rather
    than raising so callers can display statuses this enum does not model.

    Args:
        value: Wire string such as "InProgress"

    Returns:
        OperationStatus member or None
    """
    if value is None:
        return None
    return _BY_WIRE_VALUE.get(value)


__all__ = ["OperationStatus", "parse_operation_status", "to_serialized_value"]
