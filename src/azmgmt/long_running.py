"""Long-running operation handling.

ARM create/delete calls return an LROPoller. Commands either block on the
result or, with --no-wait, return an OperationHandle describing the
operation's current status and a token that can resume polling.
"""

import logging
from dataclasses import dataclass
from typing import Any

from azmgmt.models.operation_status import OperationStatus, parse_operation_status

logger = logging.getLogger(__name__)


@dataclass
class OperationHandle:
    """Status of an operation that was not waited on."""

    operation: str
    status: OperationStatus | None
    raw_status: str | None = None
    continuation_token: str | None = None

    @property
    def display_status(self) -> str:
        if self.status is not None:
            return self.status.value
        return self.raw_status or "Unknown"

    def to_dict(self) -> dict[str, Any]:
        return {
            "operation": self.operation,
            "status": self.display_status,
            "continuationToken": self.continuation_token,
        }


def wait(poller: Any, operation: str, no_wait: bool = False) -> Any:
    """Wait for an LRO poller or return a handle immediately.

    Args:
        poller: azure.core.polling.LROPoller
        operation: Human-readable operation name for logs and output
        no_wait: Return without waiting for completion

    Returns:
        The operation result, or an OperationHandle when no_wait is set
    """
    if no_wait:
        raw_status = poller.status()
        token = None
        try:
            token = poller.continuation_token()
        except (AttributeError, NotImplementedError, ValueError) as e:
            logger.debug(f"No continuation token for {operation}: {e}")

        handle = OperationHandle(
            operation=operation,
            status=parse_operation_status(raw_status),
            raw_status=raw_status,
            continuation_token=token,
        )
        logger.info(f"{operation} started (status: {handle.display_status})")
        return handle

    logger.debug(f"Waiting for {operation} to complete")
    result = poller.result()
    logger.debug(f"{operation} completed with status {poller.status()}")
    return result


__all__ = ["OperationHandle", "wait"]
