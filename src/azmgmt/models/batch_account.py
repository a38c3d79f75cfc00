"""Batch account data model.

BatchAccountContext is the shell-friendly view of an SDK BatchAccount.
Account keys are CRITICAL secrets: they are only populated by key listing or
regeneration and never appear in repr/str output.
"""

from dataclasses import dataclass, field, fields
from typing import Any

from azmgmt.resource_id import parse_resource_id

_KEY_FIELDS = ("primary_account_key", "secondary_account_key")


@dataclass
class BatchAccountContext:
    """Batch account details (CRITICAL: keys must never be logged)."""

    account_name: str
    id: str | None = None
    account_endpoint: str | None = None
    location: str | None = None
    resource_group: str | None = None
    subscription: str | None = None
    provisioning_state: str | None = None
    pool_allocation_mode: str | None = None
    auto_storage_account_id: str | None = None
    dedicated_core_quota: int | None = None
    low_priority_core_quota: int | None = None
    pool_quota: int | None = None
    active_job_and_job_schedule_quota: int | None = None
    tags: dict[str, str] = field(default_factory=dict)
    primary_account_key: str | None = field(default=None, repr=False)
    secondary_account_key: str | None = field(default=None, repr=False)

    @property
    def task_tenant_url(self) -> str | None:
        """Batch service URL derived from the account endpoint."""
        if not self.account_endpoint:
            return None
        return f"https://{self.account_endpoint}"

    @property
    def has_keys(self) -> bool:
        return bool(self.primary_account_key or self.secondary_account_key)

    def __str__(self) -> str:
        """Prevent accidental exposure of keys in logs."""
        return f"BatchAccountContext({self.account_name}, resource_group={self.resource_group})"

    def to_dict(self, include_keys: bool = False) -> dict[str, Any]:
        """Convert to dictionary for JSON output.

        Args:
            include_keys: Include account keys (only for explicit key commands)

        Returns:
            Dictionary of account fields
        """
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["tags"] = dict(self.tags)
        data["task_tenant_url"] = self.task_tenant_url
        if not include_keys:
            for key_field in _KEY_FIELDS:
                data.pop(key_field)
        return data

    @classmethod
    def from_account_resource(cls, account: Any) -> "BatchAccountContext":
        """Create a context from an SDK BatchAccount.

        Args:
            account: azure.mgmt.batch.models.BatchAccount

        Returns:
            BatchAccountContext without keys
        """
        resource_group = None
        subscription = None
        if account.id:
            parsed = parse_resource_id(account.id)
            resource_group = parsed.resource_group
            subscription = parsed.subscription

        auto_storage = getattr(account, "auto_storage", None)

        return cls(
            account_name=account.name,
            id=account.id,
            account_endpoint=getattr(account, "account_endpoint", None),
            location=account.location,
            resource_group=resource_group,
            subscription=subscription,
            provisioning_state=_enum_value(getattr(account, "provisioning_state", None)),
            pool_allocation_mode=_enum_value(getattr(account, "pool_allocation_mode", None)),
            auto_storage_account_id=auto_storage.storage_account_id if auto_storage else None,
            dedicated_core_quota=getattr(account, "dedicated_core_quota", None),
            low_priority_core_quota=getattr(account, "low_priority_core_quota", None),
            pool_quota=getattr(account, "pool_quota", None),
            active_job_and_job_schedule_quota=getattr(
                account, "active_job_and_job_schedule_quota", None
            ),
            tags=dict(account.tags or {}),
        )


def _enum_value(value: Any) -> str | None:
    """SDK enums may be str subclasses or plain strings."""
    if value is None:
        return None
    return getattr(value, "value", value)


__all__ = ["BatchAccountContext"]
