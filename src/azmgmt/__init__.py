"""azmgmt - Azure resource management command wrappers

Philosophy:
- Thin glue over the Azure SDK for Python
- One SDK call per command, mapped to a shell-friendly object
- Security by design (no keys in logs, no credentials in code)
- Fail fast with helpful guidance

The azmgmt CLI manages Azure Batch accounts and Compute managed images and
exposes the ARM operation status values used by long-running operations.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
