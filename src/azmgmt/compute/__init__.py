"""Azure Compute managed image operations."""
