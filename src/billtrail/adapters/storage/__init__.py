"""Storage adapters."""

from .sqlite import SqliteBillStore

__all__ = ["SqliteBillStore"]
