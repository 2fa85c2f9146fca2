"""Ports - interfaces for external dependencies."""

from .documents import DocumentSourcePort
from .serializer import SerializerPort
from .store import BillStorePort, StoredBill

__all__ = ["BillStorePort", "DocumentSourcePort", "SerializerPort", "StoredBill"]
