"""Serializer port - interface for transport-neutral record encoding."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.models import BillRecord


class SerializerPort(ABC):
    """Interface for bill record serialization."""

    @abstractmethod
    def serialize(self, record: "BillRecord") -> str:
        """Encode a record as text."""
        pass
