"""JSON record serializer."""

import json

from ...domain.models import BillRecord
from ...ports.serializer import SerializerPort


class JsonSerializer(SerializerPort):
    """Indented JSON, non-ASCII kept as is."""

    def serialize(self, record: BillRecord) -> str:
        return json.dumps(record.to_dict(), indent=2, ensure_ascii=False)
