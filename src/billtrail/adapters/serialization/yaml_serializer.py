"""YAML record serializer."""

import yaml

from ...domain.models import BillRecord
from ...ports.serializer import SerializerPort


class YamlSerializer(SerializerPort):
    """Block-style YAML in field order."""

    def serialize(self, record: BillRecord) -> str:
        return yaml.safe_dump(
            record.to_dict(),
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )
