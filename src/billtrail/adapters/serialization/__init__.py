"""Serialization adapters."""

from ...config import SerializationFormat
from ...ports.serializer import SerializerPort
from .json_serializer import JsonSerializer
from .yaml_serializer import YamlSerializer

__all__ = ["JsonSerializer", "YamlSerializer", "create_serializer"]


def create_serializer(fmt: SerializationFormat) -> SerializerPort:
    """Create serializer for the configured format."""
    if fmt == SerializationFormat.JSON:
        return JsonSerializer()
    elif fmt == SerializationFormat.YAML:
        return YamlSerializer()
    else:
        raise ValueError(f"Unknown serialization format: {fmt}")
