"""Shared type aliases for infomodels."""

from .common import Classification, FieldType, MetadataRecord

__all__ = [
    "Classification",
    "FieldType",
    "MetadataRecord",
]
