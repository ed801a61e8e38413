"""Cross-module type aliases."""

from __future__ import annotations

from typing import Literal, TypeAlias

Classification: TypeAlias = Literal["row", "field"]
FieldType: TypeAlias = Literal["string", "integer", "number", "boolean", "date", "datetime"]

MetadataRecord: TypeAlias = dict[str, str]
