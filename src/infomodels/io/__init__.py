"""Dataset file helpers."""

from .files import file_sha256, write_text_atomic

__all__ = ["file_sha256", "write_text_atomic"]
