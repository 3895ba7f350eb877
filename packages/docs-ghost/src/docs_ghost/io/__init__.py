"""Report output helpers."""

from .fs import write_json, write_text_atomic

__all__ = ["write_json", "write_text_atomic"]
