"""Adapters - I/O implementations of ports."""

from .json_store import JsonTaskStore, StorageError

__all__ = [
    "JsonTaskStore",
    "StorageError",
]
