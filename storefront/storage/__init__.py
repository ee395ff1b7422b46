"""Storage package: backends, JSON store and key names."""
from .backends import FileBackend, MemoryBackend, NullBackend, RedisBackend, StorageBackend
from .keys import StorageKeys
from .store import JsonStore

__all__ = [
    "FileBackend",
    "JsonStore",
    "MemoryBackend",
    "NullBackend",
    "RedisBackend",
    "StorageBackend",
    "StorageKeys",
]
