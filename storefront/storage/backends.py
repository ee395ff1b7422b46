"""
Storage backends.

A backend stores raw strings by key. ``JsonStore`` layers JSON encoding on
top. Available backends:
- MemoryBackend: process memory (page-scoped sessions, tests)
- FileBackend: a single JSON document on disk
- RedisBackend: Upstash Redis over REST
- NullBackend: no durable storage available; reads are empty, writes no-ops
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol

from upstash_redis import Redis

from storefront.logging import get_logger

logger = get_logger(__name__)


class StorageBackend(Protocol):
    """Raw string key-value storage."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryBackend:
    """Dict-backed storage for a single process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class NullBackend:
    """Storage for contexts with no durable store."""

    def get(self, key: str) -> Optional[str]:
        return None

    def set(self, key: str, value: str) -> None:
        return None

    def delete(self, key: str) -> None:
        return None


class FileBackend:
    """
    Persist all keys in one JSON document.

    The document maps key -> raw string value. A missing or unreadable file
    reads as empty; writes replace the file atomically.
    """

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Storage file {self.path} is corrupted, treating as empty: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Storage file {self.path} is not a JSON object, treating as empty")
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _dump(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".storage-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)

    def delete(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._dump(data)


class RedisBackend:
    """
    Upstash Redis storage.

    Keys are namespaced with ``prefix`` so several storefronts can share a
    database. Last writer wins across processes.
    """

    def __init__(self, url: str, token: str, prefix: str = "", client: Optional[Redis] = None):
        if client is None:
            if not url or not token:
                raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
            client = Redis(url=url, token=token)
        self._redis = client
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get(self, key: str) -> Optional[str]:
        value = self._redis.get(self._key(key))
        if value is None:
            return None
        return value if isinstance(value, str) else str(value)

    def set(self, key: str, value: str) -> None:
        self._redis.set(self._key(key), value)

    def delete(self, key: str) -> None:
        self._redis.delete(self._key(key))
