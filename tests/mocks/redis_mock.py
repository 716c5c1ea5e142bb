"""
MockRedis — synchronous in-memory Upstash Redis stand-in for unit tests.

Supports: get, set (ex/nx), delete, lpush, lrange, ltrim.
Expiry is enforced lazily on read.
"""

import time


class MockRedis:
    def __init__(self):
        self._store: dict[str, object] = {}
        self._expiry: dict[str, float] = {}
        self._lists: dict[str, list] = {}

    def _expired(self, key: str) -> bool:
        if key in self._expiry and time.time() > self._expiry[key]:
            self._store.pop(key, None)
            self._expiry.pop(key, None)
            return True
        return False

    def get(self, key: str):
        if self._expired(key):
            return None
        return self._store.get(key)

    def set(self, key: str, value, ex: int | None = None, nx: bool = False) -> bool | None:
        if nx and key in self._store and not self._expired(key):
            return None
        self._store[key] = value
        if ex:
            self._expiry[key] = time.time() + ex
        return True

    def delete(self, key: str) -> int:
        existed = key in self._store
        self._store.pop(key, None)
        self._expiry.pop(key, None)
        return 1 if existed else 0

    def lpush(self, key: str, *values) -> int:
        items = self._lists.setdefault(key, [])
        for value in values:
            items.insert(0, value)
        return len(items)

    def lrange(self, key: str, start: int, stop: int) -> list:
        items = self._lists.get(key, [])
        end = None if stop == -1 else stop + 1
        return items[start:end]

    def ltrim(self, key: str, start: int, stop: int) -> bool:
        items = self._lists.get(key, [])
        end = None if stop == -1 else stop + 1
        self._lists[key] = items[start:end]
        return True
