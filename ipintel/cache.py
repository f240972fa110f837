"""
Response caching for the ipinfo.io client.

Cache keys are one-way digests of the API token and the lookup path, grouped
under a token-scoped prefix so that every entry belonging to one token can be
evicted together. Entries carry an absolute expiry and are treated as absent
once it passes.
"""

import copy
import hashlib
import threading
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Tuple


CACHE_KEY_PREFIX = 'ipinfo_'


def token_scope_prefix(token: str) -> str:
    """
    Get the key prefix shared by every cache entry of a token.

    Args:
        token: API token

    Returns:
        Prefix string, safe to expose (contains no part of the token)
    """
    scope = hashlib.sha256(token.encode('utf-8')).hexdigest()[:12]
    return f"{CACHE_KEY_PREFIX}{scope}_"


def make_cache_key(token: str, lookup_path: str) -> str:
    """
    Derive the cache key for a lookup.

    Args:
        token: API token
        lookup_path: Bare IP for full lookups, or ``ip/field`` for single fields

    Returns:
        Deterministic cache key
    """
    digest = hashlib.sha256(f"{token}{lookup_path}".encode('utf-8')).hexdigest()
    return f"{token_scope_prefix(token)}{digest}"


class BaseCache(ABC):
    """Interface for TTL-bounded key/payload stores."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """
        Fetch an unexpired payload.

        Args:
            key: Cache key

        Returns:
            Stored payload, or None if missing or expired
        """
        pass

    @abstractmethod
    def set(self, key: str, payload: Any, ttl: int) -> None:
        """
        Store a payload, replacing any existing entry.

        Args:
            key: Cache key
            payload: Decoded API payload or field value
            ttl: Time to live in seconds
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove one entry.

        Returns:
            True if an entry existed
        """
        pass

    @abstractmethod
    def delete_by_prefix(self, prefix: str) -> bool:
        """
        Remove every entry whose key starts with ``prefix``.

        Returns:
            True if the bulk removal succeeded
        """
        pass


class MemoryCache(BaseCache):
    """In-process cache backed by a dictionary."""

    def __init__(self, clock: Callable[[], float] = time.time):
        """
        Initialize the cache.

        Args:
            clock: Source of the current time in seconds
        """
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            payload, expires_at = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None

            return copy.deepcopy(payload)

    def set(self, key: str, payload: Any, ttl: int) -> None:
        if ttl <= 0:
            return
        expires_at = self._clock() + ttl
        with self._lock:
            self._entries[key] = (copy.deepcopy(payload), expires_at)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def delete_by_prefix(self, prefix: str) -> bool:
        with self._lock:
            for key in [k for k in self._entries if k.startswith(prefix)]:
                del self._entries[key]
        return True

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
