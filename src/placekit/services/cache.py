"""In-memory LRU cache for lookup results.

Thread-safe: every operation runs under a single lock per instance.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from collections.abc import Hashable
from typing import Any

from placekit.shared.constants import CacheDefaults
from placekit.shared.errors import ApplicationError, ErrorCode, ErrorContext

logger = logging.getLogger(__name__)


class LRUCache:
    """Least recently used cache with a fixed capacity.

    ``get`` promotes the key to most recently used; ``contains`` does not.

    Args:
        max_size: Maximum number of entries (default: 1000)

    Raises:
        ApplicationError: If max_size is not positive
    """

    def __init__(self, max_size: int = CacheDefaults.MAX_SIZE) -> None:
        if max_size <= 0:
            raise ApplicationError(
                code=ErrorCode.VALIDATION_ERROR,
                message=f"Cache size must be positive, got: {max_size}",
                context=ErrorContext(
                    operation="cache_init",
                    additional_data={"max_size": max_size},
                ),
            )
        self.max_size = max_size
        self._data: OrderedDict[Hashable, Any] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: Hashable, default: Any = None) -> Any:
        with self._lock:
            if key not in self._data:
                return default
            self._data.move_to_end(key)
            return self._data[key]

    def set(self, key: Hashable, value: Any) -> None:
        with self._lock:
            if key in self._data:
                self._data.move_to_end(key)
            elif len(self._data) >= self.max_size:
                evicted, _ = self._data.popitem(last=False)
                logger.debug("Evicted cache entry %r", evicted)
            self._data[key] = value

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._data)

    def keys(self) -> list[Hashable]:
        """Keys from least to most recently used."""
        with self._lock:
            return list(self._data.keys())

    def contains(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        return self.contains(key)  # type: ignore[arg-type]
