"""
Size-classed byte buffer pool.

I/O paths borrow buffers from a small set of fixed size classes instead of
allocating a new bytearray for every read:

- allocate(size) returns a memoryview of exactly ``size`` bytes backed by a
  buffer from the smallest class that fits
- free(view) hands the backing buffer back to its class bucket

Requests above the largest class bypass the pool. Buffers created by the pool
start zero-filled; a reused buffer keeps whatever its previous user wrote, so
callers holding private data should free with ``wipe=True``.
"""

import logging
import threading
from typing import Dict, List, Optional, Tuple, Union

from .memory import secure_zero

logger = logging.getLogger(__name__)

SIZE_CLASSES: Tuple[int, ...] = (
    1 << 11,  # 2048
    1 << 12,  # 4096
    1 << 13,  # 8192
    1 << 14,  # 16384
)
DEFAULT_MAX_PER_CLASS = 64


class _PoolBuffer(bytearray):
    """Backing buffer created by a BytesPool; only these are ever pooled."""
    pass


class BytesPool:
    """
    Thread-safe pool of reusable bytearrays grouped by size class.
    """

    def __init__(self, size_classes: Tuple[int, ...] = SIZE_CLASSES,
                 max_per_class: int = DEFAULT_MAX_PER_CLASS):
        """
        Initialize the pool.

        Args:
            size_classes: Ascending buffer sizes managed by the pool
            max_per_class: Maximum idle buffers kept per class (0 disables reuse)
        """
        if not size_classes or list(size_classes) != sorted(set(size_classes)):
            raise ValueError("Size classes must be unique and ascending")
        if max_per_class < 0:
            raise ValueError("max_per_class must be non-negative")

        self.size_classes = tuple(size_classes)
        self.max_per_class = max_per_class
        self._buckets: Dict[int, List[bytearray]] = {size: [] for size in self.size_classes}
        self._lock = threading.Lock()
        self._stats = {'allocated': 0, 'reused': 0, 'freed': 0, 'oversized': 0}

    @property
    def max_size(self) -> int:
        """Largest pooled buffer size."""
        return self.size_classes[-1]

    def class_for(self, size: int) -> Optional[int]:
        """Return the smallest size class holding ``size`` bytes, or None if oversized."""
        for class_size in self.size_classes:
            if size <= class_size:
                return class_size
        return None

    def allocate(self, size: int) -> memoryview:
        """
        Borrow a buffer of exactly ``size`` bytes.

        Args:
            size: Requested length in bytes

        Returns:
            Writable memoryview of length ``size``

        Raises:
            ValueError: If size is negative
        """
        if size < 0:
            raise ValueError("Buffer size must be non-negative")

        class_size = self.class_for(size)
        if class_size is None:
            with self._lock:
                self._stats['oversized'] += 1
            logger.debug(f"Direct allocation of {size} bytes (above {self.max_size})")
            return memoryview(bytearray(size))

        with self._lock:
            bucket = self._buckets[class_size]
            if bucket:
                buf = bucket.pop()
                self._stats['reused'] += 1
            else:
                buf = _PoolBuffer(class_size)
                self._stats['allocated'] += 1

        return memoryview(buf)[:size]

    def free(self, buffer: Union[memoryview, bytearray], wipe: bool = False) -> None:
        """
        Return a buffer obtained from allocate().

        Oversized, foreign and already-released buffers are ignored.

        Args:
            buffer: View (or bytearray) returned by allocate()
            wipe: Zero the whole backing buffer before pooling it
        """
        if isinstance(buffer, memoryview):
            try:
                backing = buffer.obj
            except ValueError:
                # view was already released by an earlier free()
                return
        else:
            backing = buffer
        if type(backing) is not _PoolBuffer or len(backing) not in self._buckets:
            return

        if isinstance(buffer, memoryview):
            buffer.release()
        if wipe:
            secure_zero(backing)

        with self._lock:
            bucket = self._buckets[len(backing)]
            if len(bucket) < self.max_per_class and not any(b is backing for b in bucket):
                bucket.append(backing)
                self._stats['freed'] += 1

    def idle_count(self, class_size: int) -> int:
        """Number of idle buffers currently held for a size class."""
        with self._lock:
            return len(self._buckets.get(class_size, ()))

    def clear(self) -> None:
        """Drop all idle buffers and reset statistics."""
        with self._lock:
            for bucket in self._buckets.values():
                bucket.clear()
            for key in self._stats:
                self._stats[key] = 0

    def stats(self) -> Dict[str, int]:
        """Return a snapshot of pool counters."""
        with self._lock:
            return dict(self._stats)


_default_pool = BytesPool()


def init(max_per_class: int = DEFAULT_MAX_PER_CLASS) -> BytesPool:
    """
    Reset the module-level pool.

    Args:
        max_per_class: Idle buffer limit per size class

    Returns:
        The new default pool
    """
    global _default_pool
    _default_pool = BytesPool(max_per_class=max_per_class)
    return _default_pool


def get_pool() -> BytesPool:
    """Return the module-level pool."""
    return _default_pool


def allocate(size: int) -> memoryview:
    """Borrow a buffer from the module-level pool."""
    return _default_pool.allocate(size)


def free(buffer: Union[memoryview, bytearray], wipe: bool = False) -> None:
    """Return a buffer to the module-level pool."""
    _default_pool.free(buffer, wipe=wipe)
