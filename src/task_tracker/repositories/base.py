"""Base repository implementation for lock-guarded in-memory collections."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Generic, TypeVar

from ..core.locking import ReadWriteLock

RecordType = TypeVar("RecordType")


class InMemoryRepository(ABC, Generic[RecordType]):
    """Provide shared locking helpers for repositories.

    Each repository guards its whole collection with one ``ReadWriteLock``.
    Subclasses perform every compound read-modify-write inside a single
    ``write()`` block and never hand out their internal containers.
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()

    def count(self) -> int:
        """Return the number of stored records."""
        with self._lock.read():
            return sum(1 for _ in self._iter_records())

    @abstractmethod
    def _iter_records(self) -> Iterator[RecordType]:
        """Yield every stored record. Callers hold the lock."""
