from __future__ import annotations

from dataclasses import dataclass

from .scene import Point


HASH_MULTIPLIER = 31


class DuplicateLabelError(KeyError):
    """Raised when a label is inserted twice into the same table."""


class SymbolTableOverflowError(RuntimeError):
    """Raised when inserting into a table with no free slot left."""


@dataclass(frozen=True)
class _Entry:
    label: str
    point: Point


def label_hash(label: str, capacity: int) -> int:
    if capacity <= 0:
        raise ValueError("capacity must be > 0")
    h = 0
    for byte in label.encode("utf-8", "surrogatepass"):
        h = (HASH_MULTIPLIER * h + byte) % capacity
    return h


class SymbolTable:
    """Fixed-capacity open-addressed map from label to point.

    Entries are write-once: there is no deletion and the table never grows.
    Callers must size the table strictly above the number of labels they
    intend to insert; a full table raises instead of probing forever.
    """

    def __init__(self, capacity: int) -> None:
        if not isinstance(capacity, int) or isinstance(capacity, bool) or capacity <= 0:
            raise ValueError("capacity must be a positive int")
        self._capacity = capacity
        self._slots: list[_Entry | None] = [None] * capacity
        self._size = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return self._size

    def __contains__(self, label: object) -> bool:
        return isinstance(label, str) and self.lookup(label) is not None

    def insert(self, label: str, point: Point) -> None:
        if self._size >= self._capacity:
            raise SymbolTableOverflowError(f"symbol table is full (capacity={self._capacity})")
        index = label_hash(label, self._capacity)
        for _ in range(self._capacity):
            entry = self._slots[index]
            if entry is None:
                self._slots[index] = _Entry(label=label, point=point)
                self._size += 1
                return
            if entry.label == label:
                raise DuplicateLabelError(label)
            index = (index + 1) % self._capacity
        raise SymbolTableOverflowError(f"no free slot for label {label!r}")

    def lookup(self, label: str) -> Point | None:
        index = label_hash(label, self._capacity)
        for _ in range(self._capacity):
            entry = self._slots[index]
            if entry is None:
                return None
            if entry.label == label:
                return entry.point
            index = (index + 1) % self._capacity
        return None

    def labels(self) -> list[str]:
        """Labels in slot order."""
        return [entry.label for entry in self._slots if entry is not None]
