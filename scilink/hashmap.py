"""String-keyed hash map with linear probing, CRC-32 hashing and doubling growth."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

_INITIAL_SIZE = 256
_MAX_CHAIN_LENGTH = 8
_POLYNOMIAL = 0xEDB88320
_MASK64 = (1 << 64) - 1


def _build_crc_table() -> tuple[int, ...]:
    table = []
    for byte in range(256):
        value = byte
        for _ in range(8):
            value = (value >> 1) ^ _POLYNOMIAL if value & 1 else value >> 1
        table.append(value)
    return tuple(table)


_CRC_TABLE = _build_crc_table()


def crc32(data: bytes) -> int:
    """Return the reflected CRC-32 of ``data`` with a zero start value and no final xor."""
    crc = 0
    for byte in data:
        crc = _CRC_TABLE[(crc ^ byte) & 0xFF] ^ (crc >> 8)
    return crc


@dataclass
class _Entry:
    key: str
    value: Any


class HashMap:
    """A map from strings to arbitrary values using open addressing."""

    def __init__(self) -> None:
        self._table: list[_Entry | None] = [None] * _INITIAL_SIZE
        self._size = 0

    def _home_slot(self, key: str) -> int:
        k = crc32(key.encode("utf-8"))
        # Robert Jenkins' 32 bit mix, evaluated in 64-bit unsigned arithmetic
        k = (k + (k << 12)) & _MASK64
        k ^= k >> 22
        k = (k + (k << 4)) & _MASK64
        k ^= k >> 9
        k = (k + (k << 10)) & _MASK64
        k ^= k >> 2
        k = (k + (k << 7)) & _MASK64
        k ^= k >> 12
        # Knuth's multiplicative method
        k = ((k >> 3) * 2654435761) & _MASK64
        return k % len(self._table)

    def _probe(self, key: str) -> Iterator[int]:
        table_size = len(self._table)
        start = self._home_slot(key)
        for offset in range(_MAX_CHAIN_LENGTH):
            yield (start + offset) % table_size

    def _insert_slot(self, key: str) -> int | None:
        if self._size >= len(self._table) // 2:
            return None
        for index in self._probe(key):
            entry = self._table[index]
            if entry is None or entry.key == key:
                return index
        return None

    def _find(self, key: str) -> int | None:
        for index in self._probe(key):
            entry = self._table[index]
            if entry is not None and entry.key == key:
                return index
        return None

    def _rehash(self) -> None:
        old = self._table
        self._table = [None] * (2 * len(old))
        self._size = 0
        for entry in old:
            if entry is not None:
                self.put(entry.key, entry.value)

    def put(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, growing the table when needed."""
        index = self._insert_slot(key)
        while index is None:
            self._rehash()
            index = self._insert_slot(key)
        entry = self._table[index]
        if entry is None:
            self._table[index] = _Entry(key, value)
            self._size += 1
        else:
            entry.value = value

    def get(self, key: str) -> Any:
        """Return the value stored under ``key``; raise KeyError if absent."""
        index = self._find(key)
        if index is None:
            raise KeyError(key)
        entry = self._table[index]
        assert entry is not None
        return entry.value

    def remove(self, key: str) -> None:
        """Remove ``key`` from the map; raise KeyError if absent."""
        index = self._find(key)
        if index is None:
            raise KeyError(key)
        self._table[index] = None
        self._size -= 1

    def values(self) -> Iterator[Any]:
        """Yield the stored values in table order."""
        for entry in self._table:
            if entry is not None:
                yield entry.value

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._find(key) is not None