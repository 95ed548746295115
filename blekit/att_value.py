"""A bounded byte container for GATT attribute values."""

from __future__ import annotations

import time
from collections.abc import Iterable, Iterator

ATT_ATTR_MAX_LEN = 512
DEFAULT_INIT_LEN = 20


class AttValueTooLong(ValueError):
    """Raised when a value would exceed the attribute's maximum size."""


def _to_bytes(value: object) -> bytes:
    if isinstance(value, AttValue):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, Iterable):
        return bytes(value)
    raise TypeError(f"cannot use {type(value).__name__} as an attribute value")


class AttValue:
    """Holds an attribute value of at most ``max_size`` bytes.

    ``capacity`` tracks the largest length held so far (or the initial
    length), and ``timestamp`` the time of the last update, 0 if none.
    """

    __hash__ = None  # mutable

    def __init__(self, value: object = None, max_len: int = ATT_ATTR_MAX_LEN,
                 init_len: int = DEFAULT_INIT_LEN) -> None:
        self._max_len = min(ATT_ATTR_MAX_LEN, max_len)
        self._timestamp = 0.0
        if value is None:
            self._data = b""
            self._capacity = init_len
        else:
            self._data = _to_bytes(value)
            self._capacity = len(self._data)

    @property
    def max_size(self) -> int:
        """The largest number of bytes the value may hold."""
        return self._max_len

    @property
    def capacity(self) -> int:
        """The room currently reserved for the value, in bytes."""
        return self._capacity

    @property
    def timestamp(self) -> float:
        """When the value was last set or appended to, 0 if never."""
        return self._timestamp

    def set_value(self, value: object) -> None:
        """Replace the value; raise AttValueTooLong if it is too long."""
        data = _to_bytes(value)
        if len(data) > self._max_len:
            raise AttValueTooLong(
                f"value exceeds max, len={len(data)}, max={self._max_len}")
        self._capacity = max(self._capacity, len(data))
        self._data = data
        self._timestamp = time.time()

    def append(self, value: object) -> AttValue:
        """Append to the value; raise AttValueTooLong if the result is too long."""
        data = _to_bytes(value)
        if not data:
            return self
        new_len = len(self._data) + len(data)
        if new_len > self._max_len:
            raise AttValueTooLong(
                f"val > max, len={len(data)}, max={self._max_len}")
        self._capacity = max(self._capacity, new_len)
        self._data += data
        self._timestamp = time.time()
        return self

    def copy(self) -> AttValue:
        """Return an independent copy with the same limits and timestamp."""
        clone = AttValue(self._data, self._max_len)
        clone._capacity = self._capacity
        clone._timestamp = self._timestamp
        return clone

    def __len__(self) -> int:
        return len(self._data)

    def __bytes__(self) -> bytes:
        return self._data

    def __str__(self) -> str:
        return self._data.decode("utf-8", errors="replace")

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self._data[index]
        try:
            return self._data[index]
        except IndexError:
            raise IndexError("attribute value index out of range") from None

    def __iter__(self) -> Iterator[int]:
        return iter(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AttValue):
            return self._data == other._data
        if isinstance(other, (bytes, bytearray, memoryview)):
            return self._data == bytes(other)
        return NotImplemented

    def __iadd__(self, other: object) -> AttValue:
        return self.append(other)

    def __repr__(self) -> str:
        return f"AttValue({self._data!r}, max_len={self._max_len})"