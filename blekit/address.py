"""Bluetooth Low Energy device addresses."""

from __future__ import annotations

import enum
import logging

_log = logging.getLogger(__name__)

_ADDRESS_LEN = 6
_UINT64_MAX = (1 << 64) - 1


class AddressType(enum.IntEnum):
    """Kinds of BLE device address."""

    PUBLIC = 0
    RANDOM = 1
    PUBLIC_ID = 2
    RANDOM_ID = 3


def _coerce_type(addr_type: int) -> int:
    value = int(addr_type)
    if not 0 <= value <= 0xFF:
        raise ValueError(f"address type out of range: {addr_type!r}")
    try:
        return AddressType(value)
    except ValueError:
        return value


class BLEAddress:
    """A six byte BLE device address.

    The bytes are held in native (least significant first) order, so
    ``native[0]`` is the last octet of the ``xx:xx:xx:xx:xx:xx`` form.
    Equality compares the address bytes only, not the address type.
    """

    __slots__ = ("_native", "_addr_type")

    def __init__(self, native: bytes = bytes(_ADDRESS_LEN),
                 addr_type: int = AddressType.PUBLIC) -> None:
        native = bytes(native)
        if len(native) != _ADDRESS_LEN:
            raise ValueError(
                f"an address has {_ADDRESS_LEN} bytes, got {len(native)}")
        self._native = native
        self._addr_type = _coerce_type(addr_type)

    @classmethod
    def from_string(cls, text: str,
                    addr_type: int = AddressType.PUBLIC) -> BLEAddress:
        """Build an address from ``"xx:xx:xx:xx:xx:xx"``.

        An empty string gives the blank address. A six byte string is taken
        as raw address bytes in display order. Anything that cannot be parsed
        gives the blank address, which stands for an invalid one.
        """
        raw = text.encode("utf-8")
        if not raw:
            return cls(bytes(_ADDRESS_LEN), addr_type)
        if len(raw) == _ADDRESS_LEN:
            return cls(raw[::-1], addr_type)
        if len(raw) != 17:
            _log.debug("Invalid address '%s'", text)
            return cls(bytes(_ADDRESS_LEN), addr_type)

        parts = text.split(":")
        try:
            if len(parts) != _ADDRESS_LEN:
                raise ValueError(text)
            octets = bytes(int(part, 16) & 0xFF for part in parts)
        except ValueError:
            _log.debug("Invalid address '%s'", text)
            return cls(bytes(_ADDRESS_LEN), addr_type)
        return cls(octets[::-1], addr_type)

    @classmethod
    def from_bytes(cls, data: bytes,
                   addr_type: int = AddressType.PUBLIC) -> BLEAddress:
        """Build an address from six bytes in display (most significant first) order."""
        data = bytes(data)
        if len(data) != _ADDRESS_LEN:
            raise ValueError(
                f"an address has {_ADDRESS_LEN} bytes, got {len(data)}")
        return cls(data[::-1], addr_type)

    @classmethod
    def from_int(cls, value: int,
                 addr_type: int = AddressType.PUBLIC) -> BLEAddress:
        """Build an address from an integer such as ``0xa4c1385def16``.

        Only the low 48 bits are used.
        """
        if not 0 <= value <= _UINT64_MAX:
            raise ValueError(f"address value out of range: {value!r}")
        mask = (1 << (8 * _ADDRESS_LEN)) - 1
        return cls((value & mask).to_bytes(_ADDRESS_LEN, "little"), addr_type)

    @property
    def native(self) -> bytes:
        """The address bytes in native order."""
        return self._native

    @property
    def addr_type(self) -> int:
        """The address type."""
        return self._addr_type

    def __str__(self) -> str:
        return ":".join(f"{octet:02x}" for octet in reversed(self._native))

    def __int__(self) -> int:
        return int.from_bytes(self._native, "little")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BLEAddress):
            return NotImplemented
        return self._native == other._native

    def __hash__(self) -> int:
        return hash(self._native)

    def __repr__(self) -> str:
        return f"BLEAddress.from_string({str(self)!r}, addr_type={self._addr_type!r})"