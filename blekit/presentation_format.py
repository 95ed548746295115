"""The Characteristic Presentation Format descriptor (UUID 0x2904)."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass

DESCRIPTOR_UUID = 0x2904
NAMESPACE_BLUETOOTH_SIG = 1

_LAYOUT = struct.Struct("<BbHBH")
SIZE = _LAYOUT.size


class Format(enum.IntEnum):
    """Value formats defined for the presentation format descriptor."""

    BOOLEAN = 1
    UINT2 = 2
    UINT4 = 3
    UINT8 = 4
    UINT12 = 5
    UINT16 = 6
    UINT24 = 7
    UINT32 = 8
    UINT48 = 9
    UINT64 = 10
    UINT128 = 11
    SINT8 = 12
    SINT12 = 13
    SINT16 = 14
    SINT24 = 15
    SINT32 = 16
    SINT48 = 17
    SINT64 = 18
    SINT128 = 19
    FLOAT32 = 20
    FLOAT64 = 21
    SFLOAT16 = 22
    SFLOAT32 = 23
    IEEE20601 = 24
    UTF8 = 25
    UTF16 = 26
    OPAQUE = 27


_RANGES = {
    "format": (0, 0xFF),
    "exponent": (-128, 127),
    "unit": (0, 0xFFFF),
    "namespace": (0, 0xFF),
    "description": (0, 0xFFFF),
}


@dataclass
class PresentationFormat:
    """Fields of a presentation format descriptor; bytes() gives its value."""

    format: int = 0
    exponent: int = 0
    unit: int = 0
    namespace: int = NAMESPACE_BLUETOOTH_SIG
    description: int = 0

    def __setattr__(self, name: str, value: object) -> None:
        if name in _RANGES:
            low, high = _RANGES[name]
            value = int(value)
            if not low <= value <= high:
                raise ValueError(f"{name} must be in {low}..{high}, got {value}")
        super().__setattr__(name, value)

    def to_bytes(self) -> bytes:
        """Return the seven byte packed descriptor value."""
        return _LAYOUT.pack(self.format, self.exponent, self.unit,
                            self.namespace, self.description)

    @classmethod
    def from_bytes(cls, data: bytes) -> PresentationFormat:
        """Parse a packed descriptor value."""
        data = bytes(data)
        if len(data) != SIZE:
            raise ValueError(f"expected {SIZE} bytes, got {len(data)}")
        fmt, exponent, unit, namespace, description = _LAYOUT.unpack(data)
        try:
            fmt = Format(fmt)
        except ValueError:
            pass
        return cls(fmt, exponent, unit, namespace, description)

    def __bytes__(self) -> bytes:
        return self.to_bytes()