"""Walking the length-type-value fields of a BLE advertising payload."""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass


class AdType(enum.IntEnum):
    """Advertising data types."""

    FLAGS = 0x01
    INCOMP_UUIDS16 = 0x02
    COMP_UUIDS16 = 0x03
    INCOMP_UUIDS32 = 0x04
    COMP_UUIDS32 = 0x05
    INCOMP_UUIDS128 = 0x06
    COMP_UUIDS128 = 0x07
    INCOMP_NAME = 0x08
    COMP_NAME = 0x09
    TX_PWR_LVL = 0x0A
    SLAVE_ITVL_RANGE = 0x12
    SOL_UUIDS16 = 0x14
    SOL_UUIDS128 = 0x15
    SVC_DATA_UUID16 = 0x16
    PUBLIC_TGT_ADDR = 0x17
    RANDOM_TGT_ADDR = 0x18
    APPEARANCE = 0x19
    ADV_ITVL = 0x1A
    SVC_DATA_UUID32 = 0x20
    SVC_DATA_UUID128 = 0x21
    URI = 0x24
    MFG_DATA = 0xFF


# Size of one entry for field types that hold a list of entries.
_ENTRY_SIZE = {
    AdType.INCOMP_UUIDS16: 2,
    AdType.COMP_UUIDS16: 2,
    AdType.INCOMP_UUIDS32: 4,
    AdType.COMP_UUIDS32: 4,
    AdType.INCOMP_UUIDS128: 16,
    AdType.COMP_UUIDS128: 16,
    AdType.PUBLIC_TGT_ADDR: 6,
    AdType.RANDOM_TGT_ADDR: 6,
}


@dataclass(frozen=True)
class AdField:
    """One field of a payload.

    ``length`` is the raw length byte, which counts the type byte too;
    ``value`` holds the ``length - 1`` data bytes.
    """

    offset: int
    length: int
    ad_type: int
    value: bytes

    @property
    def entries(self) -> int:
        """How many entries this field counts for.

        List types count ``length // entry_size`` (the length byte includes
        the type byte); every other type counts as one.
        """
        size = _ENTRY_SIZE.get(self.ad_type)
        if size is None:
            return 1
        return self.length // size


def iter_fields(payload: bytes) -> Iterator[AdField]:
    """Yield the fields of ``payload`` in order.

    The walk stops when fewer than three bytes remain or when a field's
    length byte reaches past the end of the payload.
    """
    payload = bytes(payload)
    offset = 0
    remaining = len(payload)
    while remaining > 2:
        length = payload[offset]
        if length >= remaining:
            return
        yield AdField(
            offset=offset,
            length=length,
            ad_type=payload[offset + 1],
            value=payload[offset + 2:offset + 1 + length],
        )
        remaining -= 1 + length
        offset += 1 + length


def find_field(payload: bytes, ad_type: int,
               index: int = 0) -> tuple[int, AdField | None]:
    """Find the field of ``ad_type`` holding entry number ``index``.

    ``index`` counts from 1; 0 means the first field of that type. Returns
    the number of entries counted up to and including the field found,
    together with that field, or the total count and None if not found.
    """
    count = 0
    for field in iter_fields(payload):
        if field.ad_type != ad_type:
            continue
        count += field.entries
        if index == 0 or count >= index:
            return count, field
    return count, None


def count_entries(payload: bytes, ad_type: int) -> int:
    """Return the number of entries of ``ad_type`` in ``payload``."""
    return sum(field.entries for field in iter_fields(payload)
               if field.ad_type == ad_type)


_BASE_UUID = 0x0000000000001000800000805F9B34FB
_VALID_BITS = (0, 16, 32, 128)


@dataclass(frozen=True, eq=False)
class ServiceUUID:
    """A 16, 32 or 128 bit UUID; bit size 0 is the empty UUID.

    Short UUIDs compare equal to their expansion on the Bluetooth base UUID.
    """

    value: int = 0
    bits: int = 0

    def __post_init__(self) -> None:
        if self.bits not in _VALID_BITS:
            raise ValueError(f"a UUID has 16, 32 or 128 bits, not {self.bits}")
        if not 0 <= self.value < (1 << self.bits) and not (
                self.bits == 0 and self.value == 0):
            raise ValueError(
                f"UUID value {self.value:#x} does not fit in {self.bits} bits")

    @classmethod
    def from_le_bytes(cls, data: bytes) -> ServiceUUID:
        """Build a UUID from 2, 4 or 16 little-endian bytes; no bytes gives the empty UUID."""
        data = bytes(data)
        bits = 8 * len(data)
        if bits not in _VALID_BITS:
            raise ValueError(f"a UUID has 2, 4 or 16 bytes, got {len(data)}")
        return cls(int.from_bytes(data, "little"), bits)

    def bit_size(self) -> int:
        """The size of the UUID in bits, 0 if empty."""
        return self.bits

    def _expanded(self) -> int | None:
        if self.bits == 0:
            return None
        if self.bits == 128:
            return self.value
        return (self.value << 96) | _BASE_UUID

    def __str__(self) -> str:
        if self.bits == 0:
            return ""
        if self.bits == 16:
            return f"0x{self.value:04x}"
        if self.bits == 32:
            return f"0x{self.value:08x}"
        text = f"{self.value:032x}"
        return "-".join((text[:8], text[8:12], text[12:16], text[16:20],
                         text[20:]))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ServiceUUID):
            return NotImplemented
        return self._expanded() == other._expanded()

    def __hash__(self) -> int:
        return hash(self._expanded())