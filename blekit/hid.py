"""HID class constants, report descriptor items and keyboard key maps."""

from __future__ import annotations

import enum
import functools
from dataclasses import dataclass

REPORT_ID_KEYBOARD = 1
REPORT_ID_VOLUME = 3

HID_VERSION_1_11 = 0x0111

HID_CLASS = 3
HID_SUBCLASS_NONE = 0
HID_PROTOCOL_NONE = 0

HID_DESCRIPTOR = 33
HID_DESCRIPTOR_LENGTH = 0x09
REPORT_DESCRIPTOR = 34

GET_REPORT = 0x1
GET_IDLE = 0x2
SET_REPORT = 0x9
SET_IDLE = 0xA

MAX_HID_REPORT_SIZE = 64
KEYMAP_SIZE = 152


class ModifierKey(enum.IntFlag):
    """Keyboard modifier bits."""

    CTRL = 1
    SHIFT = 2
    ALT = 4


class MediaKey(enum.IntEnum):
    """Consumer media keys."""

    NEXT_TRACK = 0
    PREVIOUS_TRACK = 1
    STOP = 2
    PLAY_PAUSE = 3
    MUTE = 4
    VOLUME_UP = 5
    VOLUME_DOWN = 6


class FunctionKey(enum.IntEnum):
    """Non-character keys, numbered after the ASCII range of the key map."""

    F1 = 128
    F2 = 129
    F3 = 130
    F4 = 131
    F5 = 132
    F6 = 133
    F7 = 134
    F8 = 135
    F9 = 136
    F10 = 137
    F11 = 138
    F12 = 139
    PRINT_SCREEN = 140
    SCROLL_LOCK = 141
    CAPS_LOCK = 142
    NUM_LOCK = 143
    INSERT = 144
    HOME = 145
    PAGE_UP = 146
    PAGE_DOWN = 147
    RIGHT_ARROW = 148
    LEFT_ARROW = 149
    DOWN_ARROW = 150
    UP_ARROW = 151


class Layout(enum.Enum):
    """Keyboard layouts a key map exists for."""

    US = "us"
    UK = "uk"


@dataclass(frozen=True)
class KeyMapping:
    """The HID usage and modifier bits that produce one key."""

    usage: int = 0
    modifier: int = 0


class ItemTag(enum.IntEnum):
    """Short item prefixes of a HID report descriptor, without the size bits."""

    # Main items
    INPUT = 0x80
    OUTPUT = 0x90
    FEATURE = 0xB0
    COLLECTION = 0xA0
    END_COLLECTION = 0xC0
    # Global items
    USAGE_PAGE = 0x04
    LOGICAL_MINIMUM = 0x14
    LOGICAL_MAXIMUM = 0x24
    PHYSICAL_MINIMUM = 0x34
    PHYSICAL_MAXIMUM = 0x44
    UNIT_EXPONENT = 0x54
    UNIT = 0x64
    REPORT_SIZE = 0x74
    REPORT_ID = 0x84
    REPORT_COUNT = 0x94
    PUSH = 0xA4
    POP = 0xB4
    # Local items
    USAGE = 0x08
    USAGE_MINIMUM = 0x18
    USAGE_MAXIMUM = 0x28
    DESIGNATOR_INDEX = 0x38
    DESIGNATOR_MINIMUM = 0x48
    DESIGNATOR_MAXIMUM = 0x58
    STRING_INDEX = 0x78
    STRING_MINIMUM = 0x88
    STRING_MAXIMUM = 0x98
    DELIMITER = 0xA8


def short_item(tag: int, size: int) -> int:
    """Return the prefix byte of a short item.

    ``size`` is the size code 0, 1, 2 or 3, meaning 0, 1, 2 or 4 data bytes.
    """
    if not 0 <= size <= 3:
        raise ValueError(f"short item size code must be 0..3, got {size!r}")
    tag = int(tag)
    if not 0 <= tag <= 0xFF or tag & 0x03:
        raise ValueError(f"not a short item tag: {tag:#x}")
    return tag | size


_SHIFT = int(ModifierKey.SHIFT)

_CONTROL = {
    8: KeyMapping(0x2A),   # backspace
    9: KeyMapping(0x2B),   # tab
    10: KeyMapping(0x28),  # return
}

_PUNCTUATION_US = {
    " ": KeyMapping(0x2C),
    "!": KeyMapping(0x1E, _SHIFT),
    '"': KeyMapping(0x34, _SHIFT),
    "#": KeyMapping(0x20, _SHIFT),
    "$": KeyMapping(0x21, _SHIFT),
    "%": KeyMapping(0x22, _SHIFT),
    "&": KeyMapping(0x24, _SHIFT),
    "'": KeyMapping(0x34),
    "(": KeyMapping(0x26, _SHIFT),
    ")": KeyMapping(0x27, _SHIFT),
    "*": KeyMapping(0x25, _SHIFT),
    "+": KeyMapping(0x2E, _SHIFT),
    ",": KeyMapping(0x36),
    "-": KeyMapping(0x2D),
    ".": KeyMapping(0x37),
    "/": KeyMapping(0x38),
    ":": KeyMapping(0x33, _SHIFT),
    ";": KeyMapping(0x33),
    "<": KeyMapping(0x36, _SHIFT),
    "=": KeyMapping(0x2E),
    ">": KeyMapping(0x37, _SHIFT),
    "?": KeyMapping(0x38, _SHIFT),
    "@": KeyMapping(0x1F, _SHIFT),
    "[": KeyMapping(0x2F),
    "\\": KeyMapping(0x31),
    "]": KeyMapping(0x30),
    "^": KeyMapping(0x23, _SHIFT),
    "_": KeyMapping(0x2D, _SHIFT),
    "`": KeyMapping(0x35),
    "{": KeyMapping(0x2F, _SHIFT),
    "|": KeyMapping(0x31, _SHIFT),
    "}": KeyMapping(0x30, _SHIFT),
    "~": KeyMapping(0x35, _SHIFT),
}

_PUNCTUATION_UK = {
    **_PUNCTUATION_US,
    '"': KeyMapping(0x1F, _SHIFT),
    "#": KeyMapping(0x32),
    "@": KeyMapping(0x34, _SHIFT),
    "\\": KeyMapping(0x64),
    "|": KeyMapping(0x64, _SHIFT),
    "~": KeyMapping(0x32, _SHIFT),
}

_FUNCTION_USAGES = {
    FunctionKey.F1: 0x3A,
    FunctionKey.F2: 0x3B,
    FunctionKey.F3: 0x3C,
    FunctionKey.F4: 0x3D,
    FunctionKey.F5: 0x3E,
    FunctionKey.F6: 0x3F,
    FunctionKey.F7: 0x40,
    FunctionKey.F8: 0x41,
    FunctionKey.F9: 0x42,
    FunctionKey.F10: 0x43,
    FunctionKey.F11: 0x44,
    FunctionKey.F12: 0x45,
    FunctionKey.PRINT_SCREEN: 0x46,
    FunctionKey.SCROLL_LOCK: 0x47,
    FunctionKey.CAPS_LOCK: 0x39,
    FunctionKey.NUM_LOCK: 0x53,
    FunctionKey.INSERT: 0x49,
    FunctionKey.HOME: 0x4A,
    FunctionKey.PAGE_UP: 0x4B,
    FunctionKey.PAGE_DOWN: 0x4E,
    FunctionKey.RIGHT_ARROW: 0x4F,
    FunctionKey.LEFT_ARROW: 0x50,
    FunctionKey.DOWN_ARROW: 0x51,
    FunctionKey.UP_ARROW: 0x52,
}


def _alphanumerics() -> dict[int, KeyMapping]:
    table: dict[int, KeyMapping] = {}
    for offset, letter in enumerate("abcdefghijklmnopqrstuvwxyz"):
        table[ord(letter)] = KeyMapping(0x04 + offset)
        table[ord(letter.upper())] = KeyMapping(0x04 + offset, _SHIFT)
    for offset, digit in enumerate("1234567890"):
        table[ord(digit)] = KeyMapping(0x1E + offset)
    return table


@functools.lru_cache(maxsize=None)
def keymap(layout: Layout = Layout.UK) -> tuple[KeyMapping, ...]:
    """Return the key map of ``layout``, indexed by character code or FunctionKey."""
    layout = Layout(layout)
    punctuation = _PUNCTUATION_US if layout is Layout.US else _PUNCTUATION_UK
    table: dict[int, KeyMapping] = dict(_CONTROL)
    table.update(_alphanumerics())
    table.update((ord(char), mapping) for char, mapping in punctuation.items())
    table.update((int(key), KeyMapping(usage))
                 for key, usage in _FUNCTION_USAGES.items())
    blank = KeyMapping()
    return tuple(table.get(code, blank) for code in range(KEYMAP_SIZE))


def lookup(key: str | int, layout: Layout = Layout.UK) -> KeyMapping:
    """Return the mapping for a single character or a key code.

    Raises KeyError for codes the key map does not cover.
    """
    if isinstance(key, str):
        if len(key) != 1:
            raise ValueError(f"expected a single character, got {key!r}")
        code = ord(key)
    else:
        code = int(key)
    if not 0 <= code < KEYMAP_SIZE:
        raise KeyError(key)
    return keymap(layout)[code]


class HidReport:
    """A HID report of at most MAX_HID_REPORT_SIZE bytes.

    Where report IDs are used the first byte is the report ID and the
    length includes it.
    """

    __slots__ = ("_data",)

    def __init__(self, data: bytes = b"") -> None:
        data = bytes(data)
        if len(data) > MAX_HID_REPORT_SIZE:
            raise ValueError(
                f"report of {len(data)} bytes exceeds {MAX_HID_REPORT_SIZE}")
        self._data = data

    def __len__(self) -> int:
        return len(self._data)

    def __bytes__(self) -> bytes:
        return self._data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HidReport):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)

    def __repr__(self) -> str:
        return f"HidReport({self._data!r})"