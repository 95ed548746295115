"""Helpers for Bluetooth Low Energy addresses, attribute values, advertising payloads, presentation formats and HID data."""

__version__ = "0.1.0"

__all__ = [
    "address",
    "att_value",
    "hid",
    "presentation_format",
    "ad_fields",
    "advertisement",
]