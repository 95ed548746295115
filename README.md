# blekit

Pure-Python helpers for Bluetooth Low Energy data. It parses and builds the
bytes that a BLE stack hands you or expects: device addresses, attribute
values, advertising payloads, the Characteristic Presentation Format
descriptor and HID keyboard tables.

## Install

```
pip install blekit
```

## What is in it

- `blekit.address`: `BLEAddress` and `AddressType`. An address keeps its six
  bytes in native (least significant first) order, available as `native`, and
  prints as `aa:bb:cc:dd:ee:ff`. Build one with `BLEAddress.from_string`,
  `BLEAddress.from_bytes` (display order) or `BLEAddress.from_int`; `int()`
  gives the integer form. A string that cannot be parsed gives the blank
  address `00:00:00:00:00:00`. Equality compares the bytes only, not
  `addr_type`.
- `blekit.att_value`: `AttValue`, a byte container for attribute values
  limited to `max_size` bytes (at most 512). `set_value`, `append` and `+=`
  accept bytes, strings, other `AttValue`s or iterables of ints, and raise
  `AttValueTooLong` when the result would be too long. `timestamp` records the
  time of the last change; `copy()` gives an independent copy.
- `blekit.ad_fields`: low-level payload walking with `AdType`, `AdField`,
  `iter_fields`, `find_field` and `count_entries`, plus `ServiceUUID`, a 16,
  32 or 128 bit UUID where short UUIDs compare equal to their expansion on the
  Bluetooth base UUID.
- `blekit.advertisement`: `AdvertisedDevice`. Give it a payload with
  `set_payload` (pass `append=True` for scan response data) and read the
  `name`, `adv_flags`, `appearance`, `adv_interval`, `min_interval`,
  `max_interval`, `tx_power`, `uri`, `manufacturer_data_count`,
  `service_data_count`, `service_uuid_count` and `target_address_count`
  properties, or call `manufacturer_data(i)`, `service_data(i_or_uuid)`,
  `service_data_uuid(i)`, `service_uuid(i)`, `target_address(i)`,
  `payload_by_type(t)`, `is_advertising_service(uuid)`, the `has_*` checks and
  `is_connectable()`.
- `blekit.presentation_format`: `PresentationFormat` (a dataclass with range
  checked fields) and `Format`. `bytes()` gives the packed seven byte value;
  `PresentationFormat.from_bytes` parses one.
- `blekit.hid`: report descriptor item tags (`ItemTag`, `short_item`),
  keyboard key maps for US and UK layouts (`keymap`, `lookup`, `Layout`,
  `KeyMapping`), `ModifierKey`, `MediaKey`, `FunctionKey`, and `HidReport`
  (at most 64 bytes).

## Examples

```python
from blekit.address import BLEAddress

addr = BLEAddress.from_string("0a:1b:2c:3d:4e:5f")
print(str(addr))        # 0a:1b:2c:3d:4e:5f
print(hex(int(addr)))   # 0xa1b2c3d4e5f
```

```python
from blekit.advertisement import AdvertisedDevice

device = AdvertisedDevice()
device.set_payload(bytes([0x02, 0x01, 0x06, 0x05, 0x09]) + b"Demo")
print(device.name)        # Demo
print(device.adv_flags)   # 6
```

```python
from blekit.att_value import AttValue

value = AttValue(b"Hello", max_len=8)
value += b"!"
print(bytes(value))         # b'Hello!'
```

```python
from blekit.hid import Layout, lookup

mapping = lookup("A", Layout.US)
print(mapping.usage, mapping.modifier)   # 4 2
```

```python
from blekit.presentation_format import Format, PresentationFormat

fmt = PresentationFormat(format=Format.UTF8)
print(bytes(fmt).hex())     # 19000000010000
```

## What it does not do

blekit does not talk to a Bluetooth radio. It does not scan, advertise,
connect, run a GATT server or client, or pair devices; it only works on the
data those operations produce or consume.

## Tests

```
pip install blekit[test]
pytest
```