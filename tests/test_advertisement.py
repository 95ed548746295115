import pytest

from blekit.ad_fields import AdType, ServiceUUID
from blekit.address import BLEAddress
from blekit.advertisement import AdvertisedDevice


def _field(ad_type, data):
    return bytes([len(data) + 1, ad_type]) + data


def _device(*fields, **kwargs):
    device = AdvertisedDevice(**kwargs)
    device.set_payload(b"".join(fields))
    return device


def test_default_device_has_no_data():
    device = AdvertisedDevice()
    assert device.payload == bytes(62)
    assert device.name == ""
    assert not device.has_name()
    assert device.adv_flags == 0
    assert device.tx_power == -99
    assert not device.has_rssi()
    assert device.address == BLEAddress()


def test_rssi_presence():
    assert AdvertisedDevice(rssi=-50).has_rssi()
    assert AdvertisedDevice(rssi=-50).rssi == -50


def test_flags_and_wrong_length():
    assert _device(_field(AdType.FLAGS, b"\x06")).adv_flags == 6
    assert _device(_field(AdType.FLAGS, b"\x06\x00")).adv_flags == 0


def test_appearance_and_intervals():
    device = _device(
        _field(AdType.APPEARANCE, b"\x40\x02"),
        _field(AdType.ADV_ITVL, b"\x20\x00"),
        _field(AdType.SLAVE_ITVL_RANGE, b"\x06\x00\x0c\x00"),
    )
    assert device.appearance == 0x0240
    assert device.adv_interval == 0x20
    assert device.min_interval == 0x06
    assert device.max_interval == 0x0C
    assert device.has_appearance()
    assert device.has_adv_interval()
    assert device.has_conn_params()


def test_tx_power_is_signed():
    device = _device(_field(AdType.TX_PWR_LVL, b"\xf4"))
    assert device.has_tx_power()
    assert device.tx_power == -12


def test_name_prefers_complete():
    device = _device(_field(AdType.INCOMP_NAME, b"sh"),
                     _field(AdType.COMP_NAME, b"full"))
    assert device.name == "full"
    assert _device(_field(AdType.INCOMP_NAME, b"sh")).name == "sh"


def test_manufacturer_data_by_index():
    device = _device(_field(AdType.MFG_DATA, b"\x01\x02"),
                     _field(AdType.MFG_DATA, b"\x03"))
    assert device.manufacturer_data_count == 2
    assert device.manufacturer_data() == b"\x01\x02"
    assert device.manufacturer_data(1) == b"\x03"
    assert device.manufacturer_data(2) == b""


def test_uri_and_payload_by_type():
    device = _device(_field(AdType.URI, b"\x16//x"))
    assert device.has_uri()
    assert device.uri == "\x16//x"
    assert device.payload_by_type(AdType.URI) == b"\x16//x"
    assert device.payload_by_type(AdType.COMP_NAME) == b""


def test_truncated_field_is_ignored():
    payload = _field(AdType.COMP_NAME, b"ok") + bytes([10, AdType.URI]) + b"xy"
    device = _device(payload)
    assert device.name == "ok"
    assert not device.has_uri()
    assert device.uri == ""


def test_service_uuids_16_bit_list():
    device = _device(_field(AdType.COMP_UUIDS16, b"\xad\xde\xef\xbe"))
    assert device.service_uuid_count == 2
    assert device.service_uuid(0) == ServiceUUID(0xDEAD, 16)
    assert device.service_uuid(1) == ServiceUUID(0xBEEF, 16)
    assert device.service_uuid(2).bit_size() == 0
    assert device.has_service_uuid()


def test_service_uuids_across_types():
    long_uuid = bytes(range(16))
    device = _device(_field(AdType.INCOMP_UUIDS16, b"\xad\xde"),
                     _field(AdType.COMP_UUIDS128, long_uuid))
    assert device.service_uuid_count == 2
    assert device.service_uuid(1) == ServiceUUID.from_le_bytes(long_uuid)
    assert device.is_advertising_service(ServiceUUID(0xDEAD, 16))
    assert not device.is_advertising_service(ServiceUUID(0xBEEF, 16))


def test_service_data():
    device = _device(_field(AdType.SVC_DATA_UUID16, b"\xad\xde" + b"hi"),
                     _field(AdType.SVC_DATA_UUID32, b"\x01\x00\x00\x00" + b"yo"))
    assert device.service_data_count == 2
    assert device.has_service_data()
    assert device.service_data(0) == b"hi"
    assert device.service_data(1) == b"yo"
    assert device.service_data(2) == b""
    assert device.service_data_uuid(0) == ServiceUUID(0xDEAD, 16)
    assert device.service_data_uuid(1) == ServiceUUID(1, 32)
    assert device.service_data_uuid(2).bit_size() == 0
    assert device.service_data(ServiceUUID(0xDEAD, 16)) == b"hi"
    assert device.service_data(ServiceUUID(1, 32)) == b"yo"
    assert device.service_data(ServiceUUID(0xBEEF, 16)) == b""


def test_target_addresses():
    first = b"\x11\x22\x33\x44\x55\x66"
    second = b"\x01\x02\x03\x04\x05\x06"
    device = _device(_field(AdType.PUBLIC_TGT_ADDR, first),
                     _field(AdType.RANDOM_TGT_ADDR, second))
    assert device.has_target_address()
    assert device.target_address_count == 2
    assert device.target_address(0) == BLEAddress.from_bytes(first)
    assert str(device.target_address(0)) == "11:22:33:44:55:66"
    assert device.target_address(1) == BLEAddress.from_bytes(second)
    assert device.target_address(2) == BLEAddress()


def test_scan_response_is_appended():
    device = _device(_field(AdType.FLAGS, b"\x06"))
    device.set_payload(_field(AdType.COMP_NAME, b"dev"), append=True)
    assert device.adv_length == 3
    assert len(device.payload) == 8
    assert device.name == "dev"
    assert device.adv_flags == 6


def test_has_type():
    device = _device(_field(0x30, b"\x01"))
    assert device.has_type(0x30)
    assert not device.has_type(0x31)


@pytest.mark.parametrize("adv_type, legacy, expected", [
    (0, True, True),
    (1, True, True),
    (3, True, False),
    (1, False, True),
    (4, False, True),
    (2, False, False),
])
def test_is_connectable(adv_type, legacy, expected):
    device = AdvertisedDevice(adv_type=adv_type, is_legacy=legacy)
    assert device.is_connectable() is expected
    assert device.is_legacy_advertisement() is legacy


def test_address_type():
    address = BLEAddress.from_string("01:02:03:04:05:06", 1)
    assert AdvertisedDevice(address=address).address_type == 1


def test_str():
    address = BLEAddress.from_string("01:02:03:04:05:06")
    device = _device(_field(AdType.COMP_NAME, b"foo"),
                     _field(AdType.MFG_DATA, b"\x01\xab"),
                     _field(AdType.SVC_DATA_UUID16, b"\xad\xde" + b"hi"),
                     address=address)
    text = str(device)
    assert text.startswith("Name: foo, Address: 01:02:03:04:05:06")
    assert ", manufacturer data: 01ab" in text
    assert text.endswith("\nService Data:\nUUID: 0xdead, Data: hi")