import pytest

from blekit.ad_fields import (
    AdField,
    AdType,
    ServiceUUID,
    count_entries,
    find_field,
    iter_fields,
)

PAYLOAD = bytes([
    0x02, 0x01, 0x06,
    0x05, 0x03, 0xAD, 0xDE, 0x0D, 0x18,
    0x05, 0x09, 0x74, 0x65, 0x73, 0x74,
])

TWO_UUID_FIELDS = bytes([0x03, 0x03, 0x01, 0x02, 0x03, 0x03, 0x03, 0x04])


def test_iter_fields_walks_every_field():
    fields = list(iter_fields(PAYLOAD))
    assert [f.offset for f in fields] == [0, 3, 9]
    assert [f.ad_type for f in fields] == [AdType.FLAGS, AdType.COMP_UUIDS16,
                                           AdType.COMP_NAME]
    assert fields[0].value == bytes([0x06])
    assert fields[1].value == bytes([0xAD, 0xDE, 0x0D, 0x18])
    assert fields[2].value == b"test"


def test_field_value_length_matches_length_byte():
    for field in iter_fields(PAYLOAD):
        assert len(field.value) == field.length - 1


def test_iter_fields_stops_at_truncated_field():
    payload = bytes([0x02, 0x01, 0x06, 0x09, 0x09, 0x41])
    fields = list(iter_fields(payload))
    assert len(fields) == 1
    assert fields[0].ad_type == AdType.FLAGS
    assert count_entries(payload, AdType.COMP_NAME) == 0


@pytest.mark.parametrize("payload", [b"", bytes([0x02]), bytes([0x02, 0x01])])
def test_short_payload_has_no_fields(payload):
    assert list(iter_fields(payload)) == []
    assert find_field(payload, AdType.FLAGS) == (0, None)


def test_count_uuid16_entries_uses_length_byte():
    assert count_entries(PAYLOAD, AdType.COMP_UUIDS16) == 2


def test_plain_type_counts_once_per_field():
    assert count_entries(PAYLOAD, AdType.COMP_NAME) == 1
    assert count_entries(PAYLOAD, AdType.MFG_DATA) == 0


def test_find_field_first_of_type():
    count, field = find_field(PAYLOAD, AdType.COMP_NAME)
    assert count == 1
    assert field is not None
    assert field.offset == 9
    assert field.value == b"test"


def test_find_field_missing_type():
    assert find_field(PAYLOAD, AdType.MFG_DATA) == (0, None)


def test_find_field_by_index_across_fields():
    count, field = find_field(TWO_UUID_FIELDS, AdType.COMP_UUIDS16, 1)
    assert count == 1
    assert field.offset == 0
    count, field = find_field(TWO_UUID_FIELDS, AdType.COMP_UUIDS16, 2)
    assert count == 2
    assert field.offset == 4
    assert field.value == bytes([0x03, 0x04])


def test_find_field_index_past_end():
    count, field = find_field(TWO_UUID_FIELDS, AdType.COMP_UUIDS16, 3)
    assert field is None
    assert count == count_entries(TWO_UUID_FIELDS, AdType.COMP_UUIDS16)


def test_entries_for_target_address():
    field = AdField(offset=0, length=13, ad_type=AdType.PUBLIC_TGT_ADDR,
                    value=bytes(12))
    assert field.entries == 13 // 6


def test_uuid16_from_le_bytes():
    uuid = ServiceUUID.from_le_bytes(b"\xad\xde")
    assert uuid == ServiceUUID(0xDEAD, 16)
    assert uuid.bit_size() == 16
    assert str(uuid) == "0xdead"


def test_uuid128_string_form():
    uuid = ServiceUUID.from_le_bytes(bytes(range(16)))
    text = str(uuid)
    assert uuid.bit_size() == 128
    assert [len(part) for part in text.split("-")] == [8, 4, 4, 4, 12]
    assert int(text.replace("-", ""), 16) == uuid.value
    assert uuid.value.to_bytes(16, "little") == bytes(range(16))


def test_short_uuid_equals_its_base_expansion():
    short = ServiceUUID(0xDEAD, 16)
    wide = ServiceUUID(0x0000DEAD00001000800000805F9B34FB, 128)
    assert short == wide
    assert hash(short) == hash(wide)
    assert ServiceUUID(0xDEAD, 32) == short


def test_different_uuids_are_not_equal():
    assert not ServiceUUID(0xDEAD, 16) == ServiceUUID(0xBEEF, 16)
    assert not ServiceUUID() == ServiceUUID(0, 16)


def test_empty_uuid():
    uuid = ServiceUUID.from_le_bytes(b"")
    assert uuid.bit_size() == 0
    assert str(uuid) == ""
    assert uuid == ServiceUUID()


@pytest.mark.parametrize("data", [b"\x01", b"\x01\x02\x03", bytes(8)])
def test_from_le_bytes_rejects_bad_length(data):
    with pytest.raises(ValueError):
        ServiceUUID.from_le_bytes(data)


def test_uuid_value_must_fit():
    with pytest.raises(ValueError):
        ServiceUUID(0x10000, 16)
    with pytest.raises(ValueError):
        ServiceUUID(1, 24)