"""A device seen while scanning, and what its advertising payload holds."""

from __future__ import annotations

import logging

from blekit.ad_fields import AdField, AdType, ServiceUUID, count_entries, find_field
from blekit.address import BLEAddress

_log = logging.getLogger(__name__)

NO_RSSI = -9999
NO_TX_POWER = -99
_DEFAULT_PAYLOAD_LEN = 62
_ADDRESS_ENTRY_LEN = 6

# Field lengths (including the type byte) of fixed size fields.
_FLAGS_FIELD_LEN = 2
_APPEARANCE_FIELD_LEN = 3
_ADV_ITVL_FIELD_LEN = 3
_ITVL_RANGE_FIELD_LEN = 5
_TX_PWR_FIELD_LEN = 2

# Legacy advertising report event types.
_EVTYPE_ADV_IND = 0
_EVTYPE_DIR_IND = 1
# Extended advertising event type bits.
_ADV_CONN_MASK = 0x01
_ADV_DIRECT_MASK = 0x04

_SERVICE_UUID_TYPES = (
    AdType.INCOMP_UUIDS16,
    AdType.COMP_UUIDS16,
    AdType.INCOMP_UUIDS32,
    AdType.COMP_UUIDS32,
    AdType.INCOMP_UUIDS128,
    AdType.COMP_UUIDS128,
)

_SERVICE_DATA_TYPES = (
    (AdType.SVC_DATA_UUID16, 2),
    (AdType.SVC_DATA_UUID32, 4),
    (AdType.SVC_DATA_UUID128, 16),
)


def _uuid_size_for(ad_type: int) -> int:
    if ad_type < AdType.INCOMP_UUIDS32:
        return 2
    if ad_type < AdType.INCOMP_UUIDS128:
        return 4
    return 16


class AdvertisedDevice:
    """A device found by a scan, with the advertisement and scan response it sent."""

    def __init__(self, address: BLEAddress | None = None, adv_type: int = 0,
                 rssi: int = NO_RSSI, is_legacy: bool = True) -> None:
        self.address = address if address is not None else BLEAddress()
        self.adv_type = adv_type
        self.rssi = rssi
        self.is_legacy = is_legacy
        self._payload = bytes(_DEFAULT_PAYLOAD_LEN)
        self._adv_length = 0

    # Payload handling

    def set_payload(self, payload: bytes, append: bool = False) -> None:
        """Store advertising data, or append scan response data to it."""
        data = bytes(payload)
        if append:
            self._payload += data
        else:
            self._adv_length = len(data)
            self._payload = data

    @property
    def payload(self) -> bytes:
        """The full payload: advertisement followed by any scan response."""
        return self._payload

    @property
    def adv_length(self) -> int:
        """Number of payload bytes that came from the advertisement itself."""
        return self._adv_length

    @property
    def address_type(self) -> int:
        """The type of the device address."""
        return self.address.addr_type

    def _field(self, ad_type: int, index: int = 0) -> AdField | None:
        return find_field(self._payload, ad_type, index)[1]

    def _fixed_field(self, ad_type: int, field_len: int) -> bytes | None:
        field = self._field(ad_type)
        if field is None or field.length != field_len:
            return None
        return field.value

    def _count(self, ad_type: int) -> int:
        return count_entries(self._payload, ad_type)

    # Fixed size fields

    @property
    def adv_flags(self) -> int:
        """The advertising flags, 0 if absent."""
        value = self._fixed_field(AdType.FLAGS, _FLAGS_FIELD_LEN)
        return value[0] if value is not None else 0

    @property
    def appearance(self) -> int:
        """The advertised appearance, 0 if absent."""
        value = self._fixed_field(AdType.APPEARANCE, _APPEARANCE_FIELD_LEN)
        return int.from_bytes(value, "little") if value is not None else 0

    @property
    def adv_interval(self) -> int:
        """The advertising interval in 0.625 ms units, 0 if absent."""
        value = self._fixed_field(AdType.ADV_ITVL, _ADV_ITVL_FIELD_LEN)
        return int.from_bytes(value, "little") if value is not None else 0

    @property
    def min_interval(self) -> int:
        """The preferred minimum connection interval in 1.25 ms units, 0 if absent."""
        value = self._fixed_field(AdType.SLAVE_ITVL_RANGE, _ITVL_RANGE_FIELD_LEN)
        return int.from_bytes(value[0:2], "little") if value is not None else 0

    @property
    def max_interval(self) -> int:
        """The preferred maximum connection interval in 1.25 ms units, 0 if absent."""
        value = self._fixed_field(AdType.SLAVE_ITVL_RANGE, _ITVL_RANGE_FIELD_LEN)
        return int.from_bytes(value[2:4], "little") if value is not None else 0

    @property
    def tx_power(self) -> int:
        """The advertised transmit power level, -99 if absent."""
        value = self._fixed_field(AdType.TX_PWR_LVL, _TX_PWR_FIELD_LEN)
        if value is None:
            return NO_TX_POWER
        return int.from_bytes(value, "little", signed=True)

    # Variable size fields

    def manufacturer_data(self, index: int = 0) -> bytes:
        """The manufacturer data set at ``index``, empty if none."""
        field = self._field(AdType.MFG_DATA, index + 1)
        if field is not None and field.length > 1:
            return field.value
        return b""

    @property
    def manufacturer_data_count(self) -> int:
        """How many manufacturer data sets the payload holds."""
        return self._count(AdType.MFG_DATA)

    @property
    def uri(self) -> str:
        """The advertised URI, empty if none."""
        field = self._field(AdType.URI)
        if field is not None and field.length > 1:
            return field.value.decode("utf-8", errors="replace")
        return ""

    def payload_by_type(self, ad_type: int) -> bytes:
        """The data of the first field of ``ad_type``, empty if none."""
        field = self._field(ad_type)
        if field is not None and field.length > 1:
            return field.value
        return b""

    @property
    def name(self) -> str:
        """The complete name, else the shortened name, else empty."""
        field = self._field(AdType.COMP_NAME)
        if field is None:
            field = self._field(AdType.INCOMP_NAME)
        if field is not None and field.length > 1:
            return field.value.decode("utf-8", errors="replace")
        return ""

    # Target addresses

    @property
    def target_address_count(self) -> int:
        """How many public and random target addresses are advertised."""
        return (self._count(AdType.PUBLIC_TGT_ADDR)
                + self._count(AdType.RANDOM_TGT_ADDR))

    def target_address(self, index: int = 0) -> BLEAddress:
        """The target address at ``index``, or the blank address."""
        index += 1
        count, field = find_field(self._payload, AdType.PUBLIC_TGT_ADDR, index)
        if count < index:
            index -= count
            count, field = find_field(self._payload, AdType.RANDOM_TGT_ADDR, index)

        if count > 0 and field is not None:
            if field.length < index * _ADDRESS_ENTRY_LEN:
                index -= count - field.length // _ADDRESS_ENTRY_LEN
            if field.length > index * _ADDRESS_ENTRY_LEN:
                start = (index - 1) * _ADDRESS_ENTRY_LEN
                return BLEAddress.from_bytes(
                    field.value[start:start + _ADDRESS_ENTRY_LEN])
        return BLEAddress()

    # Service data

    def _find_service_data(self, index: int) -> tuple[AdField, int] | None:
        index += 1
        for ad_type, size in _SERVICE_DATA_TYPES:
            found, field = find_field(self._payload, ad_type, index)
            if found == index and field is not None:
                return field, size
            index -= found
        return None

    def service_data(self, key: int | ServiceUUID = 0) -> bytes:
        """Service data by position or by service UUID, empty if none."""
        if isinstance(key, ServiceUUID):
            return self._service_data_for(key)
        found = self._find_service_data(key)
        if found is None:
            return b""
        field, size = found
        return field.value[size:]

    def _service_data_for(self, uuid: ServiceUUID) -> bytes:
        uuid_bytes = uuid.bit_size() // 8
        index = 0
        found = self._find_service_data(index)
        while found is not None:
            field, size = found
            if (size == uuid_bytes and len(field.value) >= size
                    and ServiceUUID.from_le_bytes(field.value[:size]) == uuid):
                return field.value[size:]
            index += 1
            found = self._find_service_data(index)
        _log.info("No service data found")
        return b""

    @property
    def service_data_count(self) -> int:
        """How many service data fields the payload holds."""
        return sum(self._count(ad_type) for ad_type, _ in _SERVICE_DATA_TYPES)

    def service_data_uuid(self, index: int = 0) -> ServiceUUID:
        """The UUID of the service data at ``index``, or the empty UUID."""
        found = self._find_service_data(index)
        if found is not None:
            field, size = found
            if len(field.value) >= size:
                return ServiceUUID.from_le_bytes(field.value[:size])
        return ServiceUUID()

    # Service UUIDs

    def service_uuid(self, index: int = 0) -> ServiceUUID:
        """The advertised service UUID at ``index``, or the empty UUID."""
        index += 1
        count = 0
        field: AdField | None = None
        uuid_bytes = 0
        for ad_type in _SERVICE_UUID_TYPES:
            count, field = find_field(self._payload, ad_type, index)
            if count >= index:
                uuid_bytes = _uuid_size_for(ad_type)
                break
            index -= count

        if uuid_bytes and field is not None:
            # Earlier fields of the same type hold the entries before this one.
            if field.length < index * uuid_bytes:
                index -= count - field.length // uuid_bytes
            if field.length > uuid_bytes * index:
                start = uuid_bytes * (index - 1)
                return ServiceUUID.from_le_bytes(
                    field.value[start:start + uuid_bytes])
        return ServiceUUID()

    @property
    def service_uuid_count(self) -> int:
        """How many service UUIDs are advertised."""
        return sum(self._count(ad_type) for ad_type in _SERVICE_UUID_TYPES)

    def is_advertising_service(self, uuid: ServiceUUID) -> bool:
        """Whether ``uuid`` is among the advertised service UUIDs."""
        return any(uuid == self.service_uuid(i)
                   for i in range(self.service_uuid_count))

    # Presence checks

    def has_type(self, ad_type: int) -> bool:
        return self._count(ad_type) > 0

    def has_name(self) -> bool:
        return self.has_type(AdType.COMP_NAME) or self.has_type(AdType.INCOMP_NAME)

    def has_appearance(self) -> bool:
        return self.has_type(AdType.APPEARANCE)

    def has_manufacturer_data(self) -> bool:
        return self.has_type(AdType.MFG_DATA)

    def has_uri(self) -> bool:
        return self.has_type(AdType.URI)

    def has_target_address(self) -> bool:
        return (self.has_type(AdType.PUBLIC_TGT_ADDR)
                or self.has_type(AdType.RANDOM_TGT_ADDR))

    def has_conn_params(self) -> bool:
        return self.has_type(AdType.SLAVE_ITVL_RANGE)

    def has_adv_interval(self) -> bool:
        return self.has_type(AdType.ADV_ITVL)

    def has_tx_power(self) -> bool:
        return self.has_type(AdType.TX_PWR_LVL)

    def has_rssi(self) -> bool:
        return self.rssi != NO_RSSI

    def has_service_data(self) -> bool:
        return self.service_data_count > 0

    def has_service_uuid(self) -> bool:
        return self.service_uuid_count > 0

    # Advertisement kind

    def is_connectable(self) -> bool:
        """Whether the device advertises as connectable."""
        if self.is_legacy:
            return self.adv_type in (_EVTYPE_ADV_IND, _EVTYPE_DIR_IND)
        return bool(self.adv_type & _ADV_CONN_MASK
                    or self.adv_type & _ADV_DIRECT_MASK)

    def is_legacy_advertisement(self) -> bool:
        """True for a legacy advertisement, False for an extended one."""
        return self.is_legacy

    def __str__(self) -> str:
        parts = [f"Name: {self.name}, Address: {self.address}"]
        if self.has_appearance():
            parts.append(f", appearance: {self.appearance}")
        if self.has_manufacturer_data():
            parts.append(f", manufacturer data: {self.manufacturer_data().hex()}")
        if self.has_service_uuid():
            parts.append(f", serviceUUID: {self.service_uuid()}")
        if self.has_tx_power():
            parts.append(f", txPower: {self.tx_power}")
        if self.has_service_data():
            parts.append("\nService Data:")
            for i in range(self.service_data_count):
                data = self.service_data(i).decode("utf-8", errors="replace")
                parts.append(f"\nUUID: {self.service_data_uuid(i)}, Data: {data}")
        return "".join(parts)

    def __repr__(self) -> str:
        return (f"AdvertisedDevice(address={self.address!r}, "
                f"adv_type={self.adv_type!r}, rssi={self.rssi!r})")