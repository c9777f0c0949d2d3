import pytest

from emgcore.hal.usb import UsbDeviceConfig, UsbEmgDevice, UsbError, UsbErrorKind


def test_default_config_ids():
    config = UsbDeviceConfig()
    assert config.vendor_id == 0x1234
    assert config.product_id == 0x5678
    assert config.timeout_ms == 1000
    assert config.buffer_size == 1024


def test_with_default_config_matches_default():
    device = UsbEmgDevice.with_default_config()
    assert device.config == UsbDeviceConfig()
    assert not device.is_connected


def test_read_before_connect_fails():
    device = UsbEmgDevice.with_default_config()
    with pytest.raises(UsbError) as info:
        device.read_raw_data()
    assert info.value.kind is UsbErrorKind.READ_ERROR
    assert str(info.value) == "Read error: Device not connected"


def test_read_after_connect_returns_packet():
    device = UsbEmgDevice(UsbDeviceConfig(vendor_id=0x0001, product_id=0x0002))
    device.connect()
    assert device.is_connected
    raw = device.read_raw_data()
    assert len(raw) == 32


def test_parse_short_packet_fails():
    device = UsbEmgDevice.with_default_config()
    with pytest.raises(UsbError) as info:
        device.parse_emg_data(bytes(31))
    assert "Insufficient data" in str(info.value)


def test_parse_midscale_is_zero():
    device = UsbEmgDevice.with_default_config()
    assert device.parse_emg_data(bytes([128] * 32)) == [0.0] * 8


def test_parse_zero_bytes_is_negative_full_scale():
    device = UsbEmgDevice.with_default_config()
    assert device.parse_emg_data(bytes(32)) == [-1.0] * 8


def test_parse_uses_first_byte_of_each_channel():
    device = UsbEmgDevice.with_default_config()
    raw = bytearray([128] * 32)
    for offset in (1, 2, 3):
        raw[offset] = 255
    values = device.parse_emg_data(bytes(raw))
    assert values[0] == values[1]
    raw[4] = 255
    assert device.parse_emg_data(bytes(raw))[1] > values[1]


def test_parse_values_stay_in_range():
    device = UsbEmgDevice.with_default_config()
    values = device.parse_emg_data(bytes(range(0, 256, 8)))
    assert len(values) == 8
    assert all(-1.0 <= v < 1.0 for v in values)


def test_error_messages():
    assert str(UsbError(UsbErrorKind.DEVICE_NOT_FOUND)) == "USB device not found"
    assert str(UsbError(UsbErrorKind.CONNECTION_FAILED, "busy")) == "Connection failed: busy"